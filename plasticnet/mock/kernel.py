"""
Mock simulation kernel.

Connectivity is drawn exactly as a real kernel would have to draw it to be
reproducible: one NumPy RNG seeded with the master seed, the same on every
MPI process, drawing the complete connection matrix of each projection in
creation order, of which each process keeps the columns of its local
postsynaptic units. Running the network only produces random data.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

import numpy as np

from .. import recording
from ..kernel import BaseKernel
from .recording import Recorder

logger = logging.getLogger("PlasticNet")

DEFAULT_TIMESTEP = 1e-4  # s


class MockKernel(BaseKernel):
    """
    Kernel that instantiates connectivity but does not integrate any dynamics.

    `fail_run` makes run() report failure, for testing the handling of
    kernel failures.
    """

    def __init__(self, timestep=DEFAULT_TIMESTEP, fail_run=False):
        BaseKernel.__init__(self)
        self.dt = timestep
        self.fail_run = fail_run

    def _setup(self):
        seed = self.context.seed
        self.rng = np.random.RandomState(seed)
        # data generation need not be reproducible across process counts
        self.data_rng = np.random.RandomState((seed + self.context.mpi_rank) % 2**32)
        self.connections = {}
        self.synapse_parameters = {}
        self._recorders = []

    def _create_population(self, population):
        logger.debug("Created %s" % population.describe())

    def _connect(self, projection):
        matrix = projection.connector.connection_matrix(
            projection.pre.size, projection.post.size, self.rng,
            mask_local=projection.post.mask_local)
        self.connections[projection.uid] = matrix
        self._set_synapse_type(projection, projection.synapse_type)
        logger.debug("Connected %s: %d local synapses" % (projection.label, matrix.sum()))

    def _set_synapse_type(self, projection, synapse_type):
        parameters = getattr(synapse_type, "native_parameters", None) or dict(synapse_type.parameters)
        self.synapse_parameters[projection.uid] = (type(synapse_type).__name__, parameters)

    def _record(self, binding):
        self._recorders.append(Recorder(binding, self.data_rng, self.dt))

    def _run(self, duration):
        if self.fail_run:
            logger.error("Mock kernel: simulated run failure")
            return False
        for recorder in self._recorders:
            recorder.advance(duration)
        return True

    def _local_nonzero(self, projection):
        return np.count_nonzero(self.connections[projection.uid])

    def _end(self):
        for recorder in self._recorders:
            recording.write_block(recorder.binding, recorder.get_block())
        self._recorders = []
