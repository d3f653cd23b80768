# encoding: utf-8
"""
Interface between the experiment harness and a simulation kernel.

The kernel owns the neuron and synapse dynamics, the spike exchange between
MPI processes and the sampling of recorded variables. The harness only
declares objects to it, hands it parameters, asks it to run for a given time
and queries how many synapses it instantiated locally.

Backends derive from BaseKernel and implement the `_`-prefixed hooks; see
:mod:`plasticnet.mock` for an implementation that does not simulate anything.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

from . import errors

logger = logging.getLogger("PlasticNet")


class BaseKernel(object):
    """Base class for simulation kernels."""

    def __init__(self):
        self.context = None
        self.running = False
        self.t = 0.0
        self.populations = []
        self.projections = []
        self.recorders = []

    def setup(self, context):
        """Attach the kernel to an initialised SimulationContext."""
        if not context.active:
            raise errors.ContextError("kernel set up with an inactive context")
        self.context = context
        self.running = False
        self.t = 0.0
        self.populations = []
        self.projections = []
        self.recorders = []
        self._setup()
        return self

    def _require_setup(self):
        if self.context is None:
            raise errors.SequenceError("kernel used before setup()")

    def _require_not_running(self, what):
        if self.running:
            raise errors.SequenceError("cannot %s once the simulation has started" % what)

    def create_population(self, population):
        """
        Instantiate `population`; its uid is the number of populations
        created before it.
        """
        self._require_setup()
        self._require_not_running("create populations")
        population.uid = len(self.populations)
        population.set_partition(self.context.mpi_rank, self.context.num_processes)
        self.populations.append(population)
        self._create_population(population)
        return population.uid

    def connect(self, projection):
        """
        Instantiate the synapses of `projection`; its uid is the number of
        projections created before it.
        """
        self._require_setup()
        self._require_not_running("create projections")
        for population in (projection.pre, projection.post):
            if population.uid is None:
                raise errors.ConnectionError(
                    "population '%s' has not been created in this kernel" % population.label)
        projection.uid = len(self.projections)
        self.projections.append(projection)
        self._connect(projection)
        return projection.uid

    def set_synapse_type(self, projection, synapse_type):
        """Change the synapse type, and hence the plasticity, of `projection`."""
        self._require_setup()
        self._require_not_running("change synapse types")
        projection.set_synapse_type(synapse_type)
        self._set_synapse_type(projection, synapse_type)

    def record(self, binding):
        self._require_setup()
        self._require_not_running("add recorders")
        self.recorders.append(binding)
        self._record(binding)

    def run(self, duration):
        """
        Advance the simulation by `duration` seconds. Blocks until done and
        returns True on success, False if the kernel reports a failure.
        """
        self._require_setup()
        if duration <= 0:
            raise ValueError("duration must be positive, not %g" % duration)
        self.running = True
        for projection in self.projections:
            projection.freeze()
        success = self._run(duration)
        if success:
            self.t += duration
        return success

    def local_nonzero(self, projection):
        """Number of synapses of `projection` instantiated on this MPI node."""
        self._require_setup()
        return int(self._local_nonzero(projection))

    def end(self):
        """Write recorded data and release kernel resources."""
        self._require_setup()
        self._end()
        self.context = None

    # hooks for backends

    def _setup(self):
        pass

    def _create_population(self, population):
        raise NotImplementedError

    def _connect(self, projection):
        raise NotImplementedError

    def _set_synapse_type(self, projection, synapse_type):
        pass

    def _record(self, binding):
        raise NotImplementedError

    def _run(self, duration):
        raise NotImplementedError

    def _local_nonzero(self, projection):
        raise NotImplementedError

    def _end(self):
        pass
