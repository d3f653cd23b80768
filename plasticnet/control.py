# encoding: utf-8
"""
Execution of an experiment across MPI processes.

Classes:
    RunResult
    ExecutionCoordinator

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

from . import errors
from .standardmodels.synapses import StaticSynapse, PairRule, AssociativeRule
from .utility import Timer

logger = logging.getLogger("PlasticNet")

# order in which synapse classes are reduced; every process must follow it
SYNAPSE_CLASSES = (StaticSynapse, PairRule, AssociativeRule)


class RunResult(object):
    """
    Outcome of a run on one MPI process.

    `local_counts` maps projection labels to the number of synapses on this
    process; `global_counts` holds the sums over all processes and is only
    filled on the reporting process (None elsewhere).
    """

    def __init__(self, success, local_counts, global_counts, elapsed_time):
        self.success = success
        self.local_counts = local_counts
        self.global_counts = global_counts
        self.elapsed_time = elapsed_time

    @property
    def status(self):
        return errors.EXIT_SUCCESS if self.success else errors.EXIT_FAILURE

    def __repr__(self):
        return "RunResult(success=%s, local_counts=%s, global_counts=%s)" % (
            self.success, self.local_counts, self.global_counts)


class ExecutionCoordinator(object):
    """
    Runs the network on every process in lock-step and reduces the synapse
    counts to the reporting process.
    """

    def __init__(self, context, kernel):
        self.context = context
        self.kernel = kernel

    def execute(self, network, duration):
        self.context.barrier()
        timer = Timer()
        success = self.kernel.run(duration)
        elapsed_time = timer.elapsed_time()
        if not success:
            logger.error("Simulation kernel reported a failure on rank %d" % self.context.mpi_rank)
        if self.context.is_root:
            logger.info("Execution time = %g sec" % elapsed_time)

        local_counts, global_counts = self.count_synapses(network)
        if self.context.is_root:
            for label, count in global_counts.items():
                logger.info("Number of non-zero synapses in %s: %d" % (label, count))
        else:
            global_counts = None
        return RunResult(success, local_counts, global_counts, elapsed_time)

    def count_synapses(self, network):
        """
        Sum-reduce the local synapse counts of every projection. Synapse
        classes absent from the network are skipped.
        """
        groups = network.projections_by_synapse_class()
        local_counts = {}
        global_counts = {}
        for synapse_class in SYNAPSE_CLASSES:
            if synapse_class not in groups:
                logger.debug("No %s projections, skipping reduction" % synapse_class.__name__)
                continue
            for projection in groups[synapse_class]:
                local = self.kernel.local_nonzero(projection)
                local_counts[projection.label] = local
                global_counts[projection.label] = self.context.reduce_sum(local)
        return local_counts, global_counts
