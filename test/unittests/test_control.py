"""
Tests of the ExecutionCoordinator: run, timing and reduction of synapse
counts over 1 to 4 simulated MPI processes.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import unittest

from plasticnet import errors
from plasticnet.control import ExecutionCoordinator, RunResult, SYNAPSE_CLASSES
from plasticnet.mock import MockKernel
from plasticnet.plasticity import PlasticityConfigurator
from plasticnet.simulator import SimulationContext
from plasticnet.topology import TopologyBuilder

from .mocks import (CountingKernel, FailingKernel, ThreadWorld, make_config,
                    run_on_ranks, serial_context)


class RankCountKernel(CountingKernel):
    """Reports rank-dependent local synapse counts: 10 * (rank + 1) + uid."""

    def _local_nonzero(self, projection):
        return 10 * (self.context.mpi_rank + 1) + projection.uid


def execute_on_ranks(size, config, kernel_factory):
    def target(comm):
        context = SimulationContext(config.seed, comm=comm).init()
        kernel = kernel_factory().setup(context)
        net = TopologyBuilder(context, kernel).build(config)
        PlasticityConfigurator(context, kernel).configure(net, config)
        result = ExecutionCoordinator(context, kernel).execute(net, config.simtime)
        context.teardown()
        return result
    return run_on_ranks(size, target)


class RunResultTest(unittest.TestCase):

    def test_status(self):
        self.assertEqual(RunResult(True, {}, {}, 0.0).status, errors.EXIT_SUCCESS)
        self.assertEqual(RunResult(False, {}, {}, 0.0).status, errors.EXIT_FAILURE)


class ExecutionCoordinatorTest(unittest.TestCase):

    def setUp(self):
        self.config = make_config(simtime=0.2, nbinputs=40, size=12, npostsyn=10, seed=11)

    def test_serial_counts(self):
        results = execute_on_ranks(1, self.config, RankCountKernel)
        result = results[0]
        self.assertTrue(result.success)
        self.assertEqual(result.status, errors.EXIT_SUCCESS)
        self.assertEqual(result.local_counts, {"input->relay0": 10, "relay0->output": 11})
        self.assertEqual(result.global_counts, result.local_counts)
        self.assertGreaterEqual(result.elapsed_time, 0.0)

    def test_reduction_is_exact_sum_over_ranks(self):
        for size in (1, 2, 3, 4):
            results = execute_on_ranks(size, self.config, RankCountKernel)
            expected_first = sum(10 * (rank + 1) for rank in range(size))
            self.assertEqual(results[0].global_counts,
                             {"input->relay0": expected_first,
                              "relay0->output": expected_first + size})
            for rank, result in enumerate(results):
                self.assertEqual(result.local_counts["relay0->output"], 10 * (rank + 1) + 1)
                if rank > 0:
                    self.assertIsNone(result.global_counts)

    def test_global_count_independent_of_process_count(self):
        serial = execute_on_ranks(1, self.config, MockKernel)[0].global_counts
        for size in (2, 3, 4):
            results = execute_on_ranks(size, self.config, MockKernel)
            self.assertEqual(results[0].global_counts, serial)
            for label in serial:
                self.assertEqual(sum(r.local_counts[label] for r in results), serial[label])

    def test_full_connectivity_count(self):
        config = make_config(simtime=0.1, nbinputs=20, size=6, npostsyn=20, relay_stages=0)
        for size in (1, 3):
            results = execute_on_ranks(size, config, MockKernel)
            self.assertEqual(results[0].global_counts, {"input->output": 20 * 6})

    def test_kernel_failure_still_reports_counts(self):
        for size in (1, 2):
            results = execute_on_ranks(size, self.config, FailingKernel)
            for result in results:
                self.assertFalse(result.success)
                self.assertEqual(result.status, errors.EXIT_FAILURE)
                self.assertEqual(len(result.local_counts), 2)
            self.assertEqual(set(results[0].global_counts), set(["input->relay0", "relay0->output"]))

    def test_reduction_follows_synapse_class_order(self):
        config = make_config(simtime=0.1, with_stdp=True, relay_stages=2)
        kernel = CountingKernel()
        context = serial_context(seed=config.seed)
        kernel.setup(context)
        net = TopologyBuilder(context, kernel).build(config)
        PlasticityConfigurator(context, kernel).configure(net, config)
        ExecutionCoordinator(context, kernel).execute(net, config.simtime)
        queried = [call[1] for call in kernel.calls if call[0] == "local_nonzero"]
        self.assertEqual(queried, ["input->relay0", "relay0->relay1", "relay1->output"])

    def test_absent_synapse_classes_are_skipped(self):
        context = serial_context()
        kernel = CountingKernel().setup(context)
        net = TopologyBuilder(context, kernel).build(make_config())
        local_counts, global_counts = ExecutionCoordinator(context, kernel).count_synapses(net)
        self.assertEqual(len(global_counts), 2)
        groups = net.projections_by_synapse_class()
        self.assertEqual(len(groups), 1)
        self.assertEqual(len(SYNAPSE_CLASSES), 3)

    def test_barrier_before_run(self):
        calls = []

        class RecordingContext(SimulationContext):
            def barrier(self):
                calls.append("barrier")

        class OrderKernel(CountingKernel):
            def _run(self, duration):
                calls.append("run")
                return True

        context = RecordingContext(1, comm=ThreadWorld(1).comm(0)).init()
        kernel = OrderKernel().setup(context)
        net = TopologyBuilder(context, kernel).build(make_config())
        ExecutionCoordinator(context, kernel).execute(net, 0.1)
        self.assertEqual(calls, ["barrier", "run"])


if __name__ == '__main__':
    unittest.main()
