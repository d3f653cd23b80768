"""
Mock classes for unit tests

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import threading

from plasticnet.kernel import BaseKernel
from plasticnet.mock import MockKernel
from plasticnet.parameters import ExperimentConfig
from plasticnet.simulator import SimulationContext

BARRIER_TIMEOUT = 30.0  # s


class ThreadWorld(object):
    """
    A set of ranks, each running in its own thread, that communicate through
    shared memory. Stands in for MPI.COMM_WORLD in tests.
    """

    def __init__(self, size):
        self.size = size
        self._barrier = threading.Barrier(size, timeout=BARRIER_TIMEOUT)
        self._slots = [None] * size
        self.aborted = None
        self.reductions = 0

    def comm(self, rank):
        return ThreadComm(self, rank)


class ThreadComm(object):
    """The subset of the mpi4py communicator API used by SimulationContext."""

    def __init__(self, world, rank):
        self.world = world
        self.rank = rank

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.world.size

    def Barrier(self):
        self.world._barrier.wait()

    def _exchange(self, value):
        # the first wait makes sure every rank has read the previous exchange
        self.world._barrier.wait()
        self.world._slots[self.rank] = value
        self.world._barrier.wait()
        return list(self.world._slots)

    def allgather(self, value):
        return self._exchange(value)

    def reduce(self, value, root=0):
        values = self._exchange(value)
        if self.rank == root:
            self.world.reductions += 1
            return sum(values)
        return None

    def Abort(self, code):
        self.world.aborted = code
        self.world._barrier.abort()
        raise SystemExit(code)


def run_on_ranks(size, target):
    """
    Call `target(comm)` in `size` threads, one per rank, and return the list
    of results ordered by rank. The first exception raised by any rank is
    re-raised.
    """
    world = ThreadWorld(size)
    results = [None] * size
    failures = [None] * size

    def run(rank):
        try:
            results[rank] = target(world.comm(rank))
        except BaseException as err:
            failures[rank] = err
            world._barrier.abort()

    threads = [threading.Thread(target=run, args=(rank,)) for rank in range(size)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    for failure in failures:
        if failure is not None and not isinstance(failure, threading.BrokenBarrierError):
            raise failure
    for failure in failures:
        if failure is not None:
            raise failure
    return results


def serial_context(seed=1, dir=".", prefix="sim_plastic"):
    """An initialised single-rank context that does not touch MPI."""
    return SimulationContext(seed, dir=dir, prefix=prefix,
                             comm=ThreadWorld(1).comm(0)).init()


def make_config(**parameters):
    return ExperimentConfig(**parameters)


class FailingKernel(MockKernel):
    """A MockKernel whose run() always reports failure."""

    def __init__(self, **kwargs):
        MockKernel.__init__(self, fail_run=True, **kwargs)


class CountingKernel(BaseKernel):
    """
    Kernel that records every call made to it and reports a fixed number of
    local synapses per projection.
    """

    def __init__(self, local_count=3):
        BaseKernel.__init__(self)
        self.local_count = local_count
        self.calls = []

    def _create_population(self, population):
        self.calls.append(("create_population", population.label))

    def _connect(self, projection):
        self.calls.append(("connect", projection.label))

    def _set_synapse_type(self, projection, synapse_type):
        self.calls.append(("set_synapse_type", projection.label,
                           type(synapse_type).__name__))

    def _record(self, binding):
        self.calls.append(("record", binding.role))

    def _run(self, duration):
        self.calls.append(("run", duration))
        return True

    def _local_nonzero(self, projection):
        self.calls.append(("local_nonzero", projection.label))
        return self.local_count
