# encoding: utf-8
"""
The communication context shared by all components of an experiment.

A SimulationContext is created once at start-up, initialised with `init()`
before any component uses it, and released with `teardown()` after the last
use. It is handed explicitly to every component that needs to know the MPI
rank, synchronise, reduce counts or name output files.

mpi4py is used when it is installed; otherwise the context runs on a single
rank and the collective operations reduce to their serial meaning.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging
import os
import sys

from . import errors

try:
    from mpi4py import MPI
except ImportError:
    MPI = None

logger = logging.getLogger("PlasticNet")

MPI_ROOT = 0


def get_mpi_comm():
    """Return the world communicator, or None if mpi4py is not available."""
    if MPI is None:
        return None
    return MPI.COMM_WORLD


class SimulationContext(object):
    """
    Process-wide state of one experiment: communicator, rank, process count,
    master seed and output naming.

    `comm` may be given explicitly (any object with the mpi4py communicator
    methods Get_rank, Get_size, Barrier, reduce, allgather and Abort);
    otherwise MPI.COMM_WORLD is used when available.
    """

    def __init__(self, seed, dir=".", prefix="sim_plastic", comm=None):
        self.seed = seed
        self.dir = dir
        self.prefix = prefix
        self._comm = comm
        self._state = "new"
        self._mpi_rank = 0
        self._num_processes = 1

    # --- lifecycle ---------------------------------------------------------

    def init(self):
        """
        Acquire the communicator and check that every rank got the same seed.
        """
        if self._state != "new":
            raise errors.ContextError("context can only be initialised once")
        if self._comm is None:
            self._comm = get_mpi_comm()
        if self._comm is not None:
            self._mpi_rank = self._comm.Get_rank()
            self._num_processes = self._comm.Get_size()
        self._state = "active"
        seeds = self.allgather(self.seed)
        if any(seed != self.seed for seed in seeds):
            self.teardown()
            raise errors.ConfigurationError(
                "the random seed differs between MPI processes: %s" % seeds)
        logger.debug("Context initialised on rank %d of %d (seed %d)"
                     % (self._mpi_rank, self._num_processes, self.seed))
        return self

    def teardown(self):
        self._require_active()
        logger.debug("Context torn down on rank %d" % self._mpi_rank)
        self._comm = None
        self._state = "closed"

    def __enter__(self):
        if self._state == "new":
            self.init()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self._state == "active":
            self.teardown()

    @property
    def active(self):
        return self._state == "active"

    def _require_active(self):
        if self._state == "new":
            raise errors.ContextError("context used before init()")
        if self._state == "closed":
            raise errors.ContextError("context used after teardown()")

    # --- queries -----------------------------------------------------------

    @property
    def mpi_rank(self):
        """Return the MPI rank of the current node."""
        self._require_active()
        return self._mpi_rank

    @property
    def num_processes(self):
        """Return the number of MPI processes."""
        self._require_active()
        return self._num_processes

    @property
    def is_root(self):
        return self.mpi_rank == MPI_ROOT

    def fn(self, role):
        """
        Return the output file path for the signal `role`, unique per rank:
        ``<dir>/<prefix>.<rank>.<role>.pkl``.
        """
        self._require_active()
        filename = "%s.%d.%s.pkl" % (self.prefix, self._mpi_rank, role)
        return os.path.join(self.dir, filename)

    # --- collective operations --------------------------------------------

    def barrier(self):
        """Block until every rank has reached this point."""
        self._require_active()
        if self._comm is not None and self._num_processes > 1:
            self._comm.Barrier()

    def reduce_sum(self, value, root=MPI_ROOT):
        """
        Sum `value` over all ranks. The sum is returned on `root`, None on
        every other rank.
        """
        self._require_active()
        if self._comm is None or self._num_processes == 1:
            return value
        return self._comm.reduce(value, root=root)

    def allgather(self, value):
        self._require_active()
        if self._comm is None or self._num_processes == 1:
            return [value]
        return self._comm.allgather(value)

    def abort(self, code):
        """
        Terminate all ranks with `code`. On a single rank this raises
        SystemExit so that the interpreter exits with `code`.
        """
        logger.critical("Aborting with code %d" % code)
        if self._comm is not None and self._num_processes > 1:
            self._comm.Abort(code)
        sys.exit(code)
