# encoding: utf-8
"""
The Population class: a group of units sharing one cell type.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import numpy as np

from . import errors
from .standardmodels import StandardCellType


class Population(object):
    """
    A group of neurons all of the same type.

    Arguments:
        `size`:
            number of units, > 0.
        `celltype`:
            a StandardCellType instance, e.g. ``PoissonSource(rate=20.0)``.
        `label`:
            a name for the population, unique within a network.

    The `uid` and the distribution of units over MPI processes are set by the
    simulation kernel when the population is created in it.
    """

    def __init__(self, size, celltype, label=None):
        if not isinstance(size, (int, np.integer)) or size <= 0:
            raise errors.InvalidParameterValueError(
                "Population size must be a positive integer, not %r" % (size,))
        if not isinstance(celltype, StandardCellType):
            raise TypeError("celltype must be a StandardCellType instance, not %s"
                            % type(celltype).__name__)
        self.size = int(size)
        self.celltype = celltype
        self.label = label or "population"
        self.uid = None
        self._mask_local = np.ones((self.size,), dtype=bool)

    def __len__(self):
        return self.size

    def __repr__(self):
        return "Population(%d, %r, label=%r)" % (self.size, self.celltype, self.label)

    @property
    def spike_source(self):
        return self.celltype.spike_source

    def can_record(self, variable):
        return variable in self.celltype.recordable

    def set_partition(self, mpi_rank, num_processes):
        """Distribute units round-robin: unit i lives on rank i % num_processes."""
        self._mask_local = np.arange(self.size) % num_processes == mpi_rank

    @property
    def mask_local(self):
        return self._mask_local

    @property
    def local_size(self):
        return int(self._mask_local.sum())

    @property
    def local_indices(self):
        return np.arange(self.size)[self._mask_local]

    def is_local(self, index):
        self.check_index(index)
        return bool(self._mask_local[index])

    def check_index(self, index):
        if not 0 <= index < self.size:
            raise IndexError("index %d out of range for population '%s' of size %d"
                             % (index, self.label, self.size))

    def describe(self):
        return "Population '%s' (uid %s) of %d %s units, %d on this node" % (
            self.label, self.uid, self.size, self.celltype.__class__.__name__,
            self.local_size)
