# encoding: utf-8
"""
Defines the connector used to wire populations together.

Functions:
    sparseness_from_fan_in()

Classes:
    FixedProbabilityConnector

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging
import numpy as np
from . import errors

logger = logging.getLogger("PlasticNet")


def sparseness_from_fan_in(fan_in, source_size):
    """
    Return the connection probability that gives, on average, `fan_in`
    synapses per postsynaptic unit from a source of `source_size` units.
    """
    if source_size <= 0:
        raise errors.ConnectionError("source population must not be empty")
    if not 0 < fan_in <= source_size:
        raise errors.FanInError(fan_in, source_size)
    return fan_in / source_size


class FixedProbabilityConnector(object):
    """
    For each pair of pre-post cells, the connection probability is constant.

    `p_connect` -- a float in (0, 1]. Each potential connection is created
                   with this probability.
    """

    def __init__(self, p_connect):
        self.p_connect = float(p_connect)
        if not 0 < self.p_connect <= 1:
            raise errors.ConnectionError(
                "p_connect must lie in (0, 1], not %g" % self.p_connect)

    @classmethod
    def from_fan_in(cls, fan_in, source_size):
        return cls(sparseness_from_fan_in(fan_in, source_size))

    def connection_matrix(self, n_pre, n_post, rng, mask_local=None):
        """
        Draw the connectivity of an `n_pre` x `n_post` projection.

        All random numbers for the whole matrix are drawn, so that the result
        does not depend on the number of MPI processes as long as `rng` was
        seeded identically; if `mask_local` is given, only the columns of the
        local postsynaptic units are returned.
        """
        draws = rng.uniform(size=(n_pre, n_post))
        matrix = draws < self.p_connect
        if mask_local is not None:
            matrix = matrix[:, np.asarray(mask_local, dtype=bool)]
        return matrix

    def describe(self):
        return "Each possible connection created with probability p=%g" % self.p_connect

    def __repr__(self):
        return "FixedProbabilityConnector(p_connect=%g)" % self.p_connect
