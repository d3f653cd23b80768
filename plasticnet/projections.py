# encoding: utf-8
"""
The Projection class: all the connections of a given synapse type between
two populations.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

from . import errors
from .populations import Population
from .connectors import FixedProbabilityConnector
from .standardmodels import StandardSynapseType

logger = logging.getLogger("PlasticNet")


class Projection(object):
    """
    A container for all the connections of a given type (same synapse type and
    plasticity mechanism) between two populations.

    Arguments:
        `presynaptic_population` and `postsynaptic_population`:
            Population objects.
        `connector`:
            a FixedProbabilityConnector, giving the connection probability.
        `synapse_type`:
            a StandardSynapseType instance. StaticSynapse means no plasticity.
    """

    def __init__(self, presynaptic_population, postsynaptic_population,
                 connector, synapse_type, label=None):
        for population in (presynaptic_population, postsynaptic_population):
            if not isinstance(population, Population):
                raise errors.ConnectionError("%r is not a Population" % (population,))
        if not isinstance(connector, FixedProbabilityConnector):
            raise errors.ConnectionError("%r is not a connector" % (connector,))
        self.pre = presynaptic_population
        self.post = postsynaptic_population
        self.connector = connector
        self._check_synapse_type(synapse_type)
        self.synapse_type = synapse_type
        self.label = label or "%s->%s" % (self.pre.label, self.post.label)
        self.uid = None
        self.frozen = False

    @staticmethod
    def _check_synapse_type(synapse_type):
        if not isinstance(synapse_type, StandardSynapseType):
            raise errors.ConnectionError(
                "synapse_type must be a StandardSynapseType instance, not %s"
                % type(synapse_type).__name__)

    def __repr__(self):
        return "Projection(%r, %r, %r, %r)" % (self.pre.label, self.post.label,
                                               self.connector, self.synapse_type)

    @property
    def sparseness(self):
        return self.connector.p_connect

    @property
    def weight(self):
        return self.synapse_type.weight

    @property
    def plastic(self):
        return self.synapse_type.plastic

    def set_synapse_type(self, synapse_type):
        """
        Replace the synapse type. Only allowed until the simulation starts.
        """
        if self.frozen:
            raise errors.SequenceError(
                "cannot change the synapse type of %s once the simulation has started"
                % self.label)
        self._check_synapse_type(synapse_type)
        logger.debug("%s: %s replaced by %s" % (self.label, self.synapse_type, synapse_type))
        self.synapse_type = synapse_type

    def freeze(self):
        self.frozen = True

    def describe(self):
        return "Projection '%s' (uid %s): %s, %s" % (
            self.label, self.uid, self.connector.describe(),
            self.synapse_type.__class__.__name__)
