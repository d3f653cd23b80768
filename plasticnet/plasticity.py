# encoding: utf-8
"""
Selection and parameterisation of the plasticity rule of an experiment.

Functions:
    build_synapse_type()

Classes:
    PlasticityConfigurator

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

from . import errors
from .standardmodels.synapses import StaticSynapse, PairRule, AssociativeRule

logger = logging.getLogger("PlasticNet")

RULES = {
    None: StaticSynapse,
    'stdp': PairRule,
    'bcpnn': AssociativeRule,
}


def build_synapse_type(config, weight):
    """
    Return the synapse type selected by `config`, with all its parameters
    taken from `config`. `weight` is the initial weight of the projection,
    used by static synapses and pair-based STDP; the BCPNN weight is read
    out from its traces and starts at zero.
    """
    rule = config.plasticity
    if rule not in RULES:
        raise errors.ConfigurationError("unknown plasticity rule '%s'" % rule)
    if rule == 'stdp':
        return PairRule(weight=weight, tau_pre=config.tau_pre, tau_post=config.tau_post,
                        eta=config.eta, w_min=config.w_min, w_max=config.w_max)
    elif rule == 'bcpnn':
        return AssociativeRule(tau_pre=config.tau_pre,
                               tau_z_pre=config.tau_z_pre, tau_z_post=config.tau_z_post,
                               tau_p=config.tau_p, tau_refrac=config.tau_refrac,
                               wgain=config.wgain, bgain=config.bgain)
    return StaticSynapse(weight=weight)


class PlasticityConfigurator(object):
    """
    Attaches the selected plasticity rule to the plastic projection of a
    network. This must happen after the network has been built and before
    the simulation is run.
    """

    def __init__(self, context, kernel):
        self.context = context
        self.kernel = kernel

    def configure(self, network, config):
        projection = network.plastic_projection
        if projection is None:
            raise errors.SequenceError("the network has no plastic projection")
        synapse_type = build_synapse_type(config, projection.weight)
        if config.plasticity is None:
            logger.info("No plasticity: %s stays static" % projection.label)
            return projection.synapse_type
        self.kernel.set_synapse_type(projection, synapse_type)
        if self.context.is_root:
            logger.info("%s on %s" % (synapse_type.describe(), projection.label))
            if isinstance(synapse_type, PairRule):
                logger.info("STDP amplitudes: A = %g (post-pre), B = %g (pre-post)" % (
                    synapse_type.potentiation_gain, synapse_type.depression_gain))
        return synapse_type
