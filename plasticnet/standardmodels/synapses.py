# encoding: utf-8
"""
Definition of default parameters (and hence, standard parameter names) for
the synapse types that can be attached to a projection.

Static synapses:
    StaticSynapse

Plasticity rules:
    PairRule          - pair-based additive STDP
    AssociativeRule   - BCPNN, a dual-trace Bayesian-Hebbian rule with a
                        per-unit bias

A projection always carries exactly one of these. `StaticSynapse` plays the
role of "no plasticity".

The update equations themselves belong to the simulation kernel; these
classes only hold, check and derive the numbers handed to it.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from .. import errors
from .base import StandardSynapseType

# ratio of depression to potentiation area of the STDP window
STDP_ASYMMETRY = 1.20


class StaticSynapse(StandardSynapseType):
    """
    Synaptic connection with fixed weight.
    """
    default_parameters = {
        'weight': 0.0,
    }
    recordable = ['wij']


class PairRule(StandardSynapseType):
    """
    Pair-based additive STDP with exponential windows.

    Arguments:
        `tau_pre`:
            decay time constant of the presynaptic trace (s).
        `tau_post`:
            decay time constant of the postsynaptic trace (s).
        `eta`:
            learning rate.
        `w_min`, `w_max`:
            the weight is clamped to [w_min, w_max].

    The amplitudes handed to the kernel are derived from these, so that the
    integral of the window is slightly depression-dominated:

        potentiation_gain = -1.20 * tau_post / tau_pre * eta   (post-pre pairing)
        depression_gain   = eta                               (pre-post pairing)
    """
    plastic = True
    default_parameters = {
        'weight': 0.04,
        'tau_pre': 20e-3,
        'tau_post': 20e-3,
        'eta': 1e-3,
        'w_min': 0.0,
        'w_max': 1.0,
    }
    units = {
        'tau_pre': 's',
        'tau_post': 's',
    }
    recordable = ['wij']
    unit_variables = {"pre": ['xpre'], "post": ['xpost']}

    def check(self):
        self._check_positive('tau_pre', 'tau_post')
        if self.parameters['w_min'] > self.parameters['w_max']:
            raise errors.InvalidParameterValueError(
                "w_min (%g) must not be larger than w_max (%g)" % (
                    self.parameters['w_min'], self.parameters['w_max']))

    @property
    def potentiation_gain(self):
        p = self.parameters
        return -STDP_ASYMMETRY * p['tau_post'] / p['tau_pre'] * p['eta']

    @property
    def depression_gain(self):
        return self.parameters['eta']

    @property
    def native_parameters(self):
        p = self.parameters
        return {
            'weight': p['weight'],
            'tau_pre': p['tau_pre'],
            'tau_post': p['tau_post'],
            'A': self.potentiation_gain,
            'B': self.depression_gain,
            'w_min': p['w_min'],
            'w_max': p['w_max'],
        }


class AssociativeRule(StandardSynapseType):
    """
    Bayesian Confidence Propagation Neural Network (BCPNN) learning rule.

    Spikes are low-pass filtered into z-traces (`tau_z_pre`, `tau_z_post`),
    which are in turn filtered into probability traces (`tau_p`). The weight
    and the postsynaptic bias are read out from the probability traces and
    scaled by `wgain` and `bgain` respectively. `tau_pre` is the STDP-style
    window of the presynaptic side and `tau_refrac` the refractory period of
    the postsynaptic units, both of which the kernel needs for normalisation.
    """
    plastic = True
    default_parameters = {
        'weight': 0.0,
        'tau_pre': 20e-3,
        'tau_z_pre': 25e-3,
        'tau_z_post': 10e-3,
        'tau_p': 0.2,
        'tau_refrac': 5e-3,
        'wgain': 1e-4,
        'bgain': 1e-4,
    }
    units = {
        'tau_pre': 's',
        'tau_z_pre': 's',
        'tau_z_post': 's',
        'tau_p': 's',
        'tau_refrac': 's',
    }
    # order matters: weight monitors address these by position
    recordable = ['wij', 'pij', 'pi']
    unit_variables = {"pre": ['zi'], "post": ['zj', 'pj', 'bj']}

    def check(self):
        self._check_positive('tau_pre', 'tau_z_pre', 'tau_z_post', 'tau_p')
        if self.parameters['tau_refrac'] < 0:
            raise errors.InvalidParameterValueError(
                "tau_refrac must be non-negative, not %g" % self.parameters['tau_refrac'])

    @property
    def native_parameters(self):
        return dict(self.parameters)
