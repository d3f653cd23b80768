"""
Experiment parameter set handling

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from copy import deepcopy
import math
import numpy as np
from . import errors
from .connectors import sparseness_from_fan_in

DEFAULT_SPARSENESS = 0.6
MAX_SEED = 2**32 - 1
SPARSENESS_TOLERANCE = 1e-9

# plasticity selection flags and the name of the rule each one selects
RULE_FLAGS = {
    'with_stdp': 'stdp',
    'with_bcpnn': 'bcpnn',
}


class ExperimentConfig(object):
    """
    The complete, validated parameter set of one experiment.

    Arguments are the names listed in `default_parameters`; anything not given
    takes its default. Values must already have the right type (see
    :class:`plasticnet.options.ParameterResolver` for turning command-line
    strings into values).

    An ExperimentConfig cannot be created from an invalid parameter set, in
    particular not from one whose requested fan-in exceeds the number of
    inputs, so anything built from one can rely on its invariants.
    """

    default_parameters = {
        'dir': ".",
        'prefix': "sim_plastic",
        'simtime': 10.0,          # simulated duration (s)
        'seed': 1,
        'nbinputs': 100,          # size of the Poisson input population
        'size': 25,               # size of the output population
        'kappa': 20.0,            # input firing rate (Hz)
        'winit': 0.04,            # weight of the first projection
        'winit2': 0.04,           # weight of later projections
        'npostsyn': None,         # fan-in of the plastic projection
        'sparseness': None,       # connection probability, 0.6 if neither it nor npostsyn is given
        'relay_stages': 1,
        'with_stdp': False,
        'with_bcpnn': False,
        'eta': 1e-3,              # STDP learning rate
        'tau_pre': 20e-3,
        'tau_post': 20e-3,
        'tau_z_pre': 25e-3,
        'tau_z_post': 10e-3,
        'tau_p': 0.2,
        'tau_refrac': 5e-3,
        'wgain': 1e-4,
        'bgain': 1e-4,
        'w_min': 0.0,
        'w_max': 1.0,
        'ipre': 99,               # monitored presynaptic unit
        'ipost': 17,              # monitored postsynaptic unit
        'nomon': False,
        'logfile': None,
        'debug': False,
    }
    schema = {
        'dir': str,
        'prefix': str,
        'simtime': float,
        'seed': int,
        'nbinputs': int,
        'size': int,
        'kappa': float,
        'winit': float,
        'winit2': float,
        'npostsyn': int,
        'sparseness': float,
        'relay_stages': int,
        'with_stdp': bool,
        'with_bcpnn': bool,
        'eta': float,
        'tau_pre': float,
        'tau_post': float,
        'tau_z_pre': float,
        'tau_z_post': float,
        'tau_p': float,
        'tau_refrac': float,
        'wgain': float,
        'bgain': float,
        'w_min': float,
        'w_max': float,
        'ipre': int,
        'ipost': int,
        'nomon': bool,
        'logfile': str,
        'debug': bool,
    }
    optional = ('npostsyn', 'sparseness', 'logfile')

    def __init__(self, **parameters):
        self._values = deepcopy(self.default_parameters)
        for name, value in parameters.items():
            self._values[name] = self._check_type(name, value)
        self.check()

    @classmethod
    def _check_type(cls, name, value):
        if name not in cls.schema:
            raise errors.ConfigurationError(
                "unknown option '%s' (valid options are: %s)" % (
                    name, ", ".join(sorted(cls.schema))))
        expected = cls.schema[name]
        if value is None:
            if name in cls.optional:
                return value
            raise errors.InvalidParameterValueError("%s must not be None" % name)
        if expected is float and isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            value = float(value)
        elif expected is int and isinstance(value, np.integer):
            value = int(value)
        elif expected is float and isinstance(value, np.floating):
            value = float(value)
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise errors.InvalidParameterValueError(
                "%s must be of type %s, not %s" % (name, expected.__name__,
                                                   type(value).__name__))
        if expected is float and not np.isfinite(value):
            raise errors.InvalidParameterValueError("%s must be finite, not %r" % (name, value))
        return value

    def check(self):
        """
        Check semantic constraints. Ordinary range violations raise
        InvalidParameterValueError; a fan-in larger than the input population
        raises FanInError; selecting more than one plasticity rule raises
        PlasticitySelectionError.
        """
        v = self._values
        self._require(v['simtime'] > 0, "simtime must be positive, not %g" % v['simtime'])
        self._require(0 <= v['seed'] <= MAX_SEED,
                      "seed must be an unsigned 32-bit integer, not %d" % v['seed'])
        for name in ('nbinputs', 'size'):
            self._require(v[name] > 0, "%s must be positive, not %d" % (name, v[name]))
        self._require(v['kappa'] >= 0, "kappa must be non-negative, not %g" % v['kappa'])
        self._require(v['relay_stages'] >= 0,
                      "relay_stages must be non-negative, not %d" % v['relay_stages'])
        for name in ('ipre', 'ipost'):
            self._require(v[name] >= 0, "%s must be non-negative, not %d" % (name, v[name]))
        for name in ('tau_pre', 'tau_post', 'tau_z_pre', 'tau_z_post', 'tau_p'):
            self._require(v[name] > 0, "%s must be positive, not %g" % (name, v[name]))
        self._require(v['tau_refrac'] >= 0,
                      "tau_refrac must be non-negative, not %g" % v['tau_refrac'])
        self._require(v['w_min'] <= v['w_max'],
                      "w_min (%g) must not be larger than w_max (%g)" % (v['w_min'], v['w_max']))
        if v['sparseness'] is not None:
            self._require(0 < v['sparseness'] <= 1,
                          "sparseness must lie in (0, 1], not %g" % v['sparseness'])
        if v['npostsyn'] is not None:
            self._require(v['npostsyn'] > 0, "npostsyn must be positive, not %d" % v['npostsyn'])
            if v['npostsyn'] > v['nbinputs']:
                raise errors.FanInError(v['npostsyn'], v['nbinputs'])
            if v['sparseness'] is not None:
                derived = v['npostsyn'] / v['nbinputs']
                self._require(abs(derived - v['sparseness']) <= SPARSENESS_TOLERANCE,
                              "npostsyn/nbinputs = %g contradicts sparseness = %g" % (
                                  derived, v['sparseness']))
        selected = [flag for flag in RULE_FLAGS if v[flag]]
        if len(selected) > 1:
            raise errors.PlasticitySelectionError(selected)

    @staticmethod
    def _require(condition, message):
        if not condition:
            raise errors.InvalidParameterValueError(message)

    @property
    def fan_in(self):
        """
        Number of post-synapses per unit of the plastic projection: `npostsyn`
        if given, otherwise the expected fan-in for the connection probability,
        rounded half up. Only used for reporting.
        """
        if self._values['npostsyn'] is not None:
            return self._values['npostsyn']
        return int(math.floor(self.sparseness * self._values['nbinputs'] + 0.5))

    @property
    def sparseness(self):
        """
        Connection probability of every projection: the given sparseness,
        else `npostsyn / nbinputs`, else the default.
        """
        if self._values['sparseness'] is not None:
            return self._values['sparseness']
        if self._values['npostsyn'] is not None:
            return sparseness_from_fan_in(self._values['npostsyn'], self._values['nbinputs'])
        return DEFAULT_SPARSENESS

    @property
    def plasticity(self):
        """'stdp', 'bcpnn' or None."""
        for flag, rule in RULE_FLAGS.items():
            if self._values[flag]:
                return rule
        return None

    def __getattr__(self, name):
        if name == "_values":
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError("ExperimentConfig has no parameter '%s'" % name)

    def __eq__(self, other):
        return isinstance(other, ExperimentConfig) and self._values == other._values

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def as_dict(self):
        return deepcopy(self._values)

    def describe(self):
        """Returns a human-readable description of the experiment parameters."""
        lines = ["Experiment parameters:"]
        for name in sorted(self._values):
            lines.append("    %-12s: %s" % (name, self._values[name]))
        lines.append("    %-12s: %d" % ("fan_in", self.fan_in))
        lines.append("    %-12s: %g" % ("p_connect", self.sparseness))
        lines.append("    %-12s: %s" % ("plasticity", self.plasticity or "none"))
        return "\n".join(lines)
