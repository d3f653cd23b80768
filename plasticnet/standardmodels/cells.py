"""
Definition of default parameters (and hence, standard parameter names) for
the cell models used by the experiments.

Spike sources (input neurons)
    PoissonSource

Integrate-and-fire relay neurons
    TIFRelay

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from .. import errors
from .base import StandardCellType


class PoissonSource(StandardCellType):
    """Spike source, generating spikes according to a Poisson process."""

    default_parameters = {
        'rate': 20.0,   # Mean spike frequency (Hz). Must be non-negative.
    }
    recordable = ['spikes']
    spike_source = True
    units = {
        'rate': 'Hz',
    }

    def check(self):
        if self.parameters['rate'] < 0:
            raise errors.InvalidParameterValueError(
                "rate must be non-negative, not %g" % self.parameters['rate'])


class TIFRelay(StandardCellType):
    """
    Integrate-and-fire neuron with a fixed (absolute) refractory period,
    relaying its input to the next stage of a feed-forward network.
    """

    default_parameters = {
        'tau_refrac': 5e-3,  # Duration of refractory period in s.
    }
    recordable = ['spikes', 'v']
    units = {
        'tau_refrac': 's',
        'v': 'mV',
    }

    def check(self):
        if self.parameters['tau_refrac'] < 0:
            raise errors.InvalidParameterValueError(
                "tau_refrac must be non-negative, not %g" % self.parameters['tau_refrac'])
