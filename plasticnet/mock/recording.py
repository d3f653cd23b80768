"""
Random data generation for the monitors of the mock kernel.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import numpy as np
from .. import recording


class Recorder(object):
    """Generates random data for one monitor binding."""

    def __init__(self, binding, rng, dt):
        self.binding = binding
        self.rng = rng
        self.dt = dt
        self.t = 0.0
        self._spikes = {}
        self._samples = []

    def _spiking_units(self):
        population = self.binding.population
        if self.binding.index is None:
            return population.local_indices
        if population.is_local(self.binding.index):
            return np.array([self.binding.index])
        return np.array([], dtype=int)

    def _sampled_here(self):
        binding = self.binding
        if isinstance(binding.index, tuple):
            return binding.target.post.is_local(binding.index[1])
        if binding.index is not None:
            return binding.population.is_local(binding.index)
        return True

    def _rate(self):
        celltype = self.binding.population.celltype
        if celltype.spike_source:
            return celltype.rate
        return 5.0

    def advance(self, duration):
        t_start, self.t = self.t, self.t + duration
        variable = self.binding.variable
        if variable in ('spikes', 'rate'):
            rate = self._rate()
            for index in self._spiking_units():
                n = self.rng.poisson(rate * duration)
                times = np.sort(self.rng.uniform(t_start, self.t, size=n))
                self._spikes[int(index)] = np.concatenate(
                    (self._spikes.get(int(index), np.array([])), times))
        if variable not in ('spikes', 'rate') and self._sampled_here():
            n_samples = int(round(duration / self.sampling_interval))
            self._samples.append(self.rng.uniform(size=n_samples))

    @property
    def sampling_interval(self):
        return self.binding.sampling_interval or self.dt

    def get_block(self):
        binding = self.binding
        if binding.variable == 'spikes':
            return recording.build_block(binding, self.t, spiketrains=self._spikes)
        if binding.variable == 'rate':
            signal = self._population_rate()
        else:
            signal = np.concatenate(self._samples) if self._samples else np.array([])
        return recording.build_block(binding, self.t, signal=signal,
                                     sampling_interval=self.sampling_interval)

    def _population_rate(self):
        interval = self.sampling_interval
        edges = np.arange(0.0, self.t + interval / 2, interval)
        if edges.size < 2:
            return np.array([])
        counts = np.zeros(edges.size - 1)
        for times in self._spikes.values():
            counts += np.histogram(times, bins=edges)[0]
        n_units = max(len(self._spiking_units()), 1)
        return counts / (interval * n_units)
