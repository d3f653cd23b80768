"""
Defines classes and functions for binding monitors (spikes, population rates,
membrane potential, plasticity traces and weights) to the objects of a network,
and for writing what they recorded.

Classes:
    MonitorBinding     - what to record, from where, how often, to which file
    DiagnosticsWiring  - validates the requested unit indices and binds the
                         monitors of an experiment

Functions:
    get_io()           - Neo IO for an output file name
    build_block()      - package recorded data as a Neo Block
    write_block()

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.

"""

import logging
import os
from datetime import datetime

import numpy as np
import neo
import quantities as pq

from .. import errors
from ..populations import Population
from ..projections import Projection


logger = logging.getLogger("PlasticNet")

RATE_SAMPLING_INTERVAL = 0.1     # s
SYNAPSE_SAMPLING_INTERVAL = 0.01  # s

# population-level variables, and the cell variable they are derived from
DERIVED_VARIABLES = {'rate': 'spikes'}

UNITS = {
    'rate': pq.Hz,
    'v': pq.mV,
}

# file roles for the state variables of the membrane and of the plasticity
# mechanisms, on the presynaptic and postsynaptic side
VOLTAGE_ROLES = {"pre": "vmem_pr", "post": "vmem_po"}


def safe_makedirs(dir):
    """
    Version of makedirs not subject to race condition when using MPI.
    """
    if dir:
        os.makedirs(dir, exist_ok=True)


def get_io(filename):
    """
    Return a Neo IO instance for an output file. Only pickle files are
    written, so any other suffix is an error.
    """
    logger.debug("Creating Neo IO for filename %s" % filename)
    safe_makedirs(os.path.dirname(filename))
    extension = os.path.splitext(filename)[1]
    if extension in ('.pkl', '.pickle'):
        return neo.io.PickleIO(filename=filename)
    raise IOError("file extension %s not supported" % extension)


class MonitorBinding(object):
    """
    Binds one monitor to an entity of the network.

    Arguments:
        `target`:
            a Population or a Projection.
        `variable`:
            name of the recorded variable. For a population, one of its cell
            type's `recordable` variables or 'rate'; for a projection, either a
            per-synapse variable of its synapse type or, together with `side`,
            a per-unit variable of the mechanism.
        `path`:
            output file.
        `index`:
            None (the whole population), a unit index, or for per-synapse
            variables a (pre, post) index pair.
        `sampling_interval`:
            in seconds; None means every event.
        `side`:
            "pre" or "post", for per-unit variables of a projection.

    Indices are checked against the population sizes before the binding is
    created.
    """

    def __init__(self, target, variable, path, index=None, sampling_interval=None,
                 side=None, role=None):
        self.target = target
        self.variable = variable
        self.path = path
        self.index = index
        self.sampling_interval = sampling_interval
        self.side = side
        self.role = role or variable
        if sampling_interval is not None and sampling_interval <= 0:
            raise ValueError("sampling_interval must be positive, not %g" % sampling_interval)
        if isinstance(target, Population):
            self._check_population_binding()
        elif isinstance(target, Projection):
            self._check_projection_binding()
        else:
            raise TypeError("cannot bind a monitor to %r" % (target,))

    def _check_population_binding(self):
        base_variable = DERIVED_VARIABLES.get(self.variable, self.variable)
        if not self.target.can_record(base_variable):
            raise errors.RecordingError(self.variable, self.target.celltype)
        if self.index is not None:
            self.target.check_index(self.index)

    def _check_projection_binding(self):
        synapse_type = self.target.synapse_type
        if self.side is None:
            if self.variable not in synapse_type.recordable:
                raise errors.RecordingError(self.variable, synapse_type)
            if not isinstance(self.index, tuple) or len(self.index) != 2:
                raise ValueError("per-synapse variables need a (pre, post) index, not %r"
                                 % (self.index,))
            i, j = self.index
            self.target.pre.check_index(i)
            self.target.post.check_index(j)
        else:
            if self.variable not in synapse_type.unit_variables[self.side]:
                raise errors.RecordingError(self.variable, synapse_type)
            self.population.check_index(self.index)

    @property
    def population(self):
        """The population whose units are sampled."""
        if isinstance(self.target, Population):
            return self.target
        elif self.side == "pre":
            return self.target.pre
        return self.target.post

    @property
    def element(self):
        """Position of a per-synapse variable in the synapse state."""
        return self.target.synapse_type.recordable.index(self.variable)

    @property
    def key(self):
        return (self.target.label, self.variable, self.index, self.side, self.path)

    def __eq__(self, other):
        return isinstance(other, MonitorBinding) and self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return "MonitorBinding(%s.%s[%s] -> %s)" % (self.target.label, self.variable,
                                                    self.index, self.path)


class DiagnosticsWiring(object):
    """
    Binds the monitors of an experiment to a network.

    Spike recorders on the presynaptic population of the plastic projection
    and on the output population are always bound. Unless `config.nomon` is
    set, population rate, membrane potential and plasticity-state monitors
    are bound too, after checking `config.ipre` and `config.ipost` against
    the population sizes.
    """

    def __init__(self, context, kernel):
        self.context = context
        self.kernel = kernel
        self.bindings = []

    def check_indices(self, network, ipre, ipost):
        """
        Raise PreIndexError or PostIndexError if a monitored unit index is not
        smaller than the size of its population.
        """
        pre = network.plastic_projection.pre
        post = network.plastic_projection.post
        if not 0 <= ipre < pre.size:
            raise errors.PreIndexError(ipre, pre)
        if not 0 <= ipost < post.size:
            raise errors.PostIndexError(ipost, post)

    def bind(self, target, variable, role, **kwargs):
        """Bind one monitor. Binding the same thing twice has no effect."""
        binding = MonitorBinding(target, variable, self.context.fn(role), role=role, **kwargs)
        if binding in self.bindings:
            logger.debug("%s already bound" % (binding,))
            return binding
        self.kernel.record(binding)
        self.bindings.append(binding)
        return binding

    def wire(self, network, config):
        projection = network.plastic_projection
        pre, post = projection.pre, projection.post
        if not config.nomon:
            self.check_indices(network, config.ipre, config.ipost)

        self.bind(pre, 'spikes', 'prspikes')
        self.bind(post, 'spikes', 'pospikes')
        if config.nomon:
            logger.info("Monitoring of state variables disabled")
            return self.bindings

        self.bind(pre, 'rate', 'prrate', sampling_interval=RATE_SAMPLING_INTERVAL)
        self.bind(post, 'rate', 'porate', sampling_interval=RATE_SAMPLING_INTERVAL)
        for side, population, index in (("pre", pre, config.ipre), ("post", post, config.ipost)):
            if population.can_record('v'):
                self.bind(population, 'v', VOLTAGE_ROLES[side], index=index)

        synapse_type = projection.synapse_type
        if synapse_type.plastic:
            for side, index in (("pre", config.ipre), ("post", config.ipost)):
                for variable in synapse_type.unit_variables[side]:
                    self.bind(projection, variable, variable, index=index, side=side)
            for variable in synapse_type.recordable:
                self.bind(projection, variable, variable, index=(config.ipre, config.ipost),
                          sampling_interval=SYNAPSE_SAMPLING_INTERVAL)
        logger.info("%d monitors bound" % len(self.bindings))
        return self.bindings


def build_block(binding, t_stop, spiketrains=None, signal=None, sampling_interval=None):
    """
    Package recorded data as a Neo Block.

    `spiketrains` is a dict mapping unit indices to arrays of spike times (s);
    `signal` is a 1D or 2D array of samples taken every `sampling_interval` s.
    """
    segment = neo.Segment(name="segment000", rec_datetime=datetime.now(),
                          description="%r" % (binding,))
    # nothing was simulated if t_stop is 0, e.g. after a failed run
    if spiketrains is not None and t_stop > 0:
        for index in sorted(spiketrains):
            times = np.asarray(spiketrains[index], dtype=float)
            train = neo.SpikeTrain(times[times <= t_stop] * pq.s,
                                   t_start=0.0 * pq.s,
                                   t_stop=t_stop * pq.s,
                                   source_population=binding.population.label,
                                   source_index=int(index))
            segment.spiketrains.append(train)
    if signal is not None and np.size(signal) > 0:
        signal = np.asarray(signal, dtype=float)
        if signal.ndim == 1:
            signal = signal.reshape((-1, 1))
        units = UNITS.get(binding.variable, pq.dimensionless)
        segment.analogsignals.append(
            neo.AnalogSignal(signal, units=units, t_start=0.0 * pq.s,
                             sampling_period=sampling_interval * pq.s,
                             name=binding.variable,
                             source_population=binding.population.label))
    block = neo.Block(name=binding.role, description="%r" % (binding,))
    block.segments.append(segment)
    segment.block = block
    return block


def write_block(binding, block):
    io = get_io(binding.path)
    io.write_block(block)
    logger.debug("Wrote %s" % binding.path)
