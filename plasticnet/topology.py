# encoding: utf-8
"""
Construction of the feed-forward network of an experiment:

    Poisson input -> relay populations (zero or more) -> output population

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging

from .network import Network
from .populations import Population
from .projections import Projection
from .connectors import FixedProbabilityConnector
from .standardmodels.cells import PoissonSource, TIFRelay
from .standardmodels.synapses import StaticSynapse

logger = logging.getLogger("PlasticNet")


class TopologyBuilder(object):
    """
    Builds the populations and projections described by an ExperimentConfig
    in a simulation kernel.

    Creation order is fixed (input, relays, output, then the projections from
    input to output), so the uids the kernel hands out are the same for the
    same configuration on every process and in every run.
    """

    def __init__(self, context, kernel):
        self.context = context
        self.kernel = kernel

    def build(self, config):
        network = Network()
        stages = [Population(config.nbinputs, PoissonSource(rate=config.kappa), label="input")]
        for i in range(config.relay_stages):
            stages.append(Population(config.nbinputs, TIFRelay(tau_refrac=config.tau_refrac),
                                     label="relay%d" % i))
        stages.append(Population(config.size, TIFRelay(tau_refrac=config.tau_refrac),
                                 label="output"))
        for population in stages:
            self.kernel.create_population(population)
            network.add(population)

        for i, (pre, post) in enumerate(zip(stages[:-1], stages[1:])):
            weight = config.winit if i == 0 else config.winit2
            if config.npostsyn is not None:
                connector = FixedProbabilityConnector.from_fan_in(config.npostsyn, pre.size)
            else:
                connector = FixedProbabilityConnector(config.sparseness)
            projection = Projection(pre, post, connector, StaticSynapse(weight=weight))
            self.kernel.connect(projection)
            network.add(projection)
        network.plastic_projection = network.projections[-1]

        plastic = network.plastic_projection
        if self.context.is_root:
            logger.info("Sparseness of %s set to %g (about %d of %d inputs)" % (
                plastic.label, plastic.sparseness, config.fan_in, config.nbinputs))
        logger.debug(network.describe())
        return network
