"""
A Network groups the populations and projections of one experiment, in the
order in which they were created.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from itertools import chain
from .populations import Population
from .projections import Projection


class Network(object):
    """
    Ordered collection of populations and projections.

    `plastic_projection` is the projection that plasticity rules are attached
    to; by convention the last projection into the output population.
    """

    def __init__(self, *components):
        self._populations = []
        self._projections = []
        self.plastic_projection = None
        self.add(*components)

    @property
    def populations(self):
        return tuple(self._populations)

    @property
    def projections(self):
        return tuple(self._projections)

    @property
    def input(self):
        return self._populations[0]

    @property
    def output(self):
        return self._populations[-1]

    def count_neurons(self):
        return sum(population.size for population in self.populations)

    def add(self, *components):
        for component in components:
            if isinstance(component, Population):
                self._populations.append(component)
            elif isinstance(component, Projection):
                for population in (component.pre, component.post):
                    if population not in self._populations:
                        raise ValueError("population '%s' must be added before %s"
                                         % (population.label, component.label))
                self._projections.append(component)
            else:
                raise TypeError("cannot add %r to a Network" % (component,))

    def get_component(self, label):
        for obj in chain(self.populations, self.projections):
            if obj.label == label:
                return obj
        return None

    def projections_by_synapse_class(self):
        """
        Return a dict mapping each synapse class present in the network to its
        projections, in creation order.
        """
        groups = {}
        for projection in self.projections:
            groups.setdefault(type(projection.synapse_type), []).append(projection)
        return groups

    def describe(self):
        lines = ["Network of %d neurons:" % self.count_neurons()]
        lines.extend("    " + obj.describe() for obj in chain(self.populations, self.projections))
        return "\n".join(lines)
