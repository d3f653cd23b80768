"""
Base classes for standard models

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from copy import deepcopy

import numpy as np

from .. import errors


class StandardModelType(object):
    """
    Base class for standardized cell and synapse model classes.

    Sub-classes define `default_parameters`, whose keys are the only valid
    parameter names and whose values fix the type of each parameter.
    """

    default_parameters = {}
    recordable = []
    units = {}

    def __init__(self, **parameters):
        self.parameters = deepcopy(self.default_parameters)
        self.set_parameters(**parameters)

    @classmethod
    def get_parameter_names(cls):
        return sorted(cls.default_parameters.keys())

    @classmethod
    def has_parameter(cls, name):
        """Does this model have a parameter with the given name?"""
        return name in cls.default_parameters

    def get_schema(self):
        """
        Returns the model schema: i.e. a mapping of parameter names to allowed
        parameter types.
        """
        return dict((name, type(value))
                    for name, value in self.default_parameters.items())

    def set_parameters(self, **parameters):
        schema = self.get_schema()
        for name, value in parameters.items():
            if name not in schema:
                raise errors.InvalidParameterValueError(
                    "%s is not a parameter of %s (valid parameters are: %s)" % (
                        name, self.__class__.__name__,
                        ", ".join(self.get_parameter_names())))
            expected = schema[name]
            if expected is float and isinstance(value, (int, np.integer)):
                value = float(value)
            if not isinstance(value, expected):
                raise errors.InvalidParameterValueError(
                    "%s must be of type %s, not %s" % (name, expected.__name__,
                                                       type(value).__name__))
            if expected is float and not np.isfinite(value):
                raise errors.InvalidParameterValueError("%s must be finite" % name)
            self.parameters[name] = value
        self.check()

    def check(self):
        """Raise InvalidParameterValueError if the parameters are inconsistent."""
        pass

    def __getattr__(self, name):
        if name == "parameters":
            raise AttributeError(name)
        try:
            return self.parameters[name]
        except KeyError:
            raise AttributeError("%s has no parameter '%s'" % (self.__class__.__name__, name))

    def __eq__(self, other):
        return type(self) is type(other) and self.parameters == other.parameters

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = object.__hash__

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__,
                           ", ".join("%s=%r" % (name, self.parameters[name])
                                     for name in self.get_parameter_names()))

    def describe(self):
        """Returns a human-readable description of the model."""
        lines = ["%s:" % self.__class__.__name__]
        for name in self.get_parameter_names():
            unit = self.units.get(name, "")
            lines.append("    %-12s: %g %s" % (name, self.parameters[name], unit))
        return "\n".join(lines).rstrip()


class StandardCellType(StandardModelType):
    """Base class for standardized cell model classes."""
    recordable = ['spikes', 'v']
    spike_source = False


class StandardSynapseType(StandardModelType):
    """
    Base class for standardized synapse model classes.

    `unit_variables` maps "pre"/"post" to the per-unit state variables the
    mechanism keeps on either side of the synapse; `recordable` lists the
    per-synapse variables, indexed in the order weight monitors expect them.
    """
    plastic = False
    unit_variables = {"pre": [], "post": []}

    def _check_positive(self, *names):
        for name in names:
            if self.parameters[name] <= 0:
                raise errors.InvalidParameterValueError(
                    "%s must be positive, not %g" % (name, self.parameters[name]))
