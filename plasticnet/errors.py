# encoding: utf-8
"""
Defines exceptions and exit codes for PlasticNet

    ConfigurationError
    FanInError
    PlasticitySelectionError
    InvalidParameterValueError
    MonitorIndexError
    PreIndexError
    PostIndexError
    ContextError
    SequenceError
    ConnectionError
    RecordingError

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_FAN_IN = 2
ABORT_PRE_INDEX = 4711
ABORT_POST_INDEX = 4712


class ConfigurationError(Exception):
    """Malformed, unknown or contradictory experiment options."""
    exit_code = EXIT_FAILURE


class InvalidParameterValueError(ConfigurationError, ValueError):
    """Inappropriate parameter value"""
    pass


class FanInError(ConfigurationError):
    """
    The requested number of post-synapses exceeds the number of inputs.
    """
    exit_code = EXIT_FAN_IN

    def __init__(self, fan_in, nbinputs):
        ConfigurationError.__init__(self, fan_in, nbinputs)
        self.fan_in = fan_in
        self.nbinputs = nbinputs

    def __str__(self):
        return "npostsyn (%d) must not exceed nbinputs (%d)" % (self.fan_in, self.nbinputs)


class PlasticitySelectionError(ConfigurationError):
    """More than one plasticity rule was selected for the plastic projection."""

    def __init__(self, selected):
        ConfigurationError.__init__(self, selected)
        self.selected = sorted(selected)

    def __str__(self):
        return ("only one plasticity rule may be selected, got: %s"
                % ", ".join(self.selected))


class MonitorIndexError(IndexError):
    """
    A monitored unit index lies outside its target population. Each check has
    its own abort code so that calling tooling can tell them apart.
    """
    abort_code = EXIT_FAILURE
    side = ""

    def __init__(self, index, population):
        IndexError.__init__(self, index, population.label)
        self.index = index
        self.population = population

    def __str__(self):
        return "%s index %d out of range for population '%s' of size %d" % (
            self.side, self.index, self.population.label, self.population.size)


class PreIndexError(MonitorIndexError):
    abort_code = ABORT_PRE_INDEX
    side = "presynaptic"


class PostIndexError(MonitorIndexError):
    abort_code = ABORT_POST_INDEX
    side = "postsynaptic"


class ContextError(Exception):
    """The communication context was used before init() or after teardown()."""
    pass


class SequenceError(Exception):
    """An operation was performed at the wrong stage of the experiment."""
    pass


class ConnectionError(Exception):
    """Attempt to create an invalid connection or access a non-existent connection."""
    pass


class RecordingError(Exception):
    """Attempt to record a variable that does not exist for this cell or synapse type."""

    def __init__(self, variable, model):
        self.variable = variable
        self.model = model

    def __str__(self):
        msg = "Cannot record %s from %s. Available variables are %s"
        return msg % (self.variable,
                      self.model.__class__.__name__,
                      ",".join(self.model.recordable))
