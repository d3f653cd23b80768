"""
Resolution of command-line options and option mappings into an
:class:`~plasticnet.parameters.ExperimentConfig`.

Classes:
    ParameterResolver - turns a mapping or an argv list into a Resolution
    Resolution        - either a valid ExperimentConfig, or the error that
                        prevented building one

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import argparse
import logging

from . import errors
from .parameters import ExperimentConfig

logger = logging.getLogger("PlasticNet")

TRUE_STRINGS = ("true", "yes", "on", "1")
FALSE_STRINGS = ("false", "no", "off", "0")

HELP_TEXT = {
    'dir': "output directory",
    'prefix': "prefix of the output file names",
    'simtime': "simulation time (s)",
    'seed': "random seed, identical on every MPI process",
    'nbinputs': "number of Poisson inputs",
    'size': "number of output neurons",
    'kappa': "presynaptic firing rate (Hz)",
    'winit': "initial weight",
    'winit2': "initial weight of projections after the first",
    'npostsyn': "number of post-synapses (fan-in) of the plastic projection",
    'sparseness': "connection probability, if npostsyn is not given",
    'relay_stages': "number of relay populations between input and output",
    'with_stdp': "if 'true', attach pair-based STDP to the plastic projection",
    'with_bcpnn': "if 'true', attach BCPNN to the plastic projection",
    'eta': "STDP learning rate",
    'tau_pre': "presynaptic STDP trace time constant (s)",
    'tau_post': "postsynaptic STDP trace time constant (s)",
    'tau_z_pre': "BCPNN presynaptic z-trace time constant (s)",
    'tau_z_post': "BCPNN postsynaptic z-trace time constant (s)",
    'tau_p': "BCPNN probability trace time constant (s)",
    'tau_refrac': "refractory period of the relay neurons (s)",
    'wgain': "BCPNN weight gain",
    'bgain': "BCPNN bias gain",
    'w_min': "STDP lower weight bound",
    'w_max': "STDP upper weight bound",
    'ipre': "index of the monitored presynaptic neuron",
    'ipost': "index of the monitored postsynaptic neuron",
    'nomon': "if 'true' no monitoring of state variables",
    'logfile': "log file (default: standard error)",
    'debug': "if 'true' log debugging information",
}


def str2bool(value):
    """Interpret `value` as a boolean, accepting the usual spellings."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ValueError("cannot interpret '%s' as a boolean" % value)


class Resolution(object):
    """
    The outcome of resolving experiment options: exactly one of `config` or
    `error` is set, unless the user only asked for help.
    """

    def __init__(self, config=None, error=None, help_requested=False, usage=""):
        assert (config is None) or (error is None)
        self.config = config
        self.error = error
        self.help_requested = help_requested
        self.usage = usage

    @property
    def ok(self):
        return self.config is not None

    @property
    def exit_code(self):
        if self.ok:
            return errors.EXIT_SUCCESS
        if self.error is not None:
            return getattr(self.error, "exit_code", errors.EXIT_FAILURE)
        return errors.EXIT_FAILURE

    def unwrap(self):
        """Return the configuration, or raise the error that prevented it."""
        if self.error is not None:
            raise self.error
        if self.config is None:
            raise errors.ConfigurationError("no configuration: help was requested")
        return self.config

    def __repr__(self):
        if self.ok:
            return "Resolution(ok)"
        elif self.help_requested:
            return "Resolution(help)"
        return "Resolution(error=%r)" % self.error


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError rather than exiting."""

    def error(self, message):
        raise errors.ConfigurationError(message)


class ParameterResolver(object):
    """
    Builds ExperimentConfig objects from option mappings or command lines.

    Values may be given as strings (as they come from the command line) or
    already converted; unset options take the defaults of ExperimentConfig.
    """

    config_class = ExperimentConfig

    def __init__(self, prog="plasticnet-run"):
        self.prog = prog

    def convert(self, name, value):
        """Convert a single option value to the type the schema asks for."""
        schema = self.config_class.schema
        if name not in schema:
            raise errors.ConfigurationError(
                "unknown option '%s' (valid options are: %s)" % (
                    name, ", ".join(sorted(schema))))
        if value is None or not isinstance(value, str):
            return value
        expected = schema[name]
        try:
            if expected is bool:
                return str2bool(value)
            elif expected is int:
                return int(value)
            elif expected is float:
                return float(value)
            return value
        except ValueError as err:
            raise errors.InvalidParameterValueError(
                "invalid value '%s' for option '%s': %s" % (value, name, err))

    def resolve(self, options):
        """
        Turn a mapping of option names to values into a Resolution.

        Option names may be written with dashes or underscores and with or
        without leading dashes.
        """
        try:
            parameters = {}
            for key, value in options.items():
                name = key.lstrip("-").replace("-", "_")
                parameters[name] = self.convert(name, value)
            config = self.config_class(**parameters)
        except errors.ConfigurationError as err:
            logger.debug("Invalid options: %s" % err)
            return Resolution(error=err)
        except Exception as err:
            logger.exception("Exception while resolving options")
            return Resolution(error=errors.ConfigurationError(
                "unexpected %s: %s" % (type(err).__name__, err)))
        return Resolution(config=config)

    def build_parser(self):
        parser = OptionParser(prog=self.prog, description="Allowed options",
                              add_help=False, allow_abbrev=False)
        parser.add_argument("--help", action="store_true",
                            help="produce help message")
        defaults = self.config_class.default_parameters
        for name in sorted(self.config_class.schema):
            help_text = HELP_TEXT.get(name, name)
            if defaults[name] is not None:
                help_text += " (default: %s)" % defaults[name]
            parser.add_argument("--%s" % name, dest=name, default=None,
                                metavar=self.config_class.schema[name].__name__.upper(),
                                help=help_text)
        return parser

    def usage(self):
        return self.build_parser().format_help()

    def parse_args(self, argv):
        """Parse a list of command-line arguments into a Resolution."""
        parser = self.build_parser()
        try:
            namespace = parser.parse_args(argv)
        except errors.ConfigurationError as err:
            logger.debug("Invalid command line: %s" % err)
            return Resolution(error=err, usage=parser.format_usage())
        except Exception as err:
            logger.exception("Exception of unknown type while parsing options")
            return Resolution(error=errors.ConfigurationError(str(err)),
                              usage=parser.format_usage())
        if namespace.help:
            return Resolution(help_requested=True, usage=parser.format_help())
        options = dict((name, value) for name, value in vars(namespace).items()
                       if name != "help" and value is not None)
        return self.resolve(options)
