# encoding: utf-8
"""
Runs a complete plasticity experiment: a Poisson input population driving an
output population through zero or more relay populations, with pair-based
STDP, BCPNN or no plasticity on the projection into the output population.

Usage: plasticnet-run [--help] [--simtime SIMTIME] [--with_stdp BOOL] ...
       mpirun -np 4 plasticnet-run --with_bcpnn true --dir results

Output files, one per recorded signal and MPI process, named
``<dir>/<prefix>.<rank>.<role>.pkl`` (Neo pickle format):

  * prspikes, pospikes : spikes of the pre- and postsynaptic populations
  * prrate, porate : population firing rates
  * vmem_pr, vmem_po : membrane potential of the monitored neurons
  * zi, zj, pj, bj : BCPNN traces and bias of the monitored neurons
  * pi, pij, wij : BCPNN p-traces and weight of the monitored synapse
  * xpre, xpost : STDP traces of the monitored neurons

Exit codes: 0 success; 1 help, invalid options or simulation failure;
2 npostsyn larger than nbinputs; 4711/4712 monitored pre/postsynaptic index
out of range.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import logging
import sys

from . import errors
from .options import ParameterResolver
from .simulator import SimulationContext
from .topology import TopologyBuilder
from .plasticity import PlasticityConfigurator
from .recording import DiagnosticsWiring
from .control import ExecutionCoordinator
from .mock import MockKernel
from .utility import init_logging

logger = logging.getLogger("PlasticNet")


def run_experiment(config, kernel=None, comm=None, configure_logging=True):
    """
    Build, wire and run the network described by `config` and return the
    exit status. `kernel` defaults to a MockKernel; `comm` to MPI.COMM_WORLD.

    A monitored unit index out of range aborts all processes with the abort
    code of the failed check.
    """
    context = SimulationContext(config.seed, dir=config.dir, prefix=config.prefix, comm=comm)
    context.init()
    if configure_logging:
        init_logging(config.logfile, debug=config.debug,
                     num_processes=context.num_processes, rank=context.mpi_rank)
    if kernel is None:
        kernel = MockKernel()
    try:
        kernel.setup(context)
        if context.is_root:
            logger.info(config.describe())
        network = TopologyBuilder(context, kernel).build(config)
        PlasticityConfigurator(context, kernel).configure(network, config)
        try:
            DiagnosticsWiring(context, kernel).wire(network, config)
        except errors.MonitorIndexError as err:
            logger.critical("ERROR in main: %s" % err)
            sys.stderr.write("ERROR: %s\n" % err)
            context.abort(err.abort_code)
        result = ExecutionCoordinator(context, kernel).execute(network, config.simtime)
        logger.info("Freeing ...")
        kernel.end()
    finally:
        context.teardown()
    return result.status


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    resolver = ParameterResolver()
    resolution = resolver.parse_args(argv)
    if resolution.help_requested:
        sys.stdout.write(resolution.usage)
        return errors.EXIT_FAILURE
    if not resolution.ok:
        sys.stderr.write("error: %s\n" % resolution.error)
        if resolution.usage:
            sys.stderr.write(resolution.usage)
        return resolution.exit_code
    try:
        return run_experiment(resolution.config)
    except errors.ConfigurationError as err:
        sys.stderr.write("error: %s\n" % err)
        return err.exit_code


if __name__ == "__main__":
    sys.exit(main())
