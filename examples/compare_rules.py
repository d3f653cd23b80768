# encoding: utf8
"""
Runs the same feed-forward network three times, without plasticity, with
pair-based STDP and with BCPNN, and prints the mean firing rate of the output
population and the synapse counts of each run.

The components are driven one by one, rather than through
`plasticnet.experiment.main()`, to show how an experiment is put together.

Usage: python compare_rules.py [--simtime SIMTIME] [--dir DIR] [--debug]

    mpirun -np 2 python compare_rules.py

"""

import argparse
import os

import numpy
import neo

from plasticnet.options import ParameterResolver
from plasticnet.simulator import SimulationContext
from plasticnet.topology import TopologyBuilder
from plasticnet.plasticity import PlasticityConfigurator
from plasticnet.recording import DiagnosticsWiring
from plasticnet.control import ExecutionCoordinator
from plasticnet.mock import MockKernel
from plasticnet.utility import init_logging, Timer


parser = argparse.ArgumentParser()
parser.add_argument("--simtime", default="2.0", help="simulated time per run (s)")
parser.add_argument("--dir", default="compare_rules_results", help="output directory")
parser.add_argument("--debug", action="store_true", help="print debugging information")
options = parser.parse_args()

timer = Timer()
resolver = ParameterResolver()
results = {}

for rule in ("static", "stdp", "bcpnn"):

    # === Configure the experiment ==========================================

    resolution = resolver.resolve({
        "simtime": options.simtime,
        "dir": options.dir,
        "prefix": rule,
        "npostsyn": "40",
        "with_stdp": str(rule == "stdp"),
        "with_bcpnn": str(rule == "bcpnn"),
    })
    config = resolution.unwrap()

    context = SimulationContext(config.seed, dir=config.dir, prefix=config.prefix).init()
    init_logging(None, debug=options.debug,
                 num_processes=context.num_processes, rank=context.mpi_rank)

    # === Build, wire and run ===============================================

    kernel = MockKernel().setup(context)
    network = TopologyBuilder(context, kernel).build(config)
    PlasticityConfigurator(context, kernel).configure(network, config)
    wiring = DiagnosticsWiring(context, kernel)
    wiring.wire(network, config)
    result = ExecutionCoordinator(context, kernel).execute(network, config.simtime)
    kernel.end()

    # === Read back the output rate =========================================

    rate_file = context.fn("porate")
    block = neo.io.PickleIO(filename=rate_file).read_block()
    signals = block.segments[0].analogsignals
    mean_rate = numpy.mean(signals[0].magnitude) if signals else float("nan")
    results[rule] = (mean_rate, result.global_counts)
    is_root = context.is_root
    context.teardown()

if is_root:
    print("\n%-8s %12s   %s" % ("rule", "rate (Hz)", "synapses"))
    for rule, (mean_rate, counts) in results.items():
        print("%-8s %12.2f   %s" % (rule, mean_rate, counts))
    print("\nOutput written to %s" % os.path.abspath(options.dir))
    print("Total time: %s" % timer.elapsed_time(format="long"))
