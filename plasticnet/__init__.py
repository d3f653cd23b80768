"""
PlasticNet is a Python package for running synaptic plasticity experiments on
spiking neural networks, on one or many MPI processes.

An experiment is a feed-forward network: a population of Poisson inputs,
zero or more populations of integrate-and-fire relay neurons, and an output
population. The projection into the output population is the plastic one; it
carries either static synapses, pair-based STDP or BCPNN. Spikes, population
rates, membrane potentials and plasticity traces are recorded to Neo files,
and the number of synapses created is summed over all MPI processes.

The simplest way to run an experiment is from the command line:
    plasticnet-run --with_stdp true --simtime 5.0 --dir results
or, in parallel:
    mpirun -np 4 plasticnet-run --with_bcpnn true

From Python:
    from plasticnet.experiment import main, run_experiment

Components:
    ParameterResolver         (plasticnet.options)
    ExperimentConfig          (plasticnet.parameters)
    SimulationContext         (plasticnet.simulator)
    TopologyBuilder           (plasticnet.topology)
    PlasticityConfigurator    (plasticnet.plasticity)
    DiagnosticsWiring         (plasticnet.recording)
    ExecutionCoordinator      (plasticnet.control)

Network classes:
    Population, Projection, Network, FixedProbabilityConnector
    Standard cell types: PoissonSource, TIFRelay
    Standard synapse types: StaticSynapse, PairRule, AssociativeRule

Simulation kernels:
    mock

Other modules:
    utility
    errors

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

__version__ = '0.1.0'
__all__ = ["errors", "parameters", "options", "simulator", "kernel",
           "populations", "projections", "connectors", "network",
           "topology", "plasticity", "recording", "control", "experiment",
           "standardmodels", "mock", "utility"]
