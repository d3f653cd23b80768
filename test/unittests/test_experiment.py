"""
End-to-end tests of the plasticnet-run entry point, using the mock kernel.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import io
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from plasticnet import errors
from plasticnet.experiment import main, run_experiment
from plasticnet.parameters import ExperimentConfig

from .mocks import FailingKernel, ThreadWorld, run_on_ranks


def serial_comm():
    return ThreadWorld(1).comm(0)


class RunExperimentTest(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.dir)

    def config(self, **parameters):
        parameters.setdefault('dir', self.dir)
        parameters.setdefault('simtime', 0.2)
        return ExperimentConfig(**parameters)

    def outputs(self):
        return sorted(os.listdir(self.dir))

    def test_static_run(self):
        status = run_experiment(self.config(), comm=serial_comm(), configure_logging=False)
        self.assertEqual(status, errors.EXIT_SUCCESS)
        self.assertEqual(self.outputs(),
                         ["sim_plastic.0.%s.pkl" % role for role in
                          sorted(["prspikes", "pospikes", "prrate", "porate",
                                  "vmem_pr", "vmem_po"])])

    def test_bcpnn_run(self):
        status = run_experiment(self.config(with_bcpnn=True, prefix="bcpnn"),
                                comm=serial_comm(), configure_logging=False)
        self.assertEqual(status, errors.EXIT_SUCCESS)
        for role in ("zi", "zj", "pj", "bj", "wij", "pij", "pi"):
            self.assertIn("bcpnn.0.%s.pkl" % role, self.outputs())

    def test_nomon_run(self):
        status = run_experiment(self.config(with_stdp=True, nomon=True),
                                comm=serial_comm(), configure_logging=False)
        self.assertEqual(status, errors.EXIT_SUCCESS)
        self.assertEqual(self.outputs(), ["sim_plastic.0.pospikes.pkl",
                                          "sim_plastic.0.prspikes.pkl"])

    def test_kernel_failure(self):
        status = run_experiment(self.config(), kernel=FailingKernel(), comm=serial_comm(),
                                configure_logging=False)
        self.assertEqual(status, errors.EXIT_FAILURE)

    def test_presynaptic_index_aborts(self):
        with patch("sys.stderr", new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                run_experiment(self.config(nbinputs=3, ipre=5), comm=serial_comm(),
                               configure_logging=False)
        self.assertEqual(cm.exception.code, 4711)
        self.assertIn("presynaptic", stderr.getvalue())
        self.assertEqual(self.outputs(), [])

    def test_postsynaptic_index_aborts(self):
        with patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as cm:
                run_experiment(self.config(size=10, ipost=10), comm=serial_comm(),
                               configure_logging=False)
        self.assertEqual(cm.exception.code, 4712)

    def test_parallel_run(self):
        config = self.config(with_stdp=True)

        def target(comm):
            return run_experiment(config, comm=comm, configure_logging=False)

        self.assertEqual(run_on_ranks(2, target), [0, 0])
        self.assertIn("sim_plastic.1.pospikes.pkl", self.outputs())
        self.assertIn("sim_plastic.0.pospikes.pkl", self.outputs())


class MainTest(unittest.TestCase):

    def run_main(self, argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout, \
                patch("sys.stderr", new_callable=io.StringIO) as stderr:
            status = main(argv)
        return status, stdout.getvalue(), stderr.getvalue()

    def test_help(self):
        status, out, err = self.run_main(["--help"])
        self.assertEqual(status, errors.EXIT_FAILURE)
        self.assertIn("--simtime", out)

    def test_invalid_option(self):
        status, out, err = self.run_main(["--simtime", "soon"])
        self.assertEqual(status, errors.EXIT_FAILURE)
        self.assertIn("simtime", err)

    def test_fan_in_larger_than_inputs(self):
        status, out, err = self.run_main(["--nbinputs", "100", "--npostsyn", "150"])
        self.assertEqual(status, errors.EXIT_FAN_IN)
        self.assertIn("npostsyn (150) must not exceed nbinputs (100)", err)

    def test_both_rules(self):
        status, out, err = self.run_main(["--with_stdp", "true", "--with_bcpnn", "true"])
        self.assertEqual(status, errors.EXIT_FAILURE)

    def test_success(self):
        tmp = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmp)
        with patch("plasticnet.experiment.init_logging"), \
                patch("plasticnet.simulator.get_mpi_comm", return_value=None):
            status, out, err = self.run_main(["--dir", tmp, "--simtime", "0.1",
                                              "--npostsyn", "100", "--with_stdp", "on"])
        self.assertEqual(status, errors.EXIT_SUCCESS)
        self.assertIn("sim_plastic.0.wij.pkl", os.listdir(tmp))


if __name__ == '__main__':
    unittest.main()
