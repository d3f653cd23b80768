"""
Tests of the ExperimentConfig class

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import unittest

from plasticnet import errors
from plasticnet.parameters import ExperimentConfig, DEFAULT_SPARSENESS


class ExperimentConfigTest(unittest.TestCase):

    def test_defaults(self):
        config = ExperimentConfig()
        self.assertEqual(config.nbinputs, 100)
        self.assertEqual(config.size, 25)
        self.assertEqual(config.prefix, "sim_plastic")
        self.assertIsNone(config.npostsyn)
        self.assertIsNone(config.plasticity)
        self.assertEqual(config.fan_in, 60)
        self.assertAlmostEqual(config.sparseness, DEFAULT_SPARSENESS)

    def test_fan_in_equal_to_inputs_gives_full_connectivity(self):
        config = ExperimentConfig(nbinputs=100, size=25, npostsyn=100)
        self.assertEqual(config.fan_in, 100)
        self.assertEqual(config.sparseness, 1.0)

    def test_sparseness_is_fan_in_over_inputs(self):
        for nbinputs, npostsyn in ((100, 1), (100, 37), (7, 3), (1000, 999)):
            config = ExperimentConfig(nbinputs=nbinputs, npostsyn=npostsyn)
            self.assertAlmostEqual(config.sparseness, npostsyn / nbinputs, places=12)
            self.assertLessEqual(config.fan_in, config.nbinputs)

    def test_fan_in_larger_than_inputs(self):
        with self.assertRaises(errors.FanInError) as cm:
            ExperimentConfig(nbinputs=100, size=25, npostsyn=150)
        self.assertEqual(cm.exception.exit_code, errors.EXIT_FAN_IN)
        self.assertEqual(cm.exception.fan_in, 150)
        self.assertEqual(cm.exception.nbinputs, 100)
        self.assertIn("150", str(cm.exception))
        self.assertNotEqual(cm.exception.exit_code, errors.EXIT_SUCCESS)

    def test_fan_in_from_sparseness(self):
        config = ExperimentConfig(nbinputs=50, sparseness=0.2)
        self.assertEqual(config.fan_in, 10)
        self.assertAlmostEqual(config.sparseness, 0.2)

    def test_consistent_fan_in_and_sparseness(self):
        config = ExperimentConfig(nbinputs=100, npostsyn=25, sparseness=0.25)
        self.assertEqual(config.fan_in, 25)

    def test_contradictory_fan_in_and_sparseness(self):
        self.assertRaises(errors.InvalidParameterValueError,
                          ExperimentConfig, nbinputs=100, npostsyn=25, sparseness=0.5)

    def test_given_sparseness_is_not_rounded(self):
        config = ExperimentConfig(nbinputs=100, sparseness=0.025)
        self.assertEqual(config.sparseness, 0.025)
        self.assertEqual(config.fan_in, 3)
        config = ExperimentConfig(nbinputs=10, sparseness=0.01)
        self.assertEqual(config.sparseness, 0.01)
        self.assertEqual(config.fan_in, 0)

    def test_default_sparseness_kept_for_any_input_size(self):
        config = ExperimentConfig(nbinputs=7)
        self.assertEqual(config.sparseness, DEFAULT_SPARSENESS)
        self.assertEqual(config.fan_in, 4)

    def test_reported_fan_in_rounds_half_up(self):
        self.assertEqual(ExperimentConfig(nbinputs=5, sparseness=0.5).fan_in, 3)

    def test_both_rules_selected(self):
        with self.assertRaises(errors.PlasticitySelectionError) as cm:
            ExperimentConfig(with_stdp=True, with_bcpnn=True)
        self.assertEqual(cm.exception.exit_code, errors.EXIT_FAILURE)
        self.assertEqual(cm.exception.selected, ['with_bcpnn', 'with_stdp'])

    def test_plasticity_selection(self):
        self.assertEqual(ExperimentConfig(with_stdp=True).plasticity, 'stdp')
        self.assertEqual(ExperimentConfig(with_bcpnn=True).plasticity, 'bcpnn')
        self.assertIsNone(ExperimentConfig(with_stdp=False, with_bcpnn=False).plasticity)

    def test_unknown_parameter(self):
        self.assertRaises(errors.ConfigurationError, ExperimentConfig, foo=1)

    def test_wrong_type(self):
        self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, nbinputs=2.5)
        self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, nbinputs=True)
        self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, prefix=3)
        self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, simtime=float('nan'))

    def test_int_accepted_for_float(self):
        config = ExperimentConfig(simtime=5)
        self.assertIsInstance(config.simtime, float)

    def test_out_of_range_values(self):
        for bad in ({'simtime': 0.0}, {'nbinputs': 0}, {'size': -1}, {'kappa': -1.0},
                    {'seed': -1}, {'relay_stages': -1}, {'ipre': -3}, {'tau_p': 0.0},
                    {'w_min': 2.0, 'w_max': 1.0}, {'sparseness': 1.5}, {'npostsyn': 0}):
            self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, **bad)

    def test_required_parameter_not_none(self):
        self.assertRaises(errors.InvalidParameterValueError, ExperimentConfig, simtime=None)

    def test_identical_parameters_give_identical_configs(self):
        a = ExperimentConfig(seed=42, npostsyn=40, with_stdp=True)
        b = ExperimentConfig(seed=42, npostsyn=40, with_stdp=True)
        self.assertEqual(a, b)
        self.assertEqual(a.sparseness, b.sparseness)
        self.assertEqual(a.fan_in, b.fan_in)
        self.assertNotEqual(a, ExperimentConfig(seed=43, npostsyn=40, with_stdp=True))

    def test_as_dict_is_a_copy(self):
        config = ExperimentConfig()
        values = config.as_dict()
        values['size'] = 1
        self.assertEqual(config.size, 25)

    def test_missing_attribute(self):
        self.assertRaises(AttributeError, getattr, ExperimentConfig(), "foo")

    def test_describe(self):
        description = ExperimentConfig(npostsyn=50).describe()
        self.assertIn("p_connect", description)
        self.assertIn("0.5", description)
        self.assertIn("plasticity  : none", description)


if __name__ == '__main__':
    unittest.main()
