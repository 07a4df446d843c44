"""
Tests for constants and default values.
"""

import unittest

from pore_landscape_tools.constants import (
    BOLTZMANN_K_KCAL_MOL,
    CHARACTERISTIC_HEADER,
    DEFAULT_RUN_SETTINGS,
    KB,
    MC,
    NA,
    OUTPUT_POLICIES,
    PROBE_PARAMS,
    UFF_LJ_PARAMS,
)


class TestConstants(unittest.TestCase):
    """Tests for package constants."""

    def test_boltzmann_constant(self):
        """Test Boltzmann constant values."""
        self.assertAlmostEqual(BOLTZMANN_K_KCAL_MOL, 0.001987204, places=6)
        # kB * NA expressed in kcal/(mol K) must agree with the tabulated value
        self.assertAlmostEqual(KB * NA / 4184.0, BOLTZMANN_K_KCAL_MOL, places=8)

    def test_atomic_mass_unit(self):
        """Test that one mole of amu weighs one gram."""
        self.assertAlmostEqual(MC * 1e3 * NA, 1.0, places=6)

    def test_probe_params(self):
        """Test probe parameter structure."""
        self.assertIn('Ar', PROBE_PARAMS)

        for _probe, params in PROBE_PARAMS.items():
            self.assertIn('parameters', params)
            self.assertIn('charge', params)
            self.assertIn('mass', params)
            self.assertIn('source', params)

            # [epsilon, sigma]
            self.assertEqual(len(params['parameters']), 2)
            self.assertGreater(params['parameters'][0], 0)
            self.assertGreater(params['parameters'][1], 0)
            self.assertGreater(params['mass'], 0)

    def test_uff_params(self):
        """Test UFF parameter table."""
        for element in ['H', 'C', 'N', 'O', 'Zn', 'Si']:
            self.assertIn(element, UFF_LJ_PARAMS)

        for sigma, epsilon in UFF_LJ_PARAMS.values():
            self.assertGreater(sigma, 1.0)
            self.assertGreater(epsilon, 0.0)

    def test_default_run_settings(self):
        """Test default run settings structure."""
        required_keys = ['GridSize', 'CharacteristicPoints', 'OutputDirectory', 'OnExists',
                         'OverlapFactor', 'CutoffFactor', 'ThresholdCeiling', 'AtomChunkSize']
        for key in required_keys:
            self.assertIn(key, DEFAULT_RUN_SETTINGS)

        self.assertEqual(DEFAULT_RUN_SETTINGS['CharacteristicPoints'], 30)
        self.assertEqual(DEFAULT_RUN_SETTINGS['OutputDirectory'], 'Output')
        self.assertIn(DEFAULT_RUN_SETTINGS['OnExists'], OUTPUT_POLICIES)
        self.assertLess(DEFAULT_RUN_SETTINGS['ThresholdCeiling'], 0)
        self.assertLess(DEFAULT_RUN_SETTINGS['OverlapFactor'], DEFAULT_RUN_SETTINGS['CutoffFactor'])

    def test_characteristic_header(self):
        """Test the data file header."""
        self.assertTrue(CHARACTERISTIC_HEADER.startswith('# Potential [kJ/mol]'))
        self.assertIn('Volume [ml/g]', CHARACTERISTIC_HEADER)


if __name__ == '__main__':
    unittest.main()
