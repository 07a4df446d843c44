"""
Tests for the characteristic curve builder.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np

from pore_landscape_tools.characteristic import (
    build_characteristic_curve,
    generate_threshold_range,
    read_characteristic_file,
    sample_volume_ml,
    unit_cell_mass_grams,
    write_characteristic_file,
)
from pore_landscape_tools.constants import MC
from pore_landscape_tools.lattice import transform_matrix
from pore_landscape_tools.potential_grid import PotentialGrid, compute_potential_grid, grid_positions
from pore_landscape_tools.records import AtomSpecies, FrameworkAtom, FrameworkInput, LatticeParameters

CUBIC_10 = LatticeParameters(10.0, 10.0, 10.0, 90.0, 90.0, 90.0)
SPECIES_X = AtomSpecies(epsilon=1.0, sigma=3.0, charge=0.0, mass=12.0)


def single_atom_framework() -> FrameworkInput:
    return FrameworkInput({'X': SPECIES_X}, CUBIC_10, (FrameworkAtom('X', 0.0, 0.0, 0.0),), 'X')


def synthetic_grid(energies) -> PotentialGrid:
    """2x2x2 grid in the 10 Å cube with the given energies."""
    values = np.zeros((2, 2, 2, 4))
    values[..., :3] = grid_positions(transform_matrix(CUBIC_10), 2)
    values[..., 3] = np.asarray(energies, dtype=float).reshape(2, 2, 2)
    return PotentialGrid(values)


class TestThresholdRange(unittest.TestCase):
    """Tests for potential threshold generation."""

    def test_range(self):
        """Test evenly spaced thresholds with both ends included."""
        thresholds = generate_threshold_range(-10.0, -1e-6, 30)

        self.assertEqual(len(thresholds), 30)
        self.assertAlmostEqual(thresholds[0], -10.0)
        self.assertAlmostEqual(thresholds[-1], -1e-6)
        np.testing.assert_allclose(np.diff(thresholds), (10.0 - 1e-6) / 29)

    def test_single_point(self):
        """Test that a single threshold is the lower bound."""
        self.assertEqual(generate_threshold_range(-5.0, -1.0, 1), [-5.0])

    def test_invalid_count(self):
        """Test that at least one threshold is required."""
        with self.assertRaises(ValueError):
            generate_threshold_range(-5.0, -1.0, 0)


class TestCharacteristicCurve(unittest.TestCase):
    """Tests for building characteristic curves."""

    def setUp(self):
        self.framework_input = single_atom_framework()
        # Volume per grid point per gram of framework
        self.point_volume = (1000.0 * 1e-24 / 8) / (12.0 * MC * 1e3)

    def test_mass_and_sample_volume(self):
        """Test unit cell mass in g and grid point volume in ml."""
        self.assertAlmostEqual(unit_cell_mass_grams(self.framework_input) / (12.0 * MC * 1e3), 1.0)
        self.assertAlmostEqual(sample_volume_ml(self.framework_input, 2) / 1.25e-22, 1.0)

    def test_curve_values(self):
        """Test counts at the lowest and highest thresholds."""
        grid = synthetic_grid([-10.0, -5.0, -5.0, -1.0, 0.0, 0.0, 0.0, 0.0])
        curve = build_characteristic_curve(self.framework_input, grid)

        self.assertEqual(list(curve.columns), ['potential_kj_mol', 'volume_ml_g'])
        self.assertEqual(len(curve), 30)

        self.assertAlmostEqual(curve['potential_kj_mol'].iloc[0], 10.0)
        self.assertAlmostEqual(curve['potential_kj_mol'].iloc[-1], 1e-6)

        self.assertAlmostEqual(curve['volume_ml_g'].iloc[0] / self.point_volume, 1.0)
        self.assertAlmostEqual(curve['volume_ml_g'].iloc[-1] / self.point_volume, 4.0)

    def test_volume_monotonic(self):
        """Test that volume never decreases as the threshold approaches zero."""
        rng = np.random.default_rng(3)
        grid = synthetic_grid(-rng.random(8) * 20.0)
        curve = build_characteristic_curve(self.framework_input, grid, npoints=50)

        # Rows run from the deepest threshold towards zero
        self.assertTrue(np.all(np.diff(curve['potential_kj_mol']) < 0))
        self.assertTrue(np.all(np.diff(curve['volume_ml_g']) >= 0))

    def test_monotonic_on_computed_grid(self):
        """Test monotonicity for a grid computed from a framework."""
        grid = compute_potential_grid(self.framework_input, 6, show_progress=False)
        curve = build_characteristic_curve(self.framework_input, grid)

        self.assertTrue(np.all(np.diff(curve['volume_ml_g']) >= 0))
        self.assertGreater(curve['volume_ml_g'].iloc[-1], 0.0)

    def test_no_attractive_region(self):
        """Test a landscape without negative energies."""
        grid = synthetic_grid(np.zeros(8))
        curve = build_characteristic_curve(self.framework_input, grid)

        self.assertEqual(len(curve), 30)
        np.testing.assert_allclose(curve['potential_kj_mol'], 1e-6)
        self.assertTrue(np.all(curve['volume_ml_g'] == 0.0))

    def test_massless_framework(self):
        """Test that a framework without atoms has no defined specific volume."""
        framework_input = FrameworkInput({'X': SPECIES_X}, CUBIC_10, (), 'X')

        with self.assertRaises(ValueError):
            build_characteristic_curve(framework_input, synthetic_grid(np.zeros(8)))


class TestCharacteristicFiles(unittest.TestCase):
    """Tests for the characteristic curve output files."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.framework_input = single_atom_framework()
        self.grid = synthetic_grid([-10.0, -5.0, -5.0, -1.0, 0.0, 0.0, 0.0, 0.0])

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    @patch('pore_landscape_tools.plotting.plot_characteristic_curve')
    def test_output_files(self, mock_plot):
        """Test that the data file and plot are written to the output directory."""
        curve = build_characteristic_curve(self.framework_input, self.grid, output_dir=self.temp_dir)

        data_path = self.temp_dir / "characteristic.dat"
        self.assertTrue(data_path.exists())

        lines = data_path.read_text().splitlines()
        self.assertEqual(lines[0], "# Potential [kJ/mol] \t Volume [ml/g] ")
        self.assertEqual(len(lines), 31)
        self.assertEqual(len(lines[1].split("\t")), 2)

        mock_plot.assert_called_once()
        self.assertEqual(mock_plot.call_args[0][1], self.temp_dir / "characteristic.png")

        written = read_characteristic_file(data_path)
        np.testing.assert_allclose(written.values, curve.values, rtol=1e-9)

    def test_write_characteristic_file(self):
        """Test the standalone writer."""
        curve = build_characteristic_curve(self.framework_input, self.grid, npoints=5)
        path = write_characteristic_file(curve, self.temp_dir / "curve.dat")

        self.assertEqual(len(path.read_text().splitlines()), 6)


if __name__ == '__main__':
    unittest.main()
