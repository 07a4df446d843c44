"""
Tests for the command line interface.
"""

import io
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from ase import Atoms
from ase.io import write

from pore_landscape_tools.cli import create_parser, main
from pore_landscape_tools.input_file import read_input_file

SINGLE_ATOM_INPUT = """\
ATOMPROP X 1.0 3.0 0.0 12.0
FRAMEPROP 10 10 10 90 90 90
FRAMEWORK X 0 0 0
PROBE X
"""


class TestParser(unittest.TestCase):
    """Tests for argument parsing."""

    def test_run_defaults(self):
        """Test default values of the run command."""
        args = create_parser().parse_args(['run', 'framework.inp'])

        self.assertEqual(args.command, 'run')
        self.assertEqual(args.size, 30)
        self.assertEqual(args.output_dir, 'Output')
        self.assertEqual(args.on_exists, 'fail')
        self.assertEqual(args.points, 30)
        self.assertIsNone(args.workers)

    def test_convert_probe_params(self):
        """Test that explicit probe parameters are parsed as four floats."""
        args = create_parser().parse_args(
            ['convert', 'mof.cif', '--probe', 'N2', '--probe-params', '36', '3.3', '0', '28']
        )

        self.assertEqual(args.probe_params, [36.0, 3.3, 0.0, 28.0])

    def test_invalid_policy(self):
        """Test that unknown output policies are rejected by the parser."""
        with self.assertRaises(SystemExit):
            with redirect_stderr(io.StringIO()):
                create_parser().parse_args(['run', 'framework.inp', '--on-exists', 'merge'])


class TestMain(unittest.TestCase):
    """Tests for the main entry point."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.input_path = self.temp_dir / "single.inp"
        self.input_path.write_text(SINGLE_ATOM_INPUT)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def run_main(self, args):
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(args)
        return code, output.getvalue()

    def test_no_arguments(self):
        """Test that help is shown without arguments."""
        code, output = self.run_main([])

        self.assertEqual(code, 1)
        self.assertIn("usage", output)

    def test_run(self):
        """Test a complete run from the command line."""
        output_dir = self.temp_dir / "Output"
        code, output = self.run_main(['run', str(self.input_path), '-n', '3',
                                      '-o', str(output_dir), '--no-progress'])

        self.assertEqual(code, 0)
        self.assertIn("Accessible volume", output)
        self.assertTrue((output_dir / "characteristic.dat").exists())
        self.assertTrue((output_dir / "potential_landscape.png").exists())

    def test_run_missing_input(self):
        """Test that a missing input file is reported as an error."""
        code, output = self.run_main(['run', str(self.temp_dir / "missing.inp"),
                                      '-o', str(self.temp_dir / "Output"), '--no-progress'])

        self.assertEqual(code, 1)
        self.assertIn("Error:", output)
        self.assertFalse((self.temp_dir / "Output").exists())

    def test_run_existing_output(self):
        """Test that an existing output directory is refused by default."""
        output_dir = self.temp_dir / "Output"
        output_dir.mkdir()

        code, output = self.run_main(['run', str(self.input_path), '-n', '2',
                                      '-o', str(output_dir), '--no-progress'])

        self.assertEqual(code, 1)
        self.assertIn("already exists", output)

    def test_convert(self):
        """Test converting a CIF into an input file."""
        cif_path = self.temp_dir / "co.cif"
        atoms = Atoms("CO", positions=[(0.0, 0.0, 0.0), (5.0, 5.0, 5.0)],
                      cell=[10.0, 10.0, 10.0], pbc=True)
        write(str(cif_path), atoms, format='cif')

        code, output = self.run_main(['convert', str(cif_path), '--probe', 'He'])

        self.assertEqual(code, 0)
        input_path = self.temp_dir / "co.inp"
        self.assertIn(str(input_path), output)
        self.assertEqual(read_input_file(input_path).probe, 'He')


if __name__ == '__main__':
    unittest.main()
