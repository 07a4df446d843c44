"""
Command line interface for pore_landscape_tools.

This module provides a unified CLI for computing potential landscapes and for
converting crystal structures into framework input files.
"""

import argparse
import logging
import sys

from .constants import DEFAULT_RUN_SETTINGS, OUTPUT_POLICIES, PROBE_PARAMS


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        description="Pore landscape tools - probe potential grids and characteristic curves",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Run command
    run_parser = subparsers.add_parser(
        'run',
        help='Compute the potential landscape and characteristic curve of a framework',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    run_parser.add_argument("input", help="Framework input file")
    run_parser.add_argument("-n", "--size", type=int, default=DEFAULT_RUN_SETTINGS["GridSize"],
                            help="Grid points along each lattice direction")
    run_parser.add_argument("-o", "--output-dir", type=str,
                            default=DEFAULT_RUN_SETTINGS["OutputDirectory"],
                            help="Output directory name")
    run_parser.add_argument("--on-exists", type=str, default=DEFAULT_RUN_SETTINGS["OnExists"],
                            choices=OUTPUT_POLICIES,
                            help="What to do if the output directory already exists")
    run_parser.add_argument("-p", "--points", type=int,
                            default=DEFAULT_RUN_SETTINGS["CharacteristicPoints"],
                            help="Number of points on the characteristic curve")
    run_parser.add_argument("-w", "--workers", type=int, default=None,
                            help="Number of parallel workers; each holds one grid row of "
                                 "pair distances in memory (default: auto-detect)")
    run_parser.add_argument("--no-progress", action="store_true",
                            help="Hide the progress bar")

    # Convert command
    convert_parser = subparsers.add_parser(
        'convert',
        help='Create a framework input file from a CIF structure',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    convert_parser.add_argument("structure", help="Crystal structure file (CIF format)")
    convert_parser.add_argument("-o", "--output", type=str, default=None,
                                help="Input file to write (default: <structure>.inp)")
    convert_parser.add_argument("--probe", type=str, default="Ar",
                                help=f"Probe species ({', '.join(sorted(PROBE_PARAMS))} "
                                     "or any label with --probe-params)")
    convert_parser.add_argument("--probe-params", type=float, nargs=4, default=None,
                                metavar=("EPSILON", "SIGMA", "CHARGE", "MASS"),
                                help="Explicit probe parameters (K, Å, e, amu)")
    convert_parser.add_argument("--charge-file", type=str, default=None,
                                help="JSON file mapping atom labels or elements to charges")
    convert_parser.add_argument("--charge-scale-factor", type=float, default=1.0,
                                help="Factor to scale all framework charges")
    convert_parser.add_argument("--per-atom-species", action="store_true",
                                help="Give every atom its own species label (C1, C2, ...)")

    return parser


def run_command(args) -> int:
    """Compute the landscape for an input file."""
    from .workflow import run_landscape

    grid, curve, output_dir = run_landscape(
        args.input,
        size=args.size,
        output_dir=args.output_dir,
        on_exists=args.on_exists,
        max_workers=args.workers,
        npoints=args.points,
        show_progress=not args.no_progress,
    )

    print("\n=== Potential Landscape Summary ===")
    print(f"Grid points: {len(grid)} ({grid.size}^3)")
    print(f"Minimum potential: {grid.minimum_energy:.4f} kJ/mol")
    print(f"Accessible volume: {curve['volume_ml_g'].iloc[-1]:.4f} ml/g")
    print(f"Results written to: {output_dir}")
    return 0


def convert_command(args) -> int:
    """Write a framework input file for a crystal structure."""
    from pathlib import Path

    from .force_field import convert_structure
    from .input_file import write_input_file

    structure_path = Path(args.structure)
    output_path = Path(args.output) if args.output else structure_path.with_suffix(".inp")

    framework_input = convert_structure(
        structure_path,
        probe=args.probe,
        probe_params=args.probe_params,
        charge_file=args.charge_file,
        charge_scale_factor=args.charge_scale_factor,
        per_atom_species=args.per_atom_species,
    )
    write_input_file(framework_input, output_path,
                     title=f"Generated from {structure_path.name}, probe {args.probe}")

    print(f"Framework atoms: {len(framework_input.atoms)}")
    print(f"Species: {len(framework_input.species)}")
    print(f"Input file written: {output_path}")
    return 0


def main(args=None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    # If no arguments provided, show help
    if not args:
        parser.print_help()
        return 1

    parsed_args = parser.parse_args(args)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        return 1

    # Setup logging
    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        if parsed_args.command == 'run':
            return run_command(parsed_args)
        elif parsed_args.command == 'convert':
            return convert_command(parsed_args)
        else:
            parser.print_help()
            return 1

    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
