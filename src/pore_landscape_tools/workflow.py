"""
End-to-end potential landscape runs.

This module handles the output directory and chains input parsing, grid
evaluation and the characteristic curve.
"""

import logging
from pathlib import Path

import pandas as pd

from .characteristic import build_characteristic_curve, unit_cell_mass_grams
from .constants import DEFAULT_RUN_SETTINGS, OUTPUT_POLICIES
from .input_file import read_input_file
from .lattice import transform_matrix, unit_cell_volume
from .potential_grid import PotentialGrid, compute_potential_grid

LOG = logging.getLogger(__name__)


class OutputExistsError(FileExistsError):
    """Raised when the output directory exists and the policy is 'fail'."""


def prepare_output_directory(output_dir: str | Path,
                             on_exists: str = DEFAULT_RUN_SETTINGS["OnExists"]) -> Path:
    """
    Create the output directory according to a collision policy.

    Args:
        output_dir: Requested directory
        on_exists: "fail" to refuse an existing directory, "overwrite" to reuse
            it, or "version" to create the first free ``<name>_<n>`` instead

    Returns:
        Path of the directory that will receive the output files
    """
    if on_exists not in OUTPUT_POLICIES:
        raise ValueError(f"Unknown output policy '{on_exists}', expected one of {OUTPUT_POLICIES}")

    output_dir = Path(output_dir)

    if output_dir.exists():
        if not output_dir.is_dir():
            raise OutputExistsError(f"Output path {output_dir} exists and is not a directory")
        if on_exists == "fail":
            raise OutputExistsError(
                f"Output directory {output_dir} already exists "
                "(use --on-exists overwrite or version)"
            )
        if on_exists == "overwrite":
            LOG.warning(f"Overwriting files in existing output directory {output_dir}")
            return output_dir

        version = 1
        while (candidate := output_dir.with_name(f"{output_dir.name}_{version}")).exists():
            version += 1
        output_dir = candidate

    output_dir.mkdir(parents=True)
    LOG.info(f"Created output directory {output_dir}")
    return output_dir


def run_landscape(input_path: str | Path,
                  size: int = DEFAULT_RUN_SETTINGS["GridSize"],
                  output_dir: str | Path = DEFAULT_RUN_SETTINGS["OutputDirectory"],
                  on_exists: str = DEFAULT_RUN_SETTINGS["OnExists"],
                  max_workers: int | None = None,
                  npoints: int = DEFAULT_RUN_SETTINGS["CharacteristicPoints"],
                  show_progress: bool = True) -> tuple[PotentialGrid, pd.DataFrame, Path]:
    """
    Compute the potential landscape and characteristic curve for an input file.

    Args:
        input_path: Framework input file
        size: Grid points along each lattice direction
        output_dir: Directory for the plots and the curve data
        on_exists: Output directory collision policy
        max_workers: Maximum number of worker threads
        npoints: Number of points on the characteristic curve
        show_progress: Whether to display a progress bar

    Returns:
        Tuple of (grid, characteristic curve, output directory used)
    """
    framework_input = read_input_file(input_path)

    # Reject impossible inputs before anything is written
    transform_matrix(framework_input.lattice)
    unit_cell_volume(framework_input.lattice)
    unit_cell_mass_grams(framework_input)
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")

    output_dir = prepare_output_directory(output_dir, on_exists)

    grid = compute_potential_grid(framework_input, size, max_workers=max_workers,
                                  output_dir=output_dir, show_progress=show_progress)
    curve = build_characteristic_curve(framework_input, grid, npoints=npoints,
                                       output_dir=output_dir)
    return grid, curve, output_dir
