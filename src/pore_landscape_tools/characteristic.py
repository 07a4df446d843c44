"""
Characteristic curve of a framework: accessible pore volume as a function of
adsorption potential.

A grid point counts as accessible at a given potential threshold when the
probe energy there is at or below the threshold. Each grid point stands for
an equal share of the unit cell volume.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from .constants import (
    CHARACTERISTIC_DATA_NAME,
    CHARACTERISTIC_HEADER,
    CHARACTERISTIC_PLOT_NAME,
    DEFAULT_RUN_SETTINGS,
    MC,
)
from .lattice import unit_cell_volume
from .potential_grid import PotentialGrid
from .records import FrameworkInput

LOG = logging.getLogger(__name__)

THRESHOLD_CEILING = DEFAULT_RUN_SETTINGS["ThresholdCeiling"]


def generate_threshold_range(min_potential: float, max_potential: float,
                             count: int) -> list[float]:
    """
    Generate evenly spaced potential thresholds, both ends included.

    Args:
        min_potential: Lowest threshold in kJ/mol
        max_potential: Highest threshold in kJ/mol
        count: Number of thresholds

    Returns:
        List of thresholds
    """
    if count <= 0:
        raise ValueError(f"Number of thresholds must be positive, got {count}")
    if count == 1:
        return [min_potential]

    return [min_potential + i * (max_potential - min_potential) / (count - 1)
            for i in range(count)]


def unit_cell_mass_grams(framework_input: FrameworkInput) -> float:
    """Mass of the framework atoms in one unit cell, in g."""
    mass = framework_input.unit_cell_mass * MC * 1e3
    if mass <= 0:
        raise ValueError("Unit cell mass must be positive; the framework has no massive atoms")
    return mass


def sample_volume_ml(framework_input: FrameworkInput, size: int) -> float:
    """Volume represented by one grid point, in ml."""
    return unit_cell_volume(framework_input.lattice) * 1e-24 / size**3


def build_characteristic_curve(framework_input: FrameworkInput, grid: PotentialGrid,
                               npoints: int = DEFAULT_RUN_SETTINGS["CharacteristicPoints"],
                               output_dir: str | Path | None = None) -> pd.DataFrame:
    """
    Compute the characteristic curve from a potential grid.

    Args:
        framework_input: Framework the grid was computed for
        grid: Potential grid with energies in kJ/mol
        npoints: Number of potential thresholds
        output_dir: Directory for characteristic.dat and characteristic.png
            (nothing is written if None)

    Returns:
        DataFrame with columns ``potential_kj_mol`` (positive magnitude of the
        threshold) and ``volume_ml_g``
    """
    mass = unit_cell_mass_grams(framework_input)
    point_volume = sample_volume_ml(framework_input, grid.size)

    # Without any attractive region every threshold collapses onto the ceiling
    lowest = min(grid.minimum_energy, THRESHOLD_CEILING)
    thresholds = generate_threshold_range(lowest, THRESHOLD_CEILING, npoints)

    energies = grid.energies.ravel()
    rows = []
    for threshold in thresholds:
        count = int(np.count_nonzero(energies <= threshold))
        rows.append({
            "potential_kj_mol": -threshold,
            "volume_ml_g": count * point_volume / mass,
        })

    curve = pd.DataFrame(rows, columns=["potential_kj_mol", "volume_ml_g"])
    LOG.info(f"Total accessible volume: {curve['volume_ml_g'].iloc[-1]:.4f} ml/g")

    if output_dir is not None:
        output_dir = Path(output_dir)
        data_path = write_characteristic_file(curve, output_dir / CHARACTERISTIC_DATA_NAME)
        LOG.info(f"Characteristic curve data saved: {data_path}")

        from .plotting import plot_characteristic_curve

        plot_path = plot_characteristic_curve(curve, output_dir / CHARACTERISTIC_PLOT_NAME)
        LOG.info(f"Characteristic curve plot saved: {plot_path}")

    return curve


def write_characteristic_file(curve: pd.DataFrame, output_path: Path) -> Path:
    """
    Write the curve as tab separated text with a commented header.

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    with output_path.open("w") as f:
        f.write(CHARACTERISTIC_HEADER)
        curve.to_csv(f, sep="\t", header=False, index=False, float_format="%.10g")
    return output_path


def read_characteristic_file(path: Path) -> pd.DataFrame:
    """Read a file written by ``write_characteristic_file``."""
    return pd.read_csv(path, sep="\t", comment="#", header=None,
                       names=["potential_kj_mol", "volume_ml_g"])
