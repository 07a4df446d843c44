"""
Unit cell geometry.

Converts fractional coordinates to Cartesian ones for a triclinic cell with
a along x and b in the xy plane, and enumerates the periodic image offsets
of the neighbouring cells.
"""

import itertools

import numpy as np

from .records import LatticeParameters


class DegenerateCellError(ValueError):
    """Raised when the cell angles cannot describe a real unit cell."""


def transform_matrix(lattice: LatticeParameters) -> np.ndarray:
    """
    Build the fractional-to-Cartesian transformation matrix.

    Args:
        lattice: Cell lengths and angles

    Returns:
        (3, 3) matrix whose columns are the lattice vectors
    """
    a, b, c = lattice.lengths
    alpha, beta, gamma = np.radians(lattice.angles)

    cos_alphastar = (np.cos(beta) * np.cos(gamma) - np.cos(alpha)) / (np.sin(beta) * np.sin(gamma))
    if not -1.0 <= cos_alphastar <= 1.0:
        raise DegenerateCellError(
            f"Cell angles alpha={lattice.alpha}, beta={lattice.beta}, gamma={lattice.gamma} "
            "do not describe a valid unit cell"
        )
    alphastar = np.arccos(cos_alphastar)

    return np.array([
        [a, b * np.cos(gamma), c * np.cos(beta)],
        [0.0, b * np.sin(gamma), -c * np.sin(beta) * np.cos(alphastar)],
        [0.0, 0.0, c * np.sin(beta) * np.sin(alphastar)],
    ])


def fractional_to_cartesian(matrix: np.ndarray, fractional) -> np.ndarray:
    """Apply the transformation matrix to one or more (..., 3) fractional coordinates."""
    return np.asarray(fractional, dtype=float) @ matrix.T


def periodic_offsets(matrix: np.ndarray) -> np.ndarray:
    """
    Cartesian offsets of the 27 cells surrounding (and including) the origin cell.

    Returns:
        (27, 3) array, one row per integer triple in {-1, 0, 1}^3
    """
    shifts = np.array(list(itertools.product((-1, 0, 1), repeat=3)), dtype=float)
    return fractional_to_cartesian(matrix, shifts)


def unit_cell_volume(lattice: LatticeParameters) -> float:
    """Volume of the unit cell in Å^3."""
    a, b, c = lattice.lengths
    alpha, beta, gamma = np.radians(lattice.angles)

    radicand = (np.sin(alpha) ** 2 + np.sin(beta) ** 2 + np.sin(gamma) ** 2
                + 2 * np.cos(alpha) * np.cos(beta) * np.cos(gamma) - 2)
    if radicand <= 0:
        raise DegenerateCellError(
            f"Cell angles alpha={lattice.alpha}, beta={lattice.beta}, gamma={lattice.gamma} "
            "give a non-positive cell volume"
        )
    return float(a * b * c * np.sqrt(radicand))
