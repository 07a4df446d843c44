"""
Potential energy landscape of a probe particle inside a periodic framework.

The unit cell is sampled on a uniform fractional grid. For every grid point
the Lennard-Jones and Coulomb energies with all framework atoms and their 26
neighbouring periodic images are summed. Rows of the grid are evaluated in
parallel with progress tracking.
"""

import itertools
import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

import numpy as np
from tqdm import tqdm

from .constants import DEFAULT_RUN_SETTINGS, LANDSCAPE_PLOT_NAME, NA
from .energy import coulomb_energy, lennard_jones_energy, mix_parameters
from .lattice import fractional_to_cartesian, periodic_offsets, transform_matrix
from .records import FrameworkInput

LOG = logging.getLogger(__name__)

OVERLAP_FACTOR = DEFAULT_RUN_SETTINGS["OverlapFactor"]
CUTOFF_FACTOR = DEFAULT_RUN_SETTINGS["CutoffFactor"]
ATOM_CHUNK_SIZE = DEFAULT_RUN_SETTINGS["AtomChunkSize"]

# J per particle to kJ/mol
ENERGY_TO_KJ_MOL = NA * 1e-3


def create_progress_bar(total: int, desc: str = "Processing", disable: bool = False) -> Any:
    """Create a tqdm progress bar counting grid rows."""
    return tqdm(total=total, desc=desc, unit='row', disable=disable)


class PotentialGrid:
    """
    Read-only grid of Cartesian positions and probe energies.

    ``values[i, j, k]`` holds (x, y, z, energy) of the point at fractional
    coordinates (s[i], s[j], s[k]) with ``s = linspace(0, 1, size)``.
    Positions are in Å, energies in kJ/mol.
    """

    def __init__(self, values: np.ndarray):
        values = np.array(values, dtype=float)
        if values.ndim != 4 or values.shape[3] != 4 or len(set(values.shape[:3])) != 1:
            raise ValueError(f"Expected an array of shape (size, size, size, 4), got {values.shape}")
        values.flags.writeable = False
        self.values = values

    @property
    def size(self) -> int:
        return self.values.shape[0]

    @property
    def positions(self) -> np.ndarray:
        return self.values[..., :3]

    @property
    def energies(self) -> np.ndarray:
        return self.values[..., 3]

    @property
    def minimum_energy(self) -> float:
        return float(self.energies.min())

    def flattened(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return x, y, z and energy as flat arrays with the first grid index varying fastest."""
        return tuple(self.values[..., channel].ravel(order='F') for channel in range(4))

    def __len__(self) -> int:
        return self.size ** 3

    def __repr__(self) -> str:
        return f"PotentialGrid(size={self.size}, minimum_energy={self.minimum_energy:.4f})"


def framework_images(framework_input: FrameworkInput, offsets: np.ndarray) -> np.ndarray:
    """
    Cartesian positions of all periodic images of the framework atoms.

    Returns:
        (n_atoms, n_offsets, 3) array
    """
    positions = np.array([atom.position for atom in framework_input.atoms], dtype=float)
    positions = positions.reshape(-1, 3)
    return positions[:, np.newaxis, :] + offsets[np.newaxis, :, :]


def mixed_parameters(framework_input: FrameworkInput) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Mix the probe with every framework atom.

    Returns:
        Arrays of (sigma, epsilon, charge_product), one entry per framework atom
    """
    probe = framework_input.probe_species
    mixed = [mix_parameters(probe, framework_input.get_species(atom.species))
             for atom in framework_input.atoms]
    if not mixed:
        return np.zeros(0), np.zeros(0), np.zeros(0)
    sigma, epsilon, charge = (np.array(column, dtype=float) for column in zip(*mixed))
    return sigma, epsilon, charge


def cell_energy(point, image_positions: np.ndarray, sigma: np.ndarray,
                epsilon: np.ndarray, charge_product: np.ndarray,
                overlap_factor: float = OVERLAP_FACTOR,
                cutoff_factor: float = CUTOFF_FACTOR) -> float:
    """
    Energy of the probe at a single point, in kJ/mol.

    An image closer than ``overlap_factor * sigma`` puts the point inside a
    hard core: the energy is 0 and no further contributions are summed.
    Images beyond ``cutoff_factor * sigma`` are ignored. A net repulsive
    total is reported as 0.

    Args:
        point: Cartesian position of the probe (Å)
        image_positions: (n_atoms, n_offsets, 3) periodic image positions
        sigma: Mixed size parameter per atom
        epsilon: Mixed well depth per atom
        charge_product: Charge product per atom
        overlap_factor: Hard-core radius in units of sigma
        cutoff_factor: Interaction cutoff in units of sigma
    """
    energy = 0.0
    for images, sig, eps, charge in zip(image_positions, sigma, epsilon, charge_product):
        for image in images:
            r = math.dist(image, point)
            if r <= overlap_factor * sig:
                return 0.0
            if r < cutoff_factor * sig:
                energy += lennard_jones_energy(sig, eps, r)
                energy += coulomb_energy(charge, r)

    if energy > 0:
        energy = 0.0
    return float(energy * ENERGY_TO_KJ_MOL)


def row_energies(points: np.ndarray, image_positions: np.ndarray, sigma: np.ndarray,
                 epsilon: np.ndarray, charge_product: np.ndarray,
                 overlap_factor: float = OVERLAP_FACTOR,
                 cutoff_factor: float = CUTOFF_FACTOR,
                 atom_chunk_size: int = ATOM_CHUNK_SIZE) -> np.ndarray:
    """
    Vectorised ``cell_energy`` for a batch of points.

    Framework atoms are processed ``atom_chunk_size`` at a time, so the
    temporary arrays of one call hold at most
    n_points * atom_chunk_size * n_offsets distances.

    Args:
        points: (n_points, 3) Cartesian positions
        image_positions: (n_atoms, n_offsets, 3) periodic image positions
        atom_chunk_size: Number of framework atoms evaluated per step

    Returns:
        (n_points,) energies in kJ/mol
    """
    if atom_chunk_size <= 0:
        raise ValueError(f"Atom chunk size must be positive, got {atom_chunk_size}")

    points = np.asarray(points, dtype=float).reshape(-1, 3)
    energy = np.zeros(len(points))
    overlap = np.zeros(len(points), dtype=bool)

    for start in range(0, len(image_positions), atom_chunk_size):
        chunk = slice(start, start + atom_chunk_size)
        diff = image_positions[np.newaxis, chunk, :, :] - points[:, np.newaxis, np.newaxis, :]
        r = np.sqrt(np.einsum('pnok,pnok->pno', diff, diff))

        sig = sigma[np.newaxis, chunk, np.newaxis]
        eps = epsilon[np.newaxis, chunk, np.newaxis]
        charge = charge_product[np.newaxis, chunk, np.newaxis]

        overlap |= (r <= overlap_factor * sig).any(axis=(1, 2))
        in_range = (r > overlap_factor * sig) & (r < cutoff_factor * sig)

        safe_r = np.where(in_range, r, 1.0)
        pair_energy = lennard_jones_energy(sig, eps, safe_r) + coulomb_energy(charge, safe_r)
        energy += np.where(in_range, pair_energy, 0.0).sum(axis=(1, 2))

    energy[overlap] = 0.0
    energy = np.minimum(energy, 0.0)
    return energy * ENERGY_TO_KJ_MOL


def grid_positions(matrix: np.ndarray, size: int) -> np.ndarray:
    """Cartesian positions of a uniform size^3 fractional grid, shape (size, size, size, 3)."""
    fractions = np.linspace(0.0, 1.0, size)
    fractional = np.stack(np.meshgrid(fractions, fractions, fractions, indexing='ij'), axis=-1)
    return fractional_to_cartesian(matrix, fractional)


def compute_potential_grid(framework_input: FrameworkInput, size: int,
                           max_workers: int | None = None,
                           output_dir: str | Path | None = None,
                           show_progress: bool = True,
                           vectorized: bool = True,
                           overlap_factor: float = OVERLAP_FACTOR,
                           cutoff_factor: float = CUTOFF_FACTOR) -> PotentialGrid:
    """
    Compute the probe potential energy on a size x size x size grid.

    Args:
        framework_input: Species, lattice, framework atoms and probe
        size: Number of samples along each lattice direction
        max_workers: Maximum number of worker threads (None = executor default).
            Each worker holds the temporaries of one row, so this also bounds memory
        output_dir: Directory for the landscape plot (no plot if None)
        show_progress: Whether to display a progress bar
        vectorized: Evaluate rows with numpy instead of the per-point loop
        overlap_factor: Hard-core radius in units of sigma
        cutoff_factor: Interaction cutoff in units of sigma

    Returns:
        PotentialGrid with positions in Å and energies in kJ/mol
    """
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")

    framework_input.validate()

    matrix = transform_matrix(framework_input.lattice)
    offsets = periodic_offsets(matrix)
    images = framework_images(framework_input, offsets)
    sigma, epsilon, charge_product = mixed_parameters(framework_input)

    values = np.zeros((size, size, size, 4))
    values[..., :3] = grid_positions(matrix, size)

    LOG.info(f"Computing {size}^3 grid for probe {framework_input.probe} "
             f"with {len(framework_input.atoms)} framework atoms")

    def evaluate_row(i: int, j: int) -> None:
        points = values[i, j, :, :3]
        if vectorized:
            values[i, j, :, 3] = row_energies(points, images, sigma, epsilon, charge_product,
                                              overlap_factor, cutoff_factor)
        else:
            values[i, j, :, 3] = [
                cell_energy(point, images, sigma, epsilon, charge_product,
                            overlap_factor, cutoff_factor)
                for point in points
            ]

    rows = list(itertools.product(range(size), repeat=2))
    progress_bar = create_progress_bar(len(rows), "Computing potential grid",
                                       disable=not show_progress)

    try:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_row = {executor.submit(evaluate_row, i, j): (i, j) for i, j in rows}
            try:
                for future in as_completed(future_to_row):
                    future.result()
                    progress_bar.update(1)
            except Exception:
                for future in future_to_row:
                    future.cancel()
                raise
    finally:
        progress_bar.close()

    grid = PotentialGrid(values)
    LOG.info(f"Minimum potential energy: {grid.minimum_energy:.4f} kJ/mol")

    if output_dir is not None:
        from .plotting import plot_potential_landscape

        plot_path = plot_potential_landscape(grid, Path(output_dir) / LANDSCAPE_PLOT_NAME)
        LOG.info(f"Potential landscape plot saved: {plot_path}")

    return grid
