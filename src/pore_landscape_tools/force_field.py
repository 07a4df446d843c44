"""
Framework input generation from crystal structure files.

This module reads a CIF (or any format ASE understands), assigns UFF
Lennard-Jones parameters per element and partial charges from an optional
JSON file, and builds a FrameworkInput for a chosen probe species.
"""

import json
import logging
from pathlib import Path

from ase import Atoms
from ase.io import read

from .constants import BOLTZMANN_K_KCAL_MOL, PROBE_PARAMS, UFF_LJ_PARAMS
from .lattice import fractional_to_cartesian, transform_matrix
from .records import AtomSpecies, FrameworkAtom, FrameworkInput, LatticeParameters

LOG = logging.getLogger(__name__)

# Used for elements missing from the UFF table: [sigma (Å), epsilon (kcal/mol)]
FALLBACK_LJ_PARAMS = [3.0, 0.1]


def load_structure(path: str | Path) -> Atoms:
    """
    Load a crystal structure with ASE.

    Args:
        path: Structure file, usually a CIF

    Returns:
        ASE Atoms object with a periodic cell
    """
    try:
        atoms = read(str(path))
    except Exception as e:
        raise RuntimeError(f"Error loading crystal structure: {e}") from e

    if atoms.cell.rank != 3:
        raise ValueError(f"Structure {path} does not define a three dimensional unit cell")
    return atoms


def lattice_from_atoms(atoms: Atoms) -> LatticeParameters:
    """Lattice parameters (Å, degrees) of an ASE structure."""
    return LatticeParameters(*(float(value) for value in atoms.cell.cellpar()))


def generate_default_labels(symbols: list[str]) -> list[str]:
    """
    Generate per-atom labels (H1, H2, C1, etc.).

    Args:
        symbols: Element symbol of each atom

    Returns:
        List of labels in atom order
    """
    element_counts = {}
    labels = []

    for symbol in symbols:
        if symbol not in element_counts:
            element_counts[symbol] = 0
        element_counts[symbol] += 1

        labels.append(f"{symbol}{element_counts[symbol]}")

    return labels


def get_uff_parameters(symbol: str) -> dict[str, float]:
    """
    UFF Lennard-Jones parameters for an element.

    Returns:
        Dict with sigma (Å) and epsilon (K)
    """
    if symbol in UFF_LJ_PARAMS:
        sigma, epsilon = UFF_LJ_PARAMS[symbol]
    else:
        sigma, epsilon = FALLBACK_LJ_PARAMS
        LOG.warning(f"No UFF parameters found for {symbol}, using defaults")

    # Convert epsilon from kcal/mol to K
    return {"sigma": sigma, "epsilon": epsilon / BOLTZMANN_K_KCAL_MOL}


def load_charges(charge_file: str | Path | None) -> dict[str, float]:
    """
    Load partial charges from a JSON file mapping labels or element symbols to charges.
    """
    if charge_file is None:
        return {}

    charge_file = Path(charge_file)
    with charge_file.open() as f:
        charge_data = json.load(f)

    if not isinstance(charge_data, dict):
        raise ValueError(f"Charge file {charge_file} must contain a JSON object")
    return {str(key): float(value) for key, value in charge_data.items()}


def probe_species(probe: str, probe_params: list[float] | None = None) -> AtomSpecies:
    """
    Parameters of the probe particle.

    Args:
        probe: Name of a built-in probe, or a label for ``probe_params``
        probe_params: Explicit [epsilon (K), sigma (Å), charge, mass] values

    Returns:
        AtomSpecies for the probe
    """
    if probe_params is not None:
        epsilon, sigma, charge, mass = probe_params
        return AtomSpecies(float(epsilon), float(sigma), float(charge), float(mass))

    if probe not in PROBE_PARAMS:
        raise ValueError(f"Unknown probe '{probe}', available: {', '.join(sorted(PROBE_PARAMS))}")

    params = PROBE_PARAMS[probe]
    epsilon, sigma = params["parameters"]
    return AtomSpecies(epsilon, sigma, params["charge"], params["mass"])


def create_framework_input(atoms: Atoms, probe: str = "Ar",
                           probe_params: list[float] | None = None,
                           charges: dict[str, float] | None = None,
                           charge_scale_factor: float = 1.0,
                           per_atom_species: bool = False,
                           source: str | None = None) -> FrameworkInput:
    """
    Build a FrameworkInput from an ASE structure.

    Args:
        atoms: Periodic structure
        probe: Probe species name
        probe_params: Explicit probe parameters, see ``probe_species``
        charges: Mapping from atom label or element symbol to charge
        charge_scale_factor: Factor to scale all framework charges
        per_atom_species: Give every atom its own species (C1, C2, ...) so that
            each can carry a different charge
        source: Description of where the structure came from

    Returns:
        FrameworkInput with one unit cell of framework atoms
    """
    charges = charges or {}
    lattice = lattice_from_atoms(atoms)

    # Recompute positions in the cell orientation used by the grid evaluator
    matrix = transform_matrix(lattice)
    positions = fractional_to_cartesian(matrix, atoms.get_scaled_positions(wrap=True))

    symbols = atoms.get_chemical_symbols()
    masses = atoms.get_masses()
    labels = generate_default_labels(symbols) if per_atom_species else list(symbols)

    species = {}
    framework = []
    missing_charges = set()

    for label, symbol, mass, position in zip(labels, symbols, masses, positions, strict=True):
        if label not in species:
            if label in charges:
                charge = charges[label]
            elif symbol in charges:
                charge = charges[symbol]
            else:
                charge = 0.0
                if charges:
                    missing_charges.add(label)

            params = get_uff_parameters(symbol)
            species[label] = AtomSpecies(
                epsilon=params["epsilon"],
                sigma=params["sigma"],
                charge=charge * charge_scale_factor,
                mass=float(mass),
            )

        framework.append(FrameworkAtom(label, *(float(value) for value in position)))

    if missing_charges:
        LOG.warning(f"No charge found for {', '.join(sorted(missing_charges))}, using 0.0")

    if probe in species:
        raise ValueError(f"Probe label '{probe}' clashes with a framework species")
    species[probe] = probe_species(probe, probe_params)

    framework_input = FrameworkInput(species, lattice, tuple(framework), probe, source=source)
    framework_input.validate()

    LOG.info(f"Built framework with {len(framework)} atoms and {len(species) - 1} species")
    return framework_input


def convert_structure(structure_path: str | Path, probe: str = "Ar",
                      probe_params: list[float] | None = None,
                      charge_file: str | Path | None = None,
                      charge_scale_factor: float = 1.0,
                      per_atom_species: bool = False) -> FrameworkInput:
    """
    Load a structure file and build its FrameworkInput.

    Args:
        structure_path: CIF or other ASE-readable structure
        probe: Probe species name
        probe_params: Explicit probe parameters
        charge_file: JSON file with partial charges (optional)
        charge_scale_factor: Factor to scale all framework charges
        per_atom_species: Give every atom its own species label

    Returns:
        FrameworkInput ready to be written with ``write_input_file``
    """
    atoms = load_structure(structure_path)
    print(f"Loaded structure: {atoms.get_chemical_formula()} ({len(atoms)} atoms)")

    return create_framework_input(
        atoms,
        probe=probe,
        probe_params=probe_params,
        charges=load_charges(charge_file),
        charge_scale_factor=charge_scale_factor,
        per_atom_species=per_atom_species,
        source=str(structure_path),
    )
