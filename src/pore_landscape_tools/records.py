"""
Record types describing a framework, its atoms and the probe species.

All records are immutable and are created once while reading the input file.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class UndefinedSpeciesError(KeyError):
    """Raised when a framework atom or the probe names an unknown species."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass(frozen=True)
class AtomSpecies:
    """Lennard-Jones parameters, partial charge and mass of one species."""

    epsilon: float  # K
    sigma: float  # Å
    charge: float  # e
    mass: float  # amu

    def __post_init__(self):
        for name in ("epsilon", "sigma", "charge", "mass"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Species {name} must be finite, got {getattr(self, name)}")
        if self.epsilon < 0:
            raise ValueError(f"Species epsilon must not be negative, got {self.epsilon}")
        if self.sigma <= 0:
            raise ValueError(f"Species sigma must be positive, got {self.sigma}")
        if self.mass < 0:
            raise ValueError(f"Species mass must not be negative, got {self.mass}")


@dataclass(frozen=True)
class LatticeParameters:
    """Unit cell lengths (Å) and angles (degrees)."""

    a: float
    b: float
    c: float
    alpha: float
    beta: float
    gamma: float

    def __post_init__(self):
        for name in ("a", "b", "c"):
            if not getattr(self, name) > 0:
                raise ValueError(f"Cell length {name} must be positive, got {getattr(self, name)}")
        for name in ("alpha", "beta", "gamma"):
            angle = getattr(self, name)
            if not 0 < angle < 180:
                raise ValueError(f"Cell angle {name} must lie in (0, 180) degrees, got {angle}")

    @property
    def lengths(self) -> tuple[float, float, float]:
        return self.a, self.b, self.c

    @property
    def angles(self) -> tuple[float, float, float]:
        return self.alpha, self.beta, self.gamma


@dataclass(frozen=True)
class FrameworkAtom:
    """A framework atom in Cartesian coordinates (Å)."""

    species: str
    x: float
    y: float
    z: float

    @property
    def position(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z


@dataclass(frozen=True)
class FrameworkInput:
    """
    Everything needed to evaluate a potential landscape.

    Attributes:
        species: Mapping from species label to its parameters
        lattice: Unit cell of the framework
        atoms: Framework atoms of one unit cell
        probe: Species label of the probe particle
    """

    species: Mapping[str, AtomSpecies]
    lattice: LatticeParameters
    atoms: tuple[FrameworkAtom, ...]
    probe: str
    source: str | None = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "species", MappingProxyType(dict(self.species)))
        object.__setattr__(self, "atoms", tuple(self.atoms))

    def get_species(self, label: str) -> AtomSpecies:
        """Look up a species, raising UndefinedSpeciesError if it is missing."""
        try:
            return self.species[label]
        except KeyError:
            raise UndefinedSpeciesError(
                f"Species '{label}' is not defined by any ATOMPROP record"
            ) from None

    def validate(self) -> None:
        """Check that the probe and every framework atom reference a defined species."""
        self.get_species(self.probe)
        missing = sorted({atom.species for atom in self.atoms} - set(self.species))
        if missing:
            raise UndefinedSpeciesError(
                f"Framework atoms reference undefined species: {', '.join(missing)}"
            )

    @property
    def probe_species(self) -> AtomSpecies:
        return self.get_species(self.probe)

    @property
    def unit_cell_mass(self) -> float:
        """Total mass of the framework atoms in amu."""
        return sum(self.get_species(atom.species).mass for atom in self.atoms)
