"""
Pairwise interaction energies between a probe and a framework site.

Energies are returned in J. Epsilon is given in K and is multiplied by the
Boltzmann constant; distances are in Å.
"""

import math

from .constants import KB, KE, Q
from .records import AtomSpecies


def lennard_jones_energy(sigma, epsilon, distance):
    """
    Compute the 6-12 Lennard-Jones energy between two particles.

    Args:
        sigma: Size parameter (Å)
        epsilon: Depth of the potential well (K)
        distance: Separation of the two particles (Å), must be positive

    Returns:
        Energy in J. Works elementwise on numpy arrays.
    """
    frac6 = (sigma / distance) ** 6
    return 4 * epsilon * KB * (frac6 * frac6 - frac6)


def coulomb_energy(charge_product, distance):
    """
    Compute the electrostatic energy between two point charges.

    Args:
        charge_product: Product of the two partial charges (e²)
        distance: Separation of the two charges (Å), must be positive

    Returns:
        Energy in J. Works elementwise on numpy arrays.
    """
    # 1e10 converts the Å distance to m
    return Q**2 * charge_product * KE * 1e10 / distance


def mix_parameters(first: AtomSpecies, second: AtomSpecies) -> tuple[float, float, float]:
    """
    Combine two species with the Lorentz-Berthelot rules.

    Returns:
        Tuple of (sigma, epsilon, charge_product)
    """
    sigma = (first.sigma + second.sigma) / 2
    epsilon = math.sqrt(first.epsilon * second.epsilon)
    return sigma, epsilon, first.charge * second.charge
