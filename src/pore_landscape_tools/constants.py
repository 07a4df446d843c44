"""
Physical constants and default parameters for potential landscape calculations.
"""

# Physical constants (CODATA 2018, SI units)
KB = 1.380649e-23  # Boltzmann constant, J/K
Q = 1.602176634e-19  # elementary charge, C
KE = 8.9875517923e9  # Coulomb constant, N·m²/C²
NA = 6.02214076e23  # Avogadro's number, 1/mol
MC = 1.66053906660e-27  # atomic mass unit, kg

BOLTZMANN_K_KCAL_MOL = 0.001987204  # kcal/(mol·K)

# Default run settings
DEFAULT_RUN_SETTINGS = {
    "GridSize": 30,
    "CharacteristicPoints": 30,
    "OutputDirectory": "Output",
    "OnExists": "fail",
    "OverlapFactor": 0.5,
    "CutoffFactor": 5.0,
    "ThresholdCeiling": -1e-6,
    "AtomChunkSize": 256,
}

OUTPUT_POLICIES = ("fail", "overwrite", "version")

# Output file names inside the run directory
LANDSCAPE_PLOT_NAME = "potential_landscape.png"
CHARACTERISTIC_DATA_NAME = "characteristic.dat"
CHARACTERISTIC_PLOT_NAME = "characteristic.png"

CHARACTERISTIC_HEADER = "# Potential [kJ/mol] \t Volume [ml/g] \n"

# UFF Lennard-Jones parameters (Rappe et al., J. Am. Chem. Soc. 1992, 114, 10024)
# [sigma (Å), epsilon (kcal/mol)], sigma = x_i / 2^(1/6)
UFF_LJ_PARAMS = {
    "H": [2.571, 0.044],
    "B": [3.638, 0.180],
    "C": [3.431, 0.105],
    "N": [3.261, 0.069],
    "O": [3.118, 0.060],
    "F": [2.997, 0.050],
    "Na": [2.658, 0.030],
    "Mg": [2.691, 0.111],
    "Al": [4.008, 0.505],
    "Si": [3.826, 0.402],
    "P": [3.695, 0.305],
    "S": [3.595, 0.274],
    "Cl": [3.516, 0.227],
    "Fe": [2.594, 0.013],
    "Co": [2.559, 0.014],
    "Ni": [2.525, 0.015],
    "Cu": [3.114, 0.005],
    "Zn": [2.462, 0.124],
    "Br": [3.732, 0.251],
    "Zr": [2.783, 0.069],
}

# Probe species parameters (single-site models)
PROBE_PARAMS = {
    "He": {
        "parameters": [10.9, 2.64],  # [epsilon (K), sigma (Å)]
        "charge": 0.0,
        "mass": 4.0026,
        "source": "Hirschfelder, Curtiss and Bird, Molecular Theory of Gases and Liquids, 1954",
    },
    "H2": {
        "parameters": [34.2, 2.96],
        "charge": 0.0,
        "mass": 2.016,
        "source": "Buch, J. Chem. Phys. 1994, 100, 7610",
    },
    "CH4": {
        "parameters": [148.0, 3.73],
        "charge": 0.0,
        "mass": 16.043,
        "source": "TraPPE-UA, Martin and Siepmann, J. Phys. Chem. B 1998, 102, 2569",
    },
    "Ar": {
        "parameters": [119.8, 3.40],
        "charge": 0.0,
        "mass": 39.948,
        "source": "Hirschfelder, Curtiss and Bird, Molecular Theory of Gases and Liquids, 1954",
    },
    "Kr": {
        "parameters": [166.4, 3.636],
        "charge": 0.0,
        "mass": 83.798,
        "source": "Talu and Myers, Colloids Surf. A 2001, 187, 83",
    },
    "Xe": {
        "parameters": [221.0, 4.10],
        "charge": 0.0,
        "mass": 131.293,
        "source": "Talu and Myers, Colloids Surf. A 2001, 187, 83",
    },
}
