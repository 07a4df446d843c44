"""
Reader and writer for the plain-text framework input format.

Each non-blank line is a whitespace separated record:

    ATOMPROP  <species> <epsilon> <sigma> <charge> <mass>
    FRAMEPROP <a> <b> <c> <alpha> <beta> <gamma>
    FRAMEWORK <species> <x> <y> <z>
    PROBE     <species>

Records may appear in any order. Lines starting with an unknown keyword are
ignored, which also makes ``#`` usable for comments.
"""

import logging
from pathlib import Path

from .records import AtomSpecies, FrameworkAtom, FrameworkInput, LatticeParameters

LOG = logging.getLogger(__name__)

# Number of fields following the keyword for each record type
RECORD_FIELDS = {
    "ATOMPROP": 5,
    "FRAMEPROP": 6,
    "FRAMEWORK": 4,
    "PROBE": 1,
}


class InputFormatError(ValueError):
    """Raised when a line of the input file cannot be interpreted."""

    def __init__(self, message: str, line_number: int | None = None,
                 line: str | None = None, source: str | None = None):
        self.line_number = line_number
        self.line = line
        self.source = source

        location = source or "<input>"
        if line_number is not None:
            location = f"{location}, line {line_number}"
        text = f"{location}: {message}"
        if line is not None:
            text = f"{text}: '{line.strip()}'"
        super().__init__(text)


def _parse_floats(tokens: list[str]) -> list[float]:
    return [float(token) for token in tokens]


def parse_input_lines(lines, source: str | None = None) -> FrameworkInput:
    """
    Parse input records into a FrameworkInput.

    Args:
        lines: Iterable of text lines
        source: Name used in error messages (usually the file path)

    Returns:
        Validated FrameworkInput

    Raises:
        InputFormatError: If a record is malformed or a required record is missing
        UndefinedSpeciesError: If the probe or a framework atom uses an unknown species
    """
    species = {}
    lattice = None
    atoms = []
    probe = None

    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue

        keyword = tokens[0]
        if keyword not in RECORD_FIELDS:
            LOG.debug(f"Skipping line {line_number} with unknown keyword {keyword}")
            continue

        fields = tokens[1:]
        if len(fields) < RECORD_FIELDS[keyword]:
            raise InputFormatError(
                f"{keyword} record needs {RECORD_FIELDS[keyword]} fields, found {len(fields)}",
                line_number, line, source
            )

        try:
            if keyword == "ATOMPROP":
                epsilon, sigma, charge, mass = _parse_floats(fields[1:5])
                species[fields[0]] = AtomSpecies(epsilon, sigma, charge, mass)

            elif keyword == "FRAMEPROP":
                lattice = LatticeParameters(*_parse_floats(fields[:6]))

            elif keyword == "FRAMEWORK":
                x, y, z = _parse_floats(fields[1:4])
                atoms.append(FrameworkAtom(fields[0], x, y, z))

            elif keyword == "PROBE":
                probe = fields[0]

        except ValueError as e:
            raise InputFormatError(str(e), line_number, line, source) from e

    if lattice is None:
        raise InputFormatError("no FRAMEPROP record found", source=source)
    if probe is None:
        raise InputFormatError("no PROBE record found", source=source)

    framework_input = FrameworkInput(species, lattice, tuple(atoms), probe, source=source)
    framework_input.validate()

    LOG.info(f"Read {len(species)} species and {len(atoms)} framework atoms, probe {probe}")
    return framework_input


def read_input_file(path) -> FrameworkInput:
    """
    Read and validate an input file.

    Args:
        path: Location of the input file

    Returns:
        Validated FrameworkInput
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            return parse_input_lines(f, source=str(path))
    except UnicodeDecodeError as e:
        raise InputFormatError(f"not a text file ({e.reason} at byte {e.start})",
                               source=str(path)) from e


def format_input(framework_input: FrameworkInput, title: str | None = None) -> str:
    """Render a FrameworkInput in the input file format."""
    lines = []
    if title:
        lines.append(f"# {title}")

    for label, params in framework_input.species.items():
        lines.append(f"ATOMPROP {label} {params.epsilon:.6f} {params.sigma:.6f} "
                     f"{params.charge:.6f} {params.mass:.6f}")

    lattice = framework_input.lattice
    lines.append(f"FRAMEPROP {lattice.a:.6f} {lattice.b:.6f} {lattice.c:.6f} "
                 f"{lattice.alpha:.6f} {lattice.beta:.6f} {lattice.gamma:.6f}")

    for atom in framework_input.atoms:
        lines.append(f"FRAMEWORK {atom.species} {atom.x:.6f} {atom.y:.6f} {atom.z:.6f}")

    lines.append(f"PROBE {framework_input.probe}")
    return "\n".join(lines) + "\n"


def write_input_file(framework_input: FrameworkInput, path, title: str | None = None) -> Path:
    """
    Write a FrameworkInput to disk in the input file format.

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.write_text(format_input(framework_input, title))
    LOG.info(f"Wrote input file {path}")
    return path
