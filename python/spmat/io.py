"""Reading and writing matrices in the ``rows=``/``cols=`` text format.

The format is::

    rows=<positive integer>
    cols=<positive integer>
    (<row>, <col>, <value>)
    ...

Entry lines hold three comma-separated integers in parentheses. Blank lines
between entries are ignored. Parsing is all-or-nothing: the first malformed
line raises :class:`~spmat.errors.FormatError` and no matrix is returned.
"""

import logging
import re
from pathlib import Path

from .errors import FormatError
from .sparse.dok import DOK, Coord

logger = logging.getLogger(__name__)

_INT = r"([+-]?\d+)"
_HEADER_RE = {
    "rows": re.compile(r"rows\s*=\s*" + _INT),
    "cols": re.compile(r"cols\s*=\s*" + _INT),
}
_ENTRY_RE = re.compile(r"\(\s*" + _INT + r"\s*,\s*" + _INT + r"\s*,\s*" + _INT + r"\s*\)")


def _parse_header(lines, index, name):
    if index >= len(lines):
        raise FormatError(f"missing '{name}=' header", lineno=index + 1)
    line = lines[index].strip()
    m = _HEADER_RE[name].fullmatch(line)
    if m is None:
        raise FormatError(f"expected '{name}=<int>'", lineno=index + 1, line=line)
    value = int(m.group(1))
    if value <= 0:
        raise FormatError(f"'{name}' must be positive", lineno=index + 1, line=line)
    return value


def from_text(source):
    """Parse a matrix from its text form.

    Parameters
    ----------
    source : str
        Full text of a matrix file.

    Returns
    -------
    DOK
        The parsed matrix. Zero values are dropped and a repeated
        coordinate keeps its last value.

    Raises
    ------
    FormatError
        If a header is missing or malformed, an entry line is not
        ``(<int>, <int>, <int>)``, or an entry lies outside the declared
        shape.
    """
    lines = source.splitlines()
    # leading blank lines are skipped but still counted for line numbers
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    nrows = _parse_header(lines, start, "rows")
    ncols = _parse_header(lines, start + 1, "cols")
    matrix = DOK((nrows, ncols))
    seen = 0
    for index in range(start + 2, len(lines)):
        line = lines[index].strip()
        if not line:
            continue
        m = _ENTRY_RE.fullmatch(line)
        if m is None:
            raise FormatError("expected '(<row>, <col>, <value>)'", lineno=index + 1, line=line)
        row, col, value = (int(g) for g in m.groups())
        if not (0 <= row < nrows and 0 <= col < ncols):
            raise FormatError(
                f"entry outside shape ({nrows}, {ncols})", lineno=index + 1, line=line
            )
        key = Coord(row, col)
        if value == 0:
            matrix.entries.pop(key, None)
        else:
            matrix.entries[key] = value
        seen += 1
    logger.debug(f"Parsed {seen} entry lines into {matrix!r}")
    return matrix


def to_text(matrix, header=True):
    """Serialize ``matrix`` as text.

    Entries are written one per line in row-major order. With
    ``header=False`` only the entry lines are returned.
    """
    lines = []
    if header:
        lines.append(f"rows={matrix.shape[0]}")
        lines.append(f"cols={matrix.shape[1]}")
    for r, c, v in matrix.items():
        lines.append(f"({r}, {c}, {v})")
    return "\n".join(lines)


def load(path):
    """Read and parse the matrix file at ``path``."""
    path = Path(path)
    logger.info(f"Loading matrix from: {path}")
    matrix = from_text(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded {matrix!r} from: {path}")
    return matrix


def save(matrix, path):
    """Write ``matrix`` with its header to ``path``, replacing any existing file."""
    path = Path(path)
    path.write_text(to_text(matrix) + "\n", encoding="utf-8")
    logger.info(f"Saved {matrix!r} to: {path}")
