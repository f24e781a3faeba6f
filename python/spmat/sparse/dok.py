"""Dictionary-of-keys (DOK) sparse matrix with integer values.

Only non-zero entries are stored, keyed by :class:`Coord`. Addition and
subtraction visit the union of both operands' stored entries; matrix
multiplication has a dense reference strategy and a row-indexed strategy
that touches stored entries only.

Notes
-----
- Values are Python ints. Assigning ``0`` removes the entry, so a stored
  zero never exists.
- Every arithmetic operation returns a new matrix; operands are not
  modified.
"""

import logging
import numbers
from collections import defaultdict
from typing import NamedTuple

import numpy as np

from .._runtime import MATMUL_METHODS, get_matmul_method
from ..errors import DimensionMismatch
from .base import SparseMatrix

logger = logging.getLogger(__name__)


class Coord(NamedTuple):
    """Zero-based ``(row, col)`` position of an entry."""

    row: int
    col: int


def _check_value(value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise TypeError(f"values must be integers, got {type(value).__name__}")
    return int(value)


def _check_index(index):
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, numbers.Integral):
        raise TypeError(f"indices must be integers, got {type(index).__name__}")
    return int(index)


class DOK(SparseMatrix):
    """Dictionary-of-keys sparse matrix.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape ``(nrows, ncols)``; both dimensions positive.

    Attributes
    ----------
    entries : dict[Coord, int]
        Stored non-zero values.
    shape : tuple[int, int]
        Matrix dimensions.
    nnz : int
        Number of stored entries.

    Examples
    --------
    Build two small matrices and multiply them::

        >>> from spmat.sparse import DOK
        >>> a = DOK.from_entries([(0, 0, 1), (1, 1, 2)], shape=(2, 2))
        >>> b = DOK.from_entries([(0, 1, 3), (1, 0, 4)], shape=(2, 2))
        >>> list((a @ b).items())
        [(0, 1, 3), (1, 0, 8)]
        >>> (a - a).nnz
        0
    """

    def __init__(self, shape):
        super().__init__(shape=shape, dtype=np.int64)
        self.entries = {}

    @classmethod
    def from_dimensions(cls, nrows, ncols):
        """Construct an empty ``nrows x ncols`` matrix."""
        return cls((nrows, ncols))

    @classmethod
    def from_entries(cls, entries, shape):
        """Construct from ``(row, col, value)`` triples.

        Zero values are dropped and a repeated coordinate keeps the last
        value given for it.

        Raises
        ------
        IndexError
            If a coordinate lies outside ``shape``.
        TypeError
            If a value is not an integer.
        """
        out = cls(shape)
        for r, c, v in entries:
            out.set(r, c, v)
        return out

    @classmethod
    def from_dense(cls, array):
        """Construct from a dense 2D integer array-like."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError("from_dense requires a 2D array")
        if arr.dtype.kind not in "iu":
            raise TypeError(f"from_dense requires an integer array, got dtype {arr.dtype}")
        out = cls(arr.shape)
        rows, cols = np.nonzero(arr)
        for r, c in zip(rows.tolist(), cols.tolist()):
            out.entries[Coord(r, c)] = int(arr[r, c])
        return out

    @classmethod
    def from_text(cls, source):
        """Parse the ``rows=``/``cols=`` text format. See :func:`spmat.io.from_text`."""
        from ..io import from_text

        return from_text(source)

    @property
    def nnz(self):
        """Number of stored non-zero entries (int)."""
        return len(self.entries)

    def _in_bounds(self, row, col):
        return 0 <= row < self.shape[0] and 0 <= col < self.shape[1]

    def get(self, row, col):
        """Return the value at ``(row, col)``.

        Coordinates without a stored entry read as ``0``, including ones
        outside the matrix shape.
        """
        return self.entries.get(Coord(row, col), 0)

    def set(self, row, col, value):
        """Store ``value`` at ``(row, col)``; ``0`` removes the entry.

        Raises
        ------
        IndexError
            If ``(row, col)`` lies outside the matrix shape.
        TypeError
            If ``row``, ``col`` or ``value`` is not an integer.
        """
        row, col = _check_index(row), _check_index(col)
        value = _check_value(value)
        if not self._in_bounds(row, col):
            raise IndexError(f"index ({row}, {col}) is out of bounds for shape {self.shape}")
        key = Coord(row, col)
        if value == 0:
            self.entries.pop(key, None)
        else:
            self.entries[key] = value

    getElement = get
    setElement = set

    def _key(self, key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("index must be a (row, col) tuple")
        return key

    def __getitem__(self, key):
        row, col = self._key(key)
        return self.get(row, col)

    def __setitem__(self, key, value):
        row, col = self._key(key)
        self.set(row, col, value)

    def items(self):
        """Yield ``(row, col, value)`` for each stored entry in row-major order."""
        for key in sorted(self.entries):
            yield key.row, key.col, self.entries[key]

    def copy(self):
        out = DOK(self.shape)
        out.entries = dict(self.entries)
        return out

    @property
    def T(self):
        """Transpose of the matrix as a new :class:`DOK`."""
        out = DOK((self.shape[1], self.shape[0]))
        out.entries = {Coord(k.col, k.row): v for k, v in self.entries.items()}
        return out

    def __eq__(self, other):
        if not isinstance(other, DOK):
            return NotImplemented
        return self.shape == other.shape and self.entries == other.entries

    __hash__ = None

    def __repr__(self):
        return f"DOK(shape={self.shape}, nnz={self.nnz})"

    def _check_operand(self, other, op):
        if not isinstance(other, DOK):
            raise TypeError(f"cannot {op} DOK and {type(other).__name__}")
        if op == "multiply":
            if self.shape[1] != other.shape[0]:
                raise DimensionMismatch(op, self.shape, other.shape)
        elif self.shape != other.shape:
            raise DimensionMismatch(op, self.shape, other.shape)

    def _combine(self, other, sign):
        out = DOK(self.shape)
        for key in self.entries.keys() | other.entries.keys():
            value = self.entries.get(key, 0) + sign * other.entries.get(key, 0)
            if value != 0:
                out.entries[key] = value
        return out

    def add(self, other):
        """Elementwise sum ``self + other``.

        Raises
        ------
        DimensionMismatch
            If the shapes differ.
        """
        self._check_operand(other, "add")
        return self._combine(other, 1)

    def subtract(self, other):
        """Elementwise difference ``self - other``.

        Raises
        ------
        DimensionMismatch
            If the shapes differ.
        """
        self._check_operand(other, "subtract")
        return self._combine(other, -1)

    def multiply(self, other, method=None):
        """Matrix product ``self @ other``.

        Parameters
        ----------
        other : DOK
            Right operand with ``other.nrows == self.ncols``.
        method : {None, "rowcol", "dense"}, optional
            ``"rowcol"`` groups the right operand's entries by row and only
            multiplies stored pairs. ``"dense"`` evaluates every output
            cell over the full inner range. ``None`` uses
            :func:`spmat.get_matmul_method`. Both give the same result.

        Returns
        -------
        DOK
            Matrix of shape ``(self.nrows, other.ncols)``.

        Raises
        ------
        DimensionMismatch
            If the inner dimensions differ.
        ValueError
            If ``method`` is unknown.
        """
        if method is None:
            method = get_matmul_method()
        if method not in MATMUL_METHODS:
            raise ValueError(f"method must be one of {MATMUL_METHODS}, got {method!r}")
        self._check_operand(other, "multiply")
        logger.debug(f"multiply {self.shape} @ {other.shape} using {method!r}")
        if method == "dense":
            return self._matmul_dense(other)
        return self._matmul_rowcol(other)

    def _matmul_dense(self, other):
        out = DOK((self.shape[0], other.shape[1]))
        inner = self.shape[1]
        for i in range(self.shape[0]):
            for j in range(other.shape[1]):
                value = 0
                for k in range(inner):
                    value += self.get(i, k) * other.get(k, j)
                if value != 0:
                    out.entries[Coord(i, j)] = value
        return out

    def _matmul_rowcol(self, other):
        rows = defaultdict(list)
        for key, value in other.entries.items():
            rows[key.row].append((key.col, value))
        acc = defaultdict(int)
        for key, a in self.entries.items():
            for j, b in rows.get(key.col, ()):
                acc[Coord(key.row, j)] += a * b
        out = DOK((self.shape[0], other.shape[1]))
        out.entries = {k: v for k, v in acc.items() if v != 0}
        return out

    def __add__(self, other):
        if not isinstance(other, DOK):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, DOK):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other):
        if not isinstance(other, DOK):
            return NotImplemented
        return self.multiply(other)
