"""Base classes for sparse matrices.

These classes hold the shape bookkeeping shared by concrete sparse types in
`spmat.sparse`, plus dense materialization for inspection.
"""

import numbers


class SparseArray:
    """Abstract base class for sparse arrays.

    Parameters
    ----------
    shape : tuple[int, ...]
        Array shape. Stored as a tuple of positive ints.
    dtype : Any, optional
        Element dtype metadata.

    Attributes
    ----------
    shape : tuple[int, ...]
        Array shape.
    ndim : int
        Number of dimensions, equal to ``len(shape)``.
    dtype : Any
        Element type metadata.

    Raises
    ------
    ValueError
        If any dimension is not a positive integer.
    """

    def __init__(self, shape, dtype=None):
        shape = tuple(shape)
        for n in shape:
            if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
                raise ValueError(f"dimensions must be positive integers, got {shape!r}")
        self.shape = tuple(int(n) for n in shape)
        self.ndim = len(self.shape)
        self.dtype = dtype


class SparseMatrix(SparseArray):
    """Abstract base class for 2D sparse matrices.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape. Must be two-dimensional.
    dtype : Any, optional
        Element dtype metadata.

    Raises
    ------
    ValueError
        If ``shape`` is not 2D.
    """

    def __init__(self, shape, dtype=None):
        if len(shape) != 2:
            raise ValueError("SparseMatrix requires 2D shape")
        super().__init__(shape, dtype=dtype)

    @property
    def nrows(self):
        return self.shape[0]

    @property
    def ncols(self):
        return self.shape[1]

    def items(self):
        """Yield stored ``(row, col, value)`` triples. Overridden by subclasses."""
        return iter(())

    def toarray(self):
        """Return a dense numpy.ndarray with the same shape and dtype.

        Notes
        -----
        Built from :meth:`items`, so it is correct for any subclass that
        implements it. Meant for inspection and tests; arithmetic never
        goes through this path.
        """
        import numpy as np

        out = np.zeros(self.shape, dtype=self.dtype)
        for r, c, v in self.items():
            out[r, c] = v
        return out
