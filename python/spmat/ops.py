"""Functional forms of the arithmetic operations.

``OPERATIONS`` maps the menu codes used by front ends (``"1"`` add,
``"2"`` subtract, ``"3"`` multiply) to these functions.
"""

from .sparse import DOK


def _is_sparse(x) -> bool:
    return isinstance(x, DOK)


def _require_sparse(x, y, op):
    if not (_is_sparse(x) and _is_sparse(y)):
        raise TypeError(
            f"{op} requires two DOK matrices, got {type(x).__name__} and {type(y).__name__}"
        )


def add(x, y):
    _require_sparse(x, y, "add")
    return x.add(y)


def subtract(x, y):
    _require_sparse(x, y, "subtract")
    return x.subtract(y)


def matmul(x, y, method=None):
    _require_sparse(x, y, "matmul")
    return x.multiply(y, method=method)


OPERATIONS = {
    "1": add,
    "2": subtract,
    "3": matmul,
}


def apply(code, x, y):
    """Run the operation registered under menu ``code`` on ``x`` and ``y``.

    Raises
    ------
    ValueError
        If ``code`` is not one of ``OPERATIONS``.
    """
    try:
        fn = OPERATIONS[str(code).strip()]
    except KeyError:
        raise ValueError(
            f"unknown operation {code!r}; expected one of {sorted(OPERATIONS)}"
        ) from None
    return fn(x, y)
