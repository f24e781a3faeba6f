"""Exception types raised by :mod:`spmat`."""


class SpmatError(Exception):
    """Base class for errors raised by spmat."""


class FormatError(SpmatError, ValueError):
    """Malformed matrix text.

    Parameters
    ----------
    message : str
        Description of the problem.
    lineno : int, optional
        1-based line number of the offending line.
    line : str, optional
        The offending line, stripped.
    """

    def __init__(self, message, lineno=None, line=None):
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f"line {lineno}: {message}"
            if line is not None:
                message = f"{message}: {line!r}"
        super().__init__(message)


class DimensionMismatch(SpmatError, ValueError):
    """Operand shapes are incompatible with the requested operation."""

    def __init__(self, op, left, right):
        self.op = op
        self.left = tuple(left)
        self.right = tuple(right)
        if op == "multiply":
            detail = "ncols of the left operand must equal nrows of the right operand"
        else:
            detail = "operands must have the same shape"
        super().__init__(f"cannot {op} {self.left} and {self.right}: {detail}")
