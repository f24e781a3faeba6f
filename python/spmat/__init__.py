import logging

from ._runtime import get_matmul_method, set_matmul_method
from .errors import DimensionMismatch, FormatError, SpmatError
from .io import from_text, load, save, to_text
from .sparse import DOK, Coord
from . import ops as ops

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DOK",
    "Coord",
    "SpmatError",
    "FormatError",
    "DimensionMismatch",
    "from_text",
    "to_text",
    "load",
    "save",
    "ops",
    "set_matmul_method",
    "get_matmul_method",
]
