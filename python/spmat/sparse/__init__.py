from .dok import DOK, Coord

__all__ = [
    "DOK",
    "Coord",
]
