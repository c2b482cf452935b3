"""Analysis of sweep results."""

from .sweet_spot import select_sweet_spots

__all__ = [
    'select_sweet_spots'
]
