"""API routers for the approval gate webhook."""

from . import admission
from . import health

__all__ = [
    "admission",
    "health",
]
