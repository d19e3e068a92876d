"""Bot lifecycle package (facade + supervisor)."""

from .core import BasicBot  # noqa: F401
from .supervisor import Supervisor  # noqa: F401

__all__ = ["BasicBot", "Supervisor"]
