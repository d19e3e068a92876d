"""Optional event listener subsystem."""

from .listener import EventListener, EventSocketListener  # noqa: F401

__all__ = ["EventListener", "EventSocketListener"]
