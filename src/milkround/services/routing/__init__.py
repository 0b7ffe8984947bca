"""Route sequencing."""

from .sequencer import RouteSequencer

__all__ = ["RouteSequencer"]
