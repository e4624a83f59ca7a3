from __future__ import annotations


class ContourGestureError(Exception):
    """Base class for errors raised by this package."""


class MalformedGeometryError(ContourGestureError):
    """Upstream geometry cannot be analysed (too few points, indices out of range)."""


class ConfigError(ContourGestureError):
    """Invalid configuration file or value."""
