from __future__ import annotations

import numpy as np


class BKTreeError(Exception):
    """Base class for errors raised by bktreex."""


class InvalidArgumentError(BKTreeError, ValueError):
    """Raised when a caller violates an argument contract (e.g. negative radius)."""


def require_radius(k: object) -> int:
    """Validate a query radius and return it as a plain ``int``."""

    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgumentError(f"Radius must be an integer, got {k!r}.")
    radius = int(k)
    if radius < 0:
        raise InvalidArgumentError(f"Radius must be non-negative, got {radius}.")
    return radius


__all__ = ["BKTreeError", "InvalidArgumentError", "require_radius"]
