"""Error taxonomy for the tracking engine.

User-facing errors derive from ``TrackingError`` and are recoverable: the
front-end catches them, shows the message, and carries on with the session.

``PreconditionViolation`` is deliberately *not* a ``TrackingError``.  It marks a
caller contract breach (e.g. asking for the latest BMI of an empty history)
and is never caught by the core.
"""

from __future__ import annotations


class TrackingError(Exception):
    """Base class for recoverable, user-facing tracking errors."""


class InsufficientInput(TrackingError):
    """A required field was empty."""


class InvalidInput(TrackingError, ValueError):
    """A field was present but malformed or out of range."""


class OutOfBounds(TrackingError, IndexError):
    """An index fell outside the valid range of a collection."""


class PreconditionViolation(AssertionError):
    """Internal contract breach; indicates a bug in the caller."""


def ensure(condition: bool, message: str) -> None:
    """Raise ``PreconditionViolation`` with ``message`` unless ``condition`` holds.

    Unlike ``assert`` this survives ``python -O``.
    """
    if not condition:
        raise PreconditionViolation(message)
