"""Error taxonomy for the geometry kernel.

Each error also derives from the builtin exception callers would already
catch for that condition (``ValueError``, ``RuntimeError``,
``NotImplementedError``).
"""
from __future__ import annotations


class GeometryError(Exception):
    """Base class for all errors raised by spatia."""


class InvalidArgumentError(GeometryError, ValueError):
    """An argument is out of range or has the wrong shape for the operation."""


class InvalidStateError(GeometryError, RuntimeError):
    """The entity does not meet a size precondition of the operation."""


class UnsupportedOperationError(GeometryError, NotImplementedError):
    """The operation is deliberately not implemented by this kernel."""


__all__ = [
    'GeometryError',
    'InvalidArgumentError',
    'InvalidStateError',
    'UnsupportedOperationError',
]
