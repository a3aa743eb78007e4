"""Internal helpers for fbox.

Small functions shared by the box and the boundary checker.
Not part of the public API."""

from __future__ import annotations

import typing
from collections.abc import Callable


# Identity function
def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


def label(fn: Callable[..., typing.Any]) -> str:
    """Short human-readable name of a step, used in traces and error messages."""
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if name is None:
        return type(fn).__name__
    return name


__all__ = (
    "identity",
    "label",
)
