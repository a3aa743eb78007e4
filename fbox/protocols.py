"""
Capability interfaces
=====================

Two narrow protocols over the same wrapper:

- Apply     - borrowing call, the wrapper stays usable
- ApplyDrop - consuming call, the wrapper is spent afterwards

Generic code can ask for exactly the capability it needs:

    def twice[A](fn: Apply[A, A], value: A) -> A:
        return fn.apply(fn.apply(value))

    def finish[A, B](fn: ApplyDrop[A, B], value: A) -> B:
        return fn.apply_drop(value)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Apply[In, Out](Protocol):
    """Apply a unary function inside a wrapper without giving the wrapper up."""

    def apply(self, a: In, /) -> Out: ...


@runtime_checkable
class ApplyDrop[In, Out](Protocol):
    """Apply a unary function inside a wrapper, consuming the wrapper."""

    def apply_drop(self, a: In, /) -> Out: ...


__all__ = ("Apply", "ApplyDrop")
