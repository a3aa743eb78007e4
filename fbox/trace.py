"""
Trace - step history of a box
=============================
"""

from __future__ import annotations


class Trace[A](tuple[A, ...]):
    """
    Labels of the steps a box runs, in evaluation order.

    Immutable, so a box can hand its trace out and share it with the
    boxes composed from it. Combining is concatenation:

        Trace.of("parse", "trim").combine(Trace.of("upper"))  # ("parse", "trim", "upper")
    """

    __slots__ = ()

    @staticmethod
    def of[T](*items: T) -> Trace[T]:
        return Trace(items)

    def combine(self, other: Trace[A], /) -> Trace[A]:
        return Trace((*self, *other))

    def render(self, separator: str = " -> ") -> str:
        return separator.join(str(item) for item in self)


__all__ = ("Trace",)
