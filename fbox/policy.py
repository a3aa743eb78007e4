"""
Boundary policy
===============

Configuration for the composition-time type check.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoundaryPolicy:
    """
    How composition operators treat the boundary between two steps.

    - check: compare inner output type with outer input type at all
    - strict: an unknown (unannotated) side counts as a mismatch

    Composed boxes inherit the policy of the box the operator is called on.
    """

    check: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        if self.strict and not self.check:
            raise ValueError("BoundaryPolicy.strict requires check=True")

    @staticmethod
    def lenient() -> BoundaryPolicy:
        """Check known types, let unknown ones through."""
        return BoundaryPolicy()

    @staticmethod
    def strict_checks() -> BoundaryPolicy:
        """Both sides of every boundary must be known and compatible."""
        return BoundaryPolicy(check=True, strict=True)

    @staticmethod
    def disabled() -> BoundaryPolicy:
        return BoundaryPolicy(check=False)


DEFAULT_POLICY = BoundaryPolicy.lenient()


__all__ = ("BoundaryPolicy", "DEFAULT_POLICY")
