"""
Left-to-right chains built from callables and boxes.
"""

from __future__ import annotations

import typing

from ._types import Unary
from .box import FunctionBox
from .policy import DEFAULT_POLICY, BoundaryPolicy


def pipeline(
    first: Unary[typing.Any, typing.Any] | FunctionBox[typing.Any, typing.Any],
    *rest: Unary[typing.Any, typing.Any] | FunctionBox[typing.Any, typing.Any],
    policy: BoundaryPolicy = DEFAULT_POLICY,
) -> FunctionBox[typing.Any, typing.Any]:
    """
    Chain steps so that pipeline(f, g, h).apply(x) == h(g(f(x))).

    Boxes are joined with and_then_b and consumed; plain callables with and_then.
    Boundaries are checked step by step, so a mismatch surfaces before
    anything runs. A box passed as `first` keeps its own policy.

    Example:
        pipeline(str.strip, str.upper, len).apply("  ab ")  # 2
    """
    box = first if isinstance(first, FunctionBox) else FunctionBox.new(first, policy=policy)
    for step in rest:
        if isinstance(step, FunctionBox):
            box = box.and_then_b(step)
        else:
            box = box.and_then(step)
    return box


__all__ = ("pipeline",)
