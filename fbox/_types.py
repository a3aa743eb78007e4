"""
Core type definitions for fbox.

Aliases shared by the box, the boundary checker and the protocols.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

# ============================================================================
# Type aliases
# ============================================================================

# Unary = the only callable shape a box can own
type Unary[A, B] = Callable[[A], B]

# Resolved = a boundary type that is either known (Ok) or unknown (Error with reason)
# NOTE: Error here is not a failure, it means "annotations do not say".
type Resolved = Result[typing.Any, str]

__all__ = (
    "Unary",
    "Resolved",
)
