"""
Lazy, type-checked composition of unary functions.

One wrapper type, FunctionBox, owns a single callable `In -> Out`:

- apply / apply_drop     - borrowing and consuming invocation
- compose / and_then     - combine with a plain callable
- compose_b / and_then_b - combine with another box (consumes it)

Chains are built eagerly and run lazily. Boundary types are checked at
composition time according to a BoundaryPolicy.
"""

# Core types
from ._types import Resolved, Unary

# Capability protocols
from .protocols import Apply, ApplyDrop

# The box
from .box import FunctionBox
from .pipeline import pipeline

# Configuration
from .policy import DEFAULT_POLICY, BoundaryPolicy

# Step history
from .trace import Trace

# Boundary helpers (for custom checks)
from .boundary import check_boundary, is_compatible, resolve_input, resolve_output

# Errors
from ._errors import CompositionTypeError, ConsumedBoxError

__all__ = (
    # Types
    "Resolved",
    "Unary",
    # Protocols
    "Apply",
    "ApplyDrop",
    # Box
    "FunctionBox",
    "pipeline",
    # Configuration
    "BoundaryPolicy",
    "DEFAULT_POLICY",
    # Trace
    "Trace",
    # Boundary
    "check_boundary",
    "is_compatible",
    "resolve_input",
    "resolve_output",
    # Errors
    "CompositionTypeError",
    "ConsumedBoxError",
)
