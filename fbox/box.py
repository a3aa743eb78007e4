"""
FunctionBox
===========

Owning wrapper around one unary function with lazy composition.

    inc = FunctionBox.new(lambda x: x + 1)
    square = FunctionBox.new(lambda x: x * x)

    inc.compose_b(square).apply(3)   # inc(square(3)) == 10

Lifecycle:
- live     - may be applied any number of times
- consumed - after apply_drop() or after being passed into any composition

Composition never runs a callable; it only builds a new box whose callable
runs both steps in a fixed order, each at most once per invocation.
"""

from __future__ import annotations

import logging
import typing

from kungfu import Error, Ok

from ._errors import ConsumedBoxError
from ._helpers import identity as _identity, label
from ._types import Resolved, Unary
from .boundary import check_boundary, resolve_input, resolve_output
from .policy import DEFAULT_POLICY, BoundaryPolicy
from .trace import Trace

logger = logging.getLogger(__name__)


class FunctionBox[In, Out]:
    """
    Lazy, composable wrapper of a unary function `In -> Out`.

    Implements both capability protocols:
    - Apply.apply(a)          - borrowing call, box stays live
    - ApplyDrop.apply_drop(a) - consuming call, box is spent

    Both dispatch to the same stored callable, so for the same input they
    return the same output.
    """

    __slots__ = ("_fn", "_accepts", "_returns", "_steps", "_policy")

    def __init__(
        self,
        f: Unary[In, Out],
        *,
        accepts: typing.Any = None,
        returns: typing.Any = None,
        policy: BoundaryPolicy = DEFAULT_POLICY,
    ) -> None:
        if not callable(f):
            raise TypeError(f"FunctionBox expects a callable, got {type(f).__name__}")
        self._fn: Unary[In, Out] | None = f
        self._accepts: Resolved = resolve_input(f) if accepts is None else Ok(accepts)
        self._returns: Resolved = resolve_output(f) if returns is None else Ok(returns)
        self._steps: Trace[str] = Trace.of(label(f))
        self._policy = policy

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new[A, B](
        cls,
        f: Unary[A, B],
        *,
        accepts: typing.Any = None,
        returns: typing.Any = None,
        policy: BoundaryPolicy = DEFAULT_POLICY,
    ) -> FunctionBox[A, B]:
        """
        Wrap a unary callable.

        accepts/returns override the types read from annotations, which is
        handy for lambdas:

            FunctionBox.new(lambda s: s.strip(), accepts=str, returns=str)
        """
        box: FunctionBox[A, B] = cls(f, accepts=accepts, returns=returns, policy=policy)  # type: ignore[assignment]
        logger.debug("new: %s", box._steps.render())
        return box

    @classmethod
    def identity[T](cls, *, policy: BoundaryPolicy = DEFAULT_POLICY) -> FunctionBox[T, T]:
        """Box that returns its argument unchanged."""
        return cls.new(_identity, policy=policy)  # type: ignore[return-value]

    @classmethod
    def _assemble[A, B](
        cls,
        fn: Unary[A, B],
        *,
        accepts: Resolved,
        returns: Resolved,
        steps: Trace[str],
        policy: BoundaryPolicy,
    ) -> FunctionBox[A, B]:
        box: FunctionBox[A, B] = cls.__new__(cls)  # type: ignore[assignment]
        box._fn = fn
        box._accepts = accepts
        box._returns = returns
        box._steps = steps
        box._policy = policy
        return box

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def consumed(self) -> bool:
        return self._fn is None

    @property
    def accepts(self) -> Resolved:
        """Input type: Ok(type) when known, Error(reason) when not."""
        return self._accepts

    @property
    def returns(self) -> Resolved:
        """Output type: Ok(type) when known, Error(reason) when not."""
        return self._returns

    @property
    def steps(self) -> Trace[str]:
        """Step labels in evaluation order."""
        return self._steps

    @property
    def policy(self) -> BoundaryPolicy:
        return self._policy

    def _live(self, operation: str) -> Unary[In, Out]:
        fn = self._fn
        if fn is None:
            raise ConsumedBoxError(operation)
        return fn

    def _take(self, operation: str) -> Unary[In, Out]:
        fn = self._live(operation)
        self._fn = None
        logger.debug("%s: consumed %s", operation, self._steps.render())
        return fn

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def apply(self, a: In, /) -> Out:
        """Call the wrapped function. The box stays live."""
        return self._live("apply")(a)

    def apply_drop(self, a: In, /) -> Out:
        """
        Call the wrapped function and consume the box.

        The box gives up its callable before the call, so it is consumed
        even if the callable raises.
        """
        fn = self._take("apply_drop")
        return fn(a)

    def __call__(self, a: In, /) -> Out:
        return self.apply(a)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose[C](self, g: Unary[C, In]) -> FunctionBox[C, Out]:
        """
        New box computing f(g(x)). The output type of g must fit the input of f.
        A box passed as g is consumed, exactly as with compose_b().

        Example:
            FunctionBox.new(lambda x: x + 1).compose(lambda x: x * x).apply(3)  # 10
        """
        if isinstance(g, FunctionBox):
            # box operands are owned, never shared
            return self.compose_b(g)
        g_accepts, g_returns, g_steps = _describe(g)
        self._live("compose")
        self._check("compose", produced=g_returns, expected=self._accepts)

        f = self._take("compose")

        def composed(x: C) -> Out:
            return f(g(x))

        return self._derive(
            "compose",
            composed,
            accepts=g_accepts,
            returns=self._returns,
            steps=g_steps.combine(self._steps),
        )

    def and_then[C](self, g: Unary[Out, C]) -> FunctionBox[In, C]:
        """
        New box computing g(f(x)). The output type of f must fit the input of g.
        A box passed as g is consumed, exactly as with and_then_b().

        Example:
            FunctionBox.new(lambda x: x + 1).and_then(lambda x: x * x).apply(3)  # 16
        """
        if isinstance(g, FunctionBox):
            return self.and_then_b(g)
        g_accepts, g_returns, g_steps = _describe(g)
        self._live("and_then")
        self._check("and_then", produced=self._returns, expected=g_accepts)

        f = self._take("and_then")

        def chained(x: In) -> C:
            return g(f(x))

        return self._derive(
            "and_then",
            chained,
            accepts=self._accepts,
            returns=g_returns,
            steps=self._steps.combine(g_steps),
        )

    def compose_b[C](self, other: FunctionBox[C, In]) -> FunctionBox[C, Out]:
        """Same as compose(), but takes another box and consumes it too."""
        self._live("compose_b")
        other._live("compose_b")
        if other is self:
            raise ConsumedBoxError("compose_b", "box cannot be composed with itself")
        self._check("compose_b", produced=other._returns, expected=self._accepts)

        f = self._take("compose_b")
        g = other._take("compose_b")

        def composed(x: C) -> Out:
            return f(g(x))

        return self._derive(
            "compose_b",
            composed,
            accepts=other._accepts,
            returns=self._returns,
            steps=other._steps.combine(self._steps),
        )

    def and_then_b[C](self, other: FunctionBox[Out, C]) -> FunctionBox[In, C]:
        """Same as and_then(), but takes another box and consumes it too."""
        self._live("and_then_b")
        other._live("and_then_b")
        if other is self:
            raise ConsumedBoxError("and_then_b", "box cannot be composed with itself")
        self._check("and_then_b", produced=self._returns, expected=other._accepts)

        f = self._take("and_then_b")
        g = other._take("and_then_b")

        def chained(x: In) -> C:
            return g(f(x))

        return self._derive(
            "and_then_b",
            chained,
            accepts=self._accepts,
            returns=other._returns,
            steps=self._steps.combine(other._steps),
        )

    def _check(self, operator: str, *, produced: Resolved, expected: Resolved) -> None:
        match check_boundary(operator, produced, expected, policy=self._policy):
            case Ok(_):
                return
            case Error(err):
                raise err

    def _derive[A, B](
        self,
        operator: str,
        fn: Unary[A, B],
        *,
        accepts: Resolved,
        returns: Resolved,
        steps: Trace[str],
    ) -> FunctionBox[A, B]:
        box = FunctionBox._assemble(fn, accepts=accepts, returns=returns, steps=steps, policy=self._policy)
        logger.debug("%s: %s", operator, steps.render())
        return box

    def __repr__(self) -> str:
        if self._fn is None:
            return "FunctionBox(<consumed>)"
        return f"FunctionBox({self._steps.render()})"


def _describe(g: typing.Any) -> tuple[Resolved, Resolved, Trace[str]]:
    """Boundary types and steps of a raw callable operand."""
    if not callable(g):
        raise TypeError(f"expected a callable, got {type(g).__name__}")
    return resolve_input(g), resolve_output(g), Trace.of(label(g))


__all__ = ("FunctionBox",)
