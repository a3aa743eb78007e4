"""
Boundary resolution and checking
================================

Finds the input/output types of a unary callable from its annotations and
decides whether two steps fit together.

Every function here returns a kungfu Result instead of raising:
- resolve_* give Ok(type) for a known type, Error(reason) for an unknown one
- check_boundary gives Ok(None) when the steps fit, Error(CompositionTypeError) otherwise

FunctionBox turns the Error of check_boundary into a raise.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._errors import CompositionTypeError
from ._helpers import label
from ._types import Resolved
from .policy import BoundaryPolicy

# Implicit numeric promotions: int -> float -> complex
_PROMOTIONS: dict[type, tuple[type, ...]] = {
    int: (float, complex),
    float: (complex,),
}

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def _hints(fn: Callable[..., typing.Any]) -> Result[dict[str, typing.Any], str]:
    target: typing.Any = fn
    if not (inspect.isfunction(fn) or inspect.ismethod(fn) or inspect.isbuiltin(fn)):
        # callable instance: annotations live on the class's __call__
        target = type(fn).__call__
    try:
        return Ok(typing.get_type_hints(target))
    except (AttributeError, NameError, SyntaxError, TypeError) as exc:
        return Error(f"annotations of {label(fn)} cannot be resolved: {exc}")


def resolve_input(fn: Callable[..., typing.Any]) -> Resolved:
    """Type of the single positional argument of fn."""
    if inspect.isclass(fn):
        return Error(f"{label(fn)} is a class, its argument type is not inferred")
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return Error(f"{label(fn)} has no inspectable signature")

    first = next((p for p in signature.parameters.values() if p.kind in _POSITIONAL), None)
    if first is None:
        return Error(f"{label(fn)} takes no positional argument")

    match _hints(fn):
        case Ok(hints) if first.name in hints:
            return Ok(hints[first.name])
        case Ok(_):
            return Error(f"argument {first.name!r} of {label(fn)} is not annotated")
        case Error(reason):
            return Error(reason)


def resolve_output(fn: Callable[..., typing.Any]) -> Resolved:
    """Return type of fn. A class produces its own instances."""
    if inspect.isclass(fn):
        return Ok(fn)
    match _hints(fn):
        case Ok(hints) if "return" in hints:
            return Ok(hints["return"])
        case Ok(_):
            return Error(f"return type of {label(fn)} is not annotated")
        case Error(reason):
            return Error(reason)


def _is_union(tp: typing.Any) -> bool:
    return typing.get_origin(tp) in (typing.Union, types.UnionType)


def _is_literal(tp: typing.Any) -> bool:
    return typing.get_origin(tp) is typing.Literal


def _is_never(tp: typing.Any) -> bool:
    return tp is typing.Never or tp is typing.NoReturn


def _unalias(tp: typing.Any) -> typing.Any:
    """Strip `type X = ...` aliases, Annotated[...] and a bare None."""
    while True:
        if tp is None:
            return types.NoneType
        if isinstance(tp, typing.TypeAliasType):
            tp = tp.__value__
            continue
        origin = typing.get_origin(tp)
        if isinstance(origin, typing.TypeAliasType):
            # Alias[int]: compared by origin, arguments are dropped
            tp = origin.__value__
            continue
        if origin is typing.Annotated:
            tp = typing.get_args(tp)[0]
            continue
        return tp


def _supertypes(tp: typing.NewType) -> list[typing.Any]:
    chain: list[typing.Any] = [tp]
    while isinstance(chain[-1], typing.NewType):
        chain.append(chain[-1].__supertype__)
    return chain


def is_compatible(produced: typing.Any, expected: typing.Any) -> bool:
    """
    Whether a value of type `produced` may be passed where `expected` is wanted.

    Subclasses fit their bases, unions are checked member by member,
    parameterised generics are compared by origin only. NewType values fit
    their supertype, Literal values fit the types of their members and
    Never fits anything. Forms that cannot be compared count as compatible.
    """
    produced = _unalias(produced)
    expected = _unalias(expected)
    if produced == expected:
        return True
    if produced is typing.Any or expected is typing.Any or expected is object:
        return True
    if isinstance(produced, typing.TypeVar) or isinstance(expected, typing.TypeVar):
        return True
    if _is_never(produced):
        return True
    if _is_never(expected):
        return False
    if _is_union(produced):
        return all(is_compatible(member, expected) for member in typing.get_args(produced))
    if _is_union(expected):
        return any(is_compatible(produced, member) for member in typing.get_args(expected))

    if _is_literal(expected):
        # only literals can be narrowed into a literal
        return _is_literal(produced) and set(typing.get_args(produced)) <= set(typing.get_args(expected))
    if _is_literal(produced):
        return all(is_compatible(type(value), expected) for value in typing.get_args(produced))

    if isinstance(expected, typing.NewType):
        return isinstance(produced, typing.NewType) and expected in _supertypes(produced)
    if isinstance(produced, typing.NewType):
        return is_compatible(produced.__supertype__, expected)

    source = typing.get_origin(produced) or produced
    target = typing.get_origin(expected) or expected
    if isinstance(source, type) and isinstance(target, type):
        if target in _PROMOTIONS.get(source, ()):
            return True
        try:
            return issubclass(source, target)
        except TypeError:
            # non-runtime protocols and friends: nothing to compare against
            return True
    # any other form (ParamSpec, Callable signatures, ...) is not compared
    return True


def check_boundary(
    operator: str,
    produced: Resolved,
    expected: Resolved,
    *,
    policy: BoundaryPolicy,
) -> Result[None, CompositionTypeError]:
    """
    Check that the inner step's output (produced) fits the outer step's input (expected).
    """
    if not policy.check:
        return Ok(None)

    match (produced, expected):
        case (Ok(source), Ok(target)):
            if is_compatible(source, target):
                return Ok(None)
            return Error(
                CompositionTypeError(
                    operator,
                    source,
                    target,
                    f"inner step returns {_name(source)} but outer step expects {_name(target)}",
                )
            )
        case (Error(reason), _) | (_, Error(reason)) if policy.strict:
            return Error(
                CompositionTypeError(
                    operator,
                    _unwrap_or_none(produced),
                    _unwrap_or_none(expected),
                    f"boundary type is unknown under strict policy: {reason}",
                )
            )
        case _:
            return Ok(None)


def _unwrap_or_none(value: Resolved) -> typing.Any:
    match value:
        case Ok(tp):
            return tp
        case Error(_):
            return None


def _name(tp: typing.Any) -> str:
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__qualname__
    return repr(tp)


__all__ = (
    "check_boundary",
    "is_compatible",
    "resolve_input",
    "resolve_output",
)
