from __future__ import annotations

import typing


class ConsumedBoxError(Exception):
    """Box was used after apply_drop or after being passed into a composition."""

    operation: str

    def __init__(self, operation: str, reason: str = "box has already been consumed") -> None:
        self.operation = operation
        super().__init__(f"{operation}(): {reason}")


class CompositionTypeError(TypeError):
    """Output type of the inner step does not fit the input type of the outer step."""

    operator: str
    produced: typing.Any
    expected: typing.Any

    def __init__(self, operator: str, produced: typing.Any, expected: typing.Any, detail: str) -> None:
        self.operator = operator
        self.produced = produced
        self.expected = expected
        super().__init__(f"{operator}(): {detail}")


__all__ = ("CompositionTypeError", "ConsumedBoxError")
