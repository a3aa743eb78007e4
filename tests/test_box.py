"""
Tests for FunctionBox construction, invocation and composition.

These tests verify that:
1. Borrowing and consuming invocation compute the same result
2. Each composition operator runs its steps in the documented order
3. Box operands behave exactly like plain callable operands
"""

import logging

import pytest

from fbox import ConsumedBoxError, FunctionBox


def inc(n: int) -> int:
    return n + 1


def square(n: int) -> int:
    return n * n


def double(n: int) -> int:
    return n * 2


def recorder(calls: list[str], name: str, fn):
    def step(x):
        calls.append(name)
        return fn(x)

    return step


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestConstruction:
    """Wrapping callables into boxes."""

    def test_named_function_and_closure_are_interchangeable(self):
        """A box over a def and a box over an equivalent lambda agree."""
        by_name = FunctionBox.new(inc)
        by_closure = FunctionBox.new(lambda x: x + 1)

        assert by_name.apply(3) == 4
        assert by_closure.apply(3) == 4

    def test_constructor_and_new_are_equivalent(self):
        assert FunctionBox(inc).apply(3) == FunctionBox.new(inc).apply(3)

    def test_closure_keeps_its_captured_state(self):
        offset = 10
        box = FunctionBox.new(lambda x, offset=offset: x + offset)
        offset = 0

        assert box.apply(1) == 11

    def test_non_callable_is_rejected(self):
        with pytest.raises(TypeError, match="expects a callable"):
            FunctionBox.new(42)

    def test_identity(self):
        box = FunctionBox.identity()

        assert box.apply("same") == "same"

    def test_wrapping_does_not_call_the_function(self):
        calls: list[str] = []
        FunctionBox.new(recorder(calls, "f", inc))

        assert calls == []


# =============================================================================
# INVOCATION
# =============================================================================

class TestInvocation:
    """apply() and apply_drop()."""

    def test_apply_and_apply_drop_agree(self):
        box = FunctionBox.new(lambda x: x + 1)

        assert box.apply(3) == box.apply_drop(3)

    def test_apply_is_repeatable(self):
        box = FunctionBox.new(square)

        assert box.apply(5) == 25
        assert box.apply(5) == 25

    def test_call_is_apply(self):
        box = FunctionBox.new(inc)

        assert box(3) == box.apply(3)
        assert not box.consumed

    def test_box_can_be_passed_where_callable_expected(self):
        box = FunctionBox.new(inc)

        assert list(map(box, [1, 2, 3])) == [2, 3, 4]

    def test_errors_from_wrapped_function_propagate_unchanged(self):
        class Boom(Exception):
            pass

        def explode(_):
            raise Boom("inner failure")

        box = FunctionBox.new(explode)

        with pytest.raises(Boom, match="inner failure"):
            box.apply(1)
        assert not box.consumed

    def test_argument_is_passed_through_untouched(self):
        payload = {"key": "value"}
        box = FunctionBox.new(lambda d: d)

        assert box.apply(payload) is payload


# =============================================================================
# COMPOSITION
# =============================================================================

class TestComposition:
    """The four composition operators."""

    def test_compose(self):
        assert FunctionBox.new(inc).compose(square).apply(3) == 10

    def test_and_then(self):
        assert FunctionBox.new(inc).and_then(square).apply(3) == 16

    def test_compose_b_matches_compose(self):
        boxed = FunctionBox.new(inc).compose_b(FunctionBox.new(square)).apply(3)
        plain = FunctionBox.new(inc).compose(square).apply(3)

        assert boxed == plain == 10

    def test_and_then_b_matches_and_then(self):
        boxed = FunctionBox.new(inc).and_then_b(FunctionBox.new(square)).apply(3)
        plain = FunctionBox.new(inc).and_then(square).apply(3)

        assert boxed == plain == 16

    def test_lambdas_compose(self):
        assert FunctionBox.new(lambda x: x + 1).compose(lambda x: x * x).apply(3) == 10
        assert FunctionBox.new(lambda x: x + 1).and_then(lambda x: x * x).apply(3) == 16

    def test_three_step_chain_runs_left_to_right(self):
        box = FunctionBox.new(inc).and_then(square).and_then(double)

        assert box.apply(3) == double(square(inc(3))) == 32

    def test_three_step_compose_runs_right_to_left(self):
        box = FunctionBox.new(inc).compose(square).compose(double)

        assert box.apply(3) == inc(square(double(3))) == 37

    def test_composition_is_lazy(self):
        calls: list[str] = []
        FunctionBox.new(recorder(calls, "f", inc)).and_then(recorder(calls, "g", square))

        assert calls == []

    def test_each_step_runs_once_in_order(self):
        calls: list[str] = []
        box = (
            FunctionBox.new(recorder(calls, "f", inc))
            .and_then(recorder(calls, "g", square))
            .compose(recorder(calls, "h", double))
        )

        assert box.apply(1) == 9
        assert calls == ["h", "f", "g"]

    def test_composed_box_is_repeatable(self):
        box = FunctionBox.new(inc).and_then_b(FunctionBox.new(square))

        assert box.apply(2) == box.apply(2) == 9

    def test_box_as_plain_operand_is_owned(self):
        inner = FunctionBox.new(square)
        box = FunctionBox.new(inc).compose(inner)

        assert box.apply(3) == 10
        assert inner.consumed

    def test_and_then_with_itself_is_rejected(self):
        box = FunctionBox.new(inc)

        with pytest.raises(ConsumedBoxError, match="itself"):
            box.and_then(box)
        with pytest.raises(ConsumedBoxError, match="itself"):
            box.compose(box)
        assert box.apply(1) == 2

    def test_consumed_box_operand_is_rejected_when_composing(self):
        spent = FunctionBox.new(square)
        spent.apply_drop(1)
        box = FunctionBox.new(inc)

        with pytest.raises(ConsumedBoxError):
            box.compose(spent)
        with pytest.raises(ConsumedBoxError):
            box.and_then(spent)
        assert not box.consumed

    def test_failure_in_second_step_propagates(self):
        def reject(_):
            raise ValueError("bad value")

        box = FunctionBox.new(inc).and_then(reject)

        with pytest.raises(ValueError, match="bad value"):
            box.apply(1)


# =============================================================================
# REPR AND LOGGING
# =============================================================================

class TestIntrospection:
    """repr(), steps and debug logging."""

    def test_repr_lists_steps(self):
        box = FunctionBox.new(inc).and_then(square)

        assert repr(box) == "FunctionBox(inc -> square)"

    def test_repr_of_consumed_box(self):
        box = FunctionBox.new(inc)
        box.apply_drop(1)

        assert repr(box) == "FunctionBox(<consumed>)"

    def test_composition_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="fbox")

        FunctionBox.new(inc).and_then(square)

        messages = [record.getMessage() for record in caplog.records]
        assert "and_then: inc -> square" in messages
        assert "and_then: consumed inc" in messages
