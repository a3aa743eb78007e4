from __future__ import annotations

import logging

from fbox import BoundaryPolicy, CompositionTypeError, FunctionBox, pipeline


def inc(n: int) -> int:
    return n + 1


def square(n: int) -> int:
    return n * n


def describe(n: int) -> str:
    return f"n={n}"


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    banner("01_quickstart: compose + and_then + apply_drop")

    # Built now, runs later.
    box = FunctionBox.new(inc).and_then(square).and_then(describe)
    print(box)
    print(box.apply(3))
    print(box.apply_drop(3), box.consumed)

    # Boxes combine with boxes; both operands are spent.
    reusable = FunctionBox.new(square).compose_b(FunctionBox.new(inc))
    print(reusable.apply(2))

    # Boundaries are checked while building.
    try:
        FunctionBox.new(describe).and_then(inc)
    except CompositionTypeError as exc:
        print(f"rejected: {exc}")

    strict = pipeline(inc, square, policy=BoundaryPolicy.strict_checks())
    print(strict.steps.render(), "=", strict.apply(4))


if __name__ == "__main__":
    main()
