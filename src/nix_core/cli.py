"""Command-line entry point: evaluate and print the built-in examples.

Provides the ``nix-core`` console script and ``python -m nix_core``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Callable

from .builder import attrs, rec, var
from .errors import NixCoreError
from .evaluator import evaluate
from .printer import inspect, to_nix
from .values import Value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Built-in examples
# ---------------------------------------------------------------------------

EXAMPLES: dict[str, Callable[[], Value]] = {
    # Non-recursive siblings cannot see each other: eh stays a reference
    "attrset": lambda: attrs(x=10, eh=var("x"), uh=[3, 4, 6], m={"l": 10}),
    "rec": lambda: rec(a=1, b=var("a")),
    "forward": lambda: rec(b=var("a"), a=1),
    "nested": lambda: rec(x=1, inner=attrs(y=var("x"))),
    "free": lambda: attrs(z=var("qux")),
    "cycle": lambda: rec(a=var("b"), b=var("a")),
}


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nix-core",
        description="Evaluate the built-in attribute-set examples and print the results.",
    )
    parser.add_argument(
        "--example", choices=sorted(EXAMPLES), action="append",
        help="example to evaluate (repeatable; default: all)",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="fail on references that stay unresolved",
    )
    parser.add_argument(
        "--inspect", action="store_true",
        help="print the multi-line debug view instead of Nix text",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _run_example(name: str, strict: bool, show: Callable[[Value], str], dest: IO[str]) -> bool:
    """Evaluate one example and print it to *dest*.  Returns False on error."""
    expr = EXAMPLES[name]()
    logger.debug("Evaluating example %s: %s", name, to_nix(expr))
    try:
        result = evaluate(expr, strict=strict)
    except NixCoreError as exc:
        print(f"{name}: error: {exc}", file=sys.stderr)
        return False
    print(f"{name}: {show(result)}", file=dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    show = inspect if args.inspect else to_nix
    names = args.example or list(EXAMPLES)
    ok = True
    for name in names:
        ok = _run_example(name, args.strict, show, sys.stdout) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
