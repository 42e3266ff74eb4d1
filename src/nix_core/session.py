"""Session — staged evaluation against an accumulating top-level scope."""

from __future__ import annotations

from .environment import Scope
from .evaluator import evaluate
from .values import Value


class Session:
    """Stateful evaluator that keeps definitions across calls.

    Usage::

        session = Session()
        session.eval(attrs(total=var("price")))   # → { total = price; }
        session.define("price", nix(10))
        session.eval(attrs(total=var("price")))   # → { total = 10; }

        session.names()   # all defined names
        session.reset()   # clear state
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self.scope = Scope.empty()
        self.last_result: Value | None = None

    def define(self, name: str, value: Value) -> Value:
        """Evaluate *value* in the session scope and bind the result to *name*."""
        result = evaluate(value, self.scope, strict=self.strict)
        self.scope.bind(name, result)
        return result

    def eval(self, value: Value) -> Value:
        """Evaluate *value* in the session scope without binding it."""
        self.last_result = evaluate(value, self.scope, strict=self.strict)
        return self.last_result

    def names(self) -> list[str]:
        return self.scope.names()

    def reset(self) -> None:
        """Clear all accumulated state (definitions and last result)."""
        self.scope = Scope.empty()
        self.last_result = None
