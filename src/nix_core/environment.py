"""Scope management: name-to-value environments for evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .values import Value


@dataclass
class Scope:
    """Bindings visible to an expression while it is evaluated.

    A derived scope is a copy: binding into it never affects the scope
    it was derived from.
    """

    bindings: dict[str, Value] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Scope:
        return cls()

    def derive(self) -> Scope:
        return Scope(dict(self.bindings))

    # -- Variables ------------------------------------------------------

    def bind(self, name: str, value: Value) -> None:
        self.bindings[name] = value

    def lookup(self, name: str) -> Value | None:
        """Return the value bound to *name*, or ``None`` if unbound."""
        return self.bindings.get(name)

    def names(self) -> list[str]:
        return list(self.bindings)

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)
