"""Value types for Nix Core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union


def quote_string(text: str) -> str:
    """Quote *text* as a Nix string literal, escaping ``\\``, ``"`` and ``${``."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    return f'"{escaped}"'


@dataclass(frozen=True)
class VInt:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VStr:
    value: str

    def __str__(self) -> str:
        return quote_string(self.value)


@dataclass(frozen=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True)
class VList:
    items: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable; store a tuple so the list cannot change
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        if not self.items:
            return "[ ]"
        return "[ " + " ".join(str(v) for v in self.items) + " ]"


@dataclass(frozen=True)
class Binding:
    """One attribute-set entry: the value expression and its recursive tag."""

    value: "Value"
    recursive: bool = False


@dataclass(frozen=True)
class VAttrSet:
    bindings: Mapping[str, Binding] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Private copy behind a read-only view
        object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))

    def __hash__(self) -> int:
        return hash(frozenset(self.bindings.items()))

    @property
    def is_recursive(self) -> bool:
        """True for a ``rec { ... }`` set: non-empty, every binding recursive."""
        return bool(self.bindings) and all(b.recursive for b in self.bindings.values())

    def __getitem__(self, name: str) -> "Value":
        return self.bindings[name].value

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __str__(self) -> str:
        from .printer import to_nix
        return to_nix(self)


@dataclass(frozen=True)
class VVarRef:
    name: str

    def __str__(self) -> str:
        return self.name


Value = Union[VInt, VStr, VBool, VList, VAttrSet, VVarRef]
