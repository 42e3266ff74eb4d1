"""Exceptions raised by the builder and by strict evaluation."""

from __future__ import annotations


class NixCoreError(Exception):
    """Base class for all Nix Core errors."""


class DuplicateKeyError(NixCoreError):
    """An attribute set was constructed with the same name twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate attribute '{key}'")
        self.key = key


class UnboundVariableError(NixCoreError):
    """A variable reference is still free after strict evaluation."""

    def __init__(self, name: str) -> None:
        super().__init__(f"undefined variable '{name}'")
        self.name = name


class UnresolvableRecursiveReferenceError(NixCoreError):
    """A recursive binding still refers to a sibling after both passes."""

    def __init__(self, binding: str, name: str) -> None:
        super().__init__(
            f"recursive attribute '{binding}' cannot resolve sibling '{name}'"
        )
        self.binding = binding
        self.name = name
