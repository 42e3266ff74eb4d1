"""Nix Core — evaluator for attribute-set expressions with recursive scopes."""

from .builder import attrs, nix, rec, var
from .environment import Scope
from .errors import (
    DuplicateKeyError,
    NixCoreError,
    UnboundVariableError,
    UnresolvableRecursiveReferenceError,
)
from .evaluator import evaluate, free_variables, unresolved_recursive_references
from .printer import inspect, to_nix
from .session import Session
from .values import Binding, Value, VAttrSet, VBool, VInt, VList, VStr, VVarRef

__all__ = [
    "evaluate",
    "free_variables",
    "unresolved_recursive_references",
    "Scope",
    "Session",
    "Binding",
    "Value",
    "VAttrSet",
    "VBool",
    "VInt",
    "VList",
    "VStr",
    "VVarRef",
    "attrs",
    "nix",
    "rec",
    "var",
    "inspect",
    "to_nix",
    "NixCoreError",
    "DuplicateKeyError",
    "UnboundVariableError",
    "UnresolvableRecursiveReferenceError",
]
