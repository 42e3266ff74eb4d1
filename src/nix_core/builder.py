"""Literal builder: Python data → Value trees.

Stands in for a textual front end::

    attrs(x=10, eh=var("x"), uh=[3, 4, 6], m={"l": 10})
    rec(a=1, b=var("a"))

Names given both positionally and as keywords, or twice in a pair
sequence, raise :class:`DuplicateKeyError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .errors import DuplicateKeyError
from .values import Binding, Value, VAttrSet, VBool, VInt, VList, VStr, VVarRef

_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1

_VALUE_TYPES = (VInt, VStr, VBool, VList, VAttrSet, VVarRef)


def var(name: str) -> VVarRef:
    return VVarRef(name)


def nix(obj: Any) -> Value:
    """Convert a Python literal to a Value.

    - bool → VBool (checked before int)
    - int → VInt (signed 64-bit range)
    - str → VStr
    - list / tuple → VList
    - dict → non-recursive VAttrSet
    - Value instances are returned as-is
    """
    if isinstance(obj, _VALUE_TYPES):
        return obj
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, int):
        if not _INT_MIN <= obj <= _INT_MAX:
            raise ValueError(f"integer {obj} does not fit in 64 bits")
        return VInt(obj)
    if isinstance(obj, str):
        return VStr(obj)
    if isinstance(obj, (list, tuple)):
        return VList([nix(item) for item in obj])
    if isinstance(obj, Mapping):
        return attrs(obj)
    raise TypeError(f"Cannot build a value from {type(obj).__name__}")


def attrs(
    entries: Mapping[str, Any] | Iterable[tuple[str, Any]] = (),
    recursive: bool = False,
    /,
    **kwargs: Any,
) -> VAttrSet:
    """Build an attribute set; *recursive* tags every binding alike.

    *entries* and *recursive* are positional-only, so every keyword
    argument is a binding: ``attrs(recursive=1)`` binds a name
    ``recursive``.
    """
    flag = bool(recursive)
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    bindings: dict[str, Binding] = {}
    for key, expr in [*pairs, *kwargs.items()]:
        if not isinstance(key, str):
            raise TypeError(f"Attribute name must be a str, not {type(key).__name__}")
        if key in bindings:
            raise DuplicateKeyError(key)
        bindings[key] = Binding(nix(expr), flag)
    return VAttrSet(bindings)


def rec(entries: Mapping[str, Any] | Iterable[tuple[str, Any]] = (), /, **kwargs: Any) -> VAttrSet:
    return attrs(entries, True, **kwargs)
