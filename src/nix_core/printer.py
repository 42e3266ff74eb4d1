"""Rendering of evaluated values for display."""

from __future__ import annotations

import re

from .values import Value, VAttrSet, VBool, VInt, VList, VStr, VVarRef, quote_string

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_'-]*")
_KEYWORDS = frozenset({"assert", "else", "if", "in", "inherit", "let", "or", "rec", "then", "with"})


def _attr_name(name: str) -> str:
    """Render an attribute name, quoting it unless it is a plain identifier."""
    if _IDENT_RE.fullmatch(name) and name not in _KEYWORDS:
        return name
    return quote_string(name)


def to_nix(value: Value) -> str:
    """Render *value* as one line of Nix-like text.

    A set whose bindings are all recursive prints as ``rec { ... }``; in a
    mixed set the recursive bindings carry a ``/* rec */`` marker.
    """
    if isinstance(value, VList):
        if not value.items:
            return "[ ]"
        return "[ " + " ".join(to_nix(v) for v in value.items) + " ]"

    if isinstance(value, VAttrSet):
        if not value.bindings:
            return "{ }"
        whole = value.is_recursive
        parts = []
        for name, binding in value.bindings.items():
            marker = "/* rec */ " if binding.recursive and not whole else ""
            parts.append(f"{marker}{_attr_name(name)} = {to_nix(binding.value)};")
        prefix = "rec " if whole else ""
        return prefix + "{ " + " ".join(parts) + " }"

    # Scalars and references render themselves
    return str(value)


def _fmt_inline(value: Value) -> str:
    """Format a leaf for one line of the inspect view."""
    if isinstance(value, VVarRef):
        return f"VarRef({value.name})"
    if isinstance(value, (VInt, VStr, VBool)):
        return str(value)
    return to_nix(value)


def inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print *value* over several lines, naming each variant."""
    pad = "  " * indent

    if isinstance(value, VAttrSet):
        if not value.bindings:
            return "AttrSet {}"
        width = max(len(k) for k in value.bindings)
        lines = ["AttrSet {"]
        for name, binding in value.bindings.items():
            tag = " (rec)" if binding.recursive else ""
            body = inspect(binding.value, indent + 1)
            lines.append(f"{pad}  {name:<{width}}{tag}: {body}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    if isinstance(value, VList):
        if not value.items:
            return "List []"
        lines = ["List ["]
        for i, item in enumerate(value.items):
            lines.append(f"{pad}  {i}: {inspect(item, indent + 1)}")
        lines.append(f"{pad}]")
        return "\n".join(lines)

    return _fmt_inline(value)
