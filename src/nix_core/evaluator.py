"""Evaluator: resolution of value trees against a scope.

Attribute sets are evaluated in two passes.  Pass 1 walks the bindings in
declaration order; recursive bindings are evaluated against a scope
derived from the ambient one and bound into it as they complete, while
non-recursive bindings only see the ambient scope.  Pass 2 re-evaluates
each recursive binding against the completed local scope, closing
references to siblings declared later.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .environment import Scope
from .errors import UnboundVariableError, UnresolvableRecursiveReferenceError
from .values import Binding, Value, VAttrSet, VBool, VInt, VList, VStr, VVarRef

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def evaluate(value: Value, scope: Scope | None = None, *, strict: bool = False) -> Value:
    """Evaluate *value* against *scope* and return a new, resolved tree.

    References that no enclosing scope binds are returned unchanged.  With
    ``strict=True`` the result is checked afterwards and
    :class:`UnresolvableRecursiveReferenceError` or
    :class:`UnboundVariableError` is raised instead.
    """
    if scope is None:
        scope = Scope.empty()
    result = _eval(value, scope)

    if logger.isEnabledFor(logging.DEBUG):
        free = free_variables(result)
        if free:
            logger.debug("Free variables after evaluation: %s", ", ".join(free))
    if strict:
        _check_closed(result)
    return result


# ---------------------------------------------------------------------------
# Variant rules
# ---------------------------------------------------------------------------

def _eval(value: Value, scope: Scope) -> Value:
    if isinstance(value, (VInt, VStr, VBool)):
        return value

    if isinstance(value, VList):
        return VList([_eval(item, scope) for item in value.items])

    if isinstance(value, VVarRef):
        bound = scope.lookup(value.name)
        if bound is None:
            return value
        return bound

    if isinstance(value, VAttrSet):
        return _eval_attrset(value, scope)

    raise TypeError(f"Cannot evaluate {type(value).__name__}")


def _eval_attrset(attrset: VAttrSet, scope: Scope) -> VAttrSet:
    local = scope.derive()
    seeded: dict[str, Binding] = {}

    # Pass 1: seed recursive bindings into the local scope in order
    for name, binding in attrset.bindings.items():
        if binding.recursive:
            result = _eval(binding.value, local)
            local.bind(name, result)
        else:
            result = _eval(binding.value, scope)
        seeded[name] = Binding(result, binding.recursive)

    if not any(b.recursive for b in seeded.values()):
        return VAttrSet(seeded)

    logger.debug("Closing recursive attributes: %s",
                 ", ".join(n for n, b in seeded.items() if b.recursive))

    # Pass 2: close forward references against the completed local scope
    closed: dict[str, Binding] = {}
    for name, binding in seeded.items():
        if binding.recursive:
            closed[name] = Binding(_eval(binding.value, local), True)
        else:
            closed[name] = binding
    return VAttrSet(closed)


# ---------------------------------------------------------------------------
# Tree inspection
# ---------------------------------------------------------------------------

def _iter_refs(value: Value) -> Iterator[str]:
    if isinstance(value, VVarRef):
        yield value.name
    elif isinstance(value, VList):
        for item in value.items:
            yield from _iter_refs(item)
    elif isinstance(value, VAttrSet):
        for binding in value.bindings.values():
            yield from _iter_refs(binding.value)


def free_variables(value: Value) -> list[str]:
    """Names of the references left in *value*, in first-occurrence order."""
    return list(dict.fromkeys(_iter_refs(value)))


def unresolved_recursive_references(value: Value) -> Iterator[tuple[str, str]]:
    """Yield ``(binding, name)`` for recursive bindings still naming a sibling.

    Only references to recursive siblings of the same set count; those are
    the ones the two passes were expected to close.
    """
    if isinstance(value, VList):
        for item in value.items:
            yield from unresolved_recursive_references(item)
        return
    if not isinstance(value, VAttrSet):
        return

    siblings = {n for n, b in value.bindings.items() if b.recursive}
    for name, binding in value.bindings.items():
        if binding.recursive:
            for ref in free_variables(binding.value):
                if ref in siblings:
                    yield name, ref
        yield from unresolved_recursive_references(binding.value)


def _check_closed(result: Value) -> None:
    pending = next(unresolved_recursive_references(result), None)
    if pending is not None:
        raise UnresolvableRecursiveReferenceError(*pending)
    free = free_variables(result)
    if free:
        raise UnboundVariableError(free[0])
