"""Tests for nix_core.evaluator."""

import logging

import pytest

from nix_core import evaluator
from nix_core import (
    Binding,
    Scope,
    UnboundVariableError,
    UnresolvableRecursiveReferenceError,
    VAttrSet,
    VBool,
    VInt,
    VList,
    VStr,
    VVarRef,
    attrs,
    evaluate,
    free_variables,
    rec,
    unresolved_recursive_references,
    var,
)


def _scope(**values):
    scope = Scope.empty()
    for name, value in values.items():
        scope.bind(name, value)
    return scope


# ---------------------------------------------------------------------------
# Literals, lists and references
# ---------------------------------------------------------------------------

class TestLiterals:
    @pytest.mark.parametrize("value", [VInt(0), VInt(-7), VStr(""), VStr("x"), VBool(True)])
    def test_self_evaluating(self, value):
        assert evaluate(value) == value
        assert evaluate(value, _scope(x=VInt(1))) == value


class TestList:
    def test_elements_evaluated_in_order(self):
        lst = VList([VVarRef("a"), VInt(2), VVarRef("b")])
        result = evaluate(lst, _scope(a=VInt(1), b=VStr("b")))
        assert result == VList([VInt(1), VInt(2), VStr("b")])

    def test_empty_list(self):
        assert evaluate(VList([])) == VList([])

    def test_does_not_mutate_input(self):
        lst = VList([VVarRef("a")])
        evaluate(lst, _scope(a=VInt(1)))
        assert lst == VList([VVarRef("a")])


class TestVarRef:
    def test_free_variable_passes_through(self):
        assert evaluate(VVarRef("qux"), Scope.empty()) == VVarRef("qux")

    def test_bound_variable_resolves(self):
        assert evaluate(VVarRef("x"), _scope(x=VInt(5))) == VInt(5)

    def test_default_scope_is_empty(self):
        assert evaluate(VVarRef("x")) == VVarRef("x")


# ---------------------------------------------------------------------------
# Attribute sets
# ---------------------------------------------------------------------------

class TestNonRecursiveSet:
    def test_siblings_invisible(self):
        expr = attrs(x=10, eh=var("x"), uh=[3, 4, 6], m={"l": 10})
        result = evaluate(expr, Scope.empty())
        assert result == VAttrSet({
            "x": Binding(VInt(10)),
            "eh": Binding(VVarRef("x")),
            "uh": Binding(VList([VInt(3), VInt(4), VInt(6)])),
            "m": Binding(VAttrSet({"l": Binding(VInt(10))})),
        })

    def test_sees_outer_scope(self):
        result = evaluate(attrs(x=1, y=var("x")), _scope(x=VInt(100)))
        assert result["y"] == VInt(100)

    def test_keeps_declaration_order(self):
        result = evaluate(attrs([("z", 1), ("a", 2), ("m", 3)]))
        assert list(result.bindings) == ["z", "a", "m"]


class TestRecursiveSet:
    def test_sibling_resolves(self):
        result = evaluate(rec(a=1, b=var("a")))
        assert result["b"] == VInt(1)
        assert result.bindings["b"].recursive

    def test_forward_reference_closed_by_second_pass(self):
        result = evaluate(rec(b=var("a"), a=1))
        assert result == rec(b=1, a=1)

    def test_sibling_shadows_outer(self):
        result = evaluate(rec(a=1, b=var("a")), _scope(a=VInt(100)))
        assert result["b"] == VInt(1)

    def test_outer_visible_when_not_shadowed(self):
        result = evaluate(rec(b=var("y")), _scope(y=VStr("outer")))
        assert result["b"] == VStr("outer")

    def test_list_of_siblings(self):
        result = evaluate(rec(xs=[var("a"), var("b")], a=1, b=2))
        assert result["xs"] == VList([VInt(1), VInt(2)])

    def test_free_reference_kept(self):
        result = evaluate(rec(a=var("nowhere")))
        assert result["a"] == VVarRef("nowhere")

    def test_ambient_scope_untouched(self):
        scope = _scope(q=VInt(1))
        evaluate(rec(a=1, b=var("a")), scope)
        assert scope.names() == ["q"]

    def test_chain_deeper_than_one_pass_stays_unresolved(self):
        result = evaluate(rec(a=var("b"), b=var("c"), c=1))
        assert result["a"] == VVarRef("c")
        assert result["b"] == VInt(1)
        assert result["c"] == VInt(1)

    def test_mixed_tags(self):
        expr = VAttrSet({
            "a": Binding(VInt(1), recursive=True),
            "b": Binding(VVarRef("a"), recursive=False),
            "c": Binding(VVarRef("a"), recursive=True),
        })
        result = evaluate(expr)
        assert result["b"] == VVarRef("a")
        assert result["c"] == VInt(1)


class TestNesting:
    def test_plain_set_inside_rec_does_not_see_own_siblings(self):
        result = evaluate(rec(x=1, inner=attrs(p=2, q=var("p"), y=var("x"))))
        assert result["inner"] == attrs(p=2, q=var("p"), y=1)

    def test_rec_inside_plain_set_does_not_see_outer_siblings(self):
        result = evaluate(attrs(x=1, s=rec(y=var("x"))))
        assert result["s"] == rec(y=var("x"))

    def test_rec_inside_rec(self):
        result = evaluate(rec(a=1, s=rec(b=var("a"), c=var("b"))))
        assert result["s"] == rec(b=1, c=1)

    def test_outer_second_pass_closes_inner_chain(self):
        inner = rec(p=var("q"), q=var("r"), r=var("b"))
        result = evaluate(rec(a=inner, b=1), strict=True)
        assert result["a"] == rec(p=1, q=1, r=1)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class TestFixedPoint:
    @pytest.mark.parametrize("expr", [
        attrs(x=10, uh=[3, 4, 6], m={"l": 10}),
        rec(a=1, b=[True, "s"]),
        VList([VInt(1), attrs(k=rec(z=0))]),
    ])
    def test_closed_tree_is_fixed_point(self, expr):
        once = evaluate(expr)
        assert evaluate(once) == once
        assert once == expr


# ---------------------------------------------------------------------------
# Tree inspection and strict mode
# ---------------------------------------------------------------------------

class TestFreeVariables:
    def test_first_occurrence_order_unique(self):
        expr = VList([var("b"), attrs(x=var("a"), y=var("b"))])
        assert free_variables(expr) == ["b", "a"]

    def test_closed_tree(self):
        assert free_variables(attrs(x=1)) == []


class TestUnresolvedRecursive:
    def test_reports_sibling(self):
        result = evaluate(rec(a=var("b"), b=var("a")))
        assert list(unresolved_recursive_references(result)) == [("a", "b"), ("b", "b")]

    def test_ignores_non_sibling_names(self):
        result = evaluate(rec(a=var("outside")))
        assert list(unresolved_recursive_references(result)) == []

    def test_ignores_non_recursive_bindings(self):
        result = evaluate(attrs(x=1, y=var("x")))
        assert list(unresolved_recursive_references(result)) == []


class TestStrict:
    def test_unbound_raises(self):
        with pytest.raises(UnboundVariableError) as info:
            evaluate(attrs(x=10, eh=var("x")), strict=True)
        assert info.value.name == "x"

    def test_cycle_raises(self):
        with pytest.raises(UnresolvableRecursiveReferenceError) as info:
            evaluate(rec(a=var("b"), b=var("a")), strict=True)
        assert info.value.binding == "a"
        assert info.value.name == "b"

    def test_self_reference_raises(self):
        with pytest.raises(UnresolvableRecursiveReferenceError):
            evaluate(rec(a=var("a")), strict=True)

    def test_closed_result_passes(self):
        assert evaluate(rec(b=var("a"), a=1), strict=True) == rec(b=1, a=1)

    def test_scope_satisfies_references(self):
        assert evaluate(var("x"), _scope(x=VInt(1)), strict=True) == VInt(1)


class TestLogging:
    def test_free_variables_logged_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="nix_core.evaluator")
        evaluate(attrs(z=var("qux")))
        assert "Free variables after evaluation: qux" in caplog.text

    def test_no_tree_walk_when_debug_off(self, caplog, monkeypatch):
        caplog.set_level(logging.WARNING, logger="nix_core.evaluator")

        def fail(value):
            raise AssertionError("free_variables should not run")

        monkeypatch.setattr(evaluator, "free_variables", fail)
        assert evaluate(var("qux")) == VVarRef("qux")
