"""
Tests for tagged values, variable declarations and variable stores.

These tests verify:
- tag:payload parsing and rendering
- binding add/update/remove semantics
- scoped lookup order (self -> scope1 -> scope2)
- transitive var: indirection and cycle detection
"""

import pytest

from canscript.errors import IndirectionCycleError
from canscript.values import (
    TaggedValue, ValueTag, VarBinding, VarDef, VarDefList, VariableStore,
)
from .conftest import make_store


class TestTaggedValue:
    """Tests for TaggedValue."""

    def test_parse_tagged_text(self):
        value = TaggedValue.parse("int:42")
        assert value.tag == "int"
        assert value.payload == "42"
        assert value.kind == ValueTag.INT

    def test_untagged_text(self):
        value = TaggedValue.parse("hello")
        assert value.tag == ""
        assert value.kind is None
        assert str(value) == "hello"

    def test_payload_keeps_later_colons(self):
        value = TaggedValue.parse("str:a:b")
        assert value.payload == "a:b"
        assert str(value) == "str:a:b"

    def test_var_reference(self):
        value = TaggedValue.var("x")
        assert value.is_var
        assert str(value) == "var:x"

    def test_coerce_numbers(self):
        assert str(TaggedValue.coerce(5)) == "int:5"
        assert str(TaggedValue.coerce(2.5)) == "float:2.5"

    def test_as_int(self):
        assert TaggedValue.parse("int:-12").as_int() == -12
        assert TaggedValue.parse("int:0x1F").as_int() == 31
        assert TaggedValue.parse("007").as_int() == 7

    def test_hex_payload(self):
        value = TaggedValue.parse("hex:FF 1A 00")
        assert value.as_bytes() == b"\xff\x1a\x00"
        assert value.as_int() == 0xFF1A00

    def test_empty(self):
        assert TaggedValue.parse("").is_empty()
        assert not TaggedValue.parse("str:").is_empty()


class TestVarDefList:
    """Tests for VarDefList."""

    def test_find(self):
        defs = VarDefList()
        defs.add(VarDef("a", "i32"))
        defs.add(VarDef("b", "u8"))
        assert defs.find("a").type == "i32"
        assert defs.find("b").type == "u8"
        assert defs.find("c") is None

    def test_add_more_keeps_order(self):
        defs = VarDefList([VarDef("a", "i32"), VarDef("b", "u8")])
        defs2 = VarDefList([VarDef("z", "u16")])
        defs2.add_more(defs)
        assert [d.name for d in defs2] == ["z", "a", "b"]
        assert len(defs2) == 3


class TestBindings:
    """Tests for VariableStore binding semantics."""

    def test_add_and_contains(self):
        store = VariableStore()
        store.add(VarBinding.of("b", "hello"))
        store.add(VarBinding.of("a", "123"))
        assert store.contains("a")
        assert store.contains("b")
        assert not store.contains("c")
        assert not store.contains("A")  # case sensitive

    def test_add_does_not_replace(self):
        store = make_store(a="int:1")
        store.add(VarBinding.of("a", "int:2"))
        assert store.raw_value_of("a") == "int:1"

    def test_set_binding_adds_updates_and_removes(self):
        store = VariableStore()
        store.set_binding("c", "liigo")
        assert store.raw_value_of("c") == "liigo"
        store.set_binding("c", "6")
        assert store.raw_value_of("c") == "6"
        store.set_binding("c", "")
        assert not store.contains("c")
        assert store.raw_value_of("c") is None

    def test_empty_value_on_missing_name_is_noop(self):
        store = make_store(a="int:1")
        store.set_binding("x", "")
        assert store.names() == ["a"]

    def test_remove_binding(self):
        store = make_store(a="int:1")
        store.remove_binding("a")
        store.remove_binding("missing")
        assert len(store) == 0

    def test_copy_is_independent(self):
        store = make_store(a="int:1")
        other = store.copy()
        other.set_binding("a", "int:2")
        other.set_binding("b", "int:3")
        assert store.raw_value_of("a") == "int:1"
        assert "b" not in store

    def test_add_more(self):
        store = make_store(a="int:1")
        store.add_more(make_store(a="int:9", b="int:2"))
        assert store.raw_value_of("a") == "int:1"
        assert store.raw_value_of("b") == "int:2"


class TestScopedResolution:
    """Tests for eval_var / eval across scopes."""

    def test_shadowing_order(self):
        """Arguments shadow locals which shadow globals."""
        args = make_store(a="0")
        local_vars = make_store(a="1", b="var:a")
        global_vars = make_store(g1="100")

        assert args.eval_var_str("a", local_vars, global_vars) == "0"
        assert local_vars.eval_var_str("a", global_vars) == "1"
        assert local_vars.eval_var_str("b") == "1"
        assert args.eval_var_str("g1", local_vars, global_vars) == "100"

    def test_transitive_indirection(self):
        """var: chains continue from the resolving store's own scope chain."""
        local_vars = make_store(d="var:g2", a="1")
        global_vars = make_store(g2="var:g3", g3="var:a")
        assert local_vars.eval_var_str("d", global_vars) == "1"

    def test_tag_is_kept(self):
        store = make_store(x="int:5", y="var:x")
        assert str(store.eval_var("y")) == "int:5"
        assert store.eval_var_str("y") == "5"

    def test_unbound_name(self):
        store = make_store(y="var:nothing")
        assert store.eval_var("missing") is None
        assert store.eval_var("y") is None
        assert store.eval_str("var:missing") is None

    def test_eval_literal_is_unchanged(self):
        store = make_store(x="int:5")
        assert str(store.eval("str:x")) == "str:x"
        assert str(store.eval("var:x")) == "int:5"
        assert store.eval_str("int:7") == "7"

    def test_self_reference_is_detected(self):
        store = make_store(a="var:a")
        with pytest.raises(IndirectionCycleError):
            store.eval_var("a")

    def test_cycle_is_detected(self):
        local_vars = make_store(a="var:b")
        global_vars = make_store(b="var:a")
        with pytest.raises(IndirectionCycleError) as info:
            local_vars.eval_var("a", global_vars)
        assert info.value.chain == ["a", "b", "a"]
