"""
Shared fixtures and helpers for the canscript tests.

- make_store(): build a VariableStore from keyword values
- engine / context: fresh Engine and Context per test
- radar_instruction: the 8-byte 'move radar' instruction layout
"""

import pytest

from canscript.engine import Context, Engine
from canscript.program import FunctionDefinition, InstructionDefinition
from canscript.values import VarDef, VariableStore


def make_store(**values) -> VariableStore:
    """VariableStore from name=value keywords (values in 'tag:payload' form)."""
    return VariableStore(values)


def make_function(name, *stmts) -> FunctionDefinition:
    return FunctionDefinition(name, stmts=list(stmts))


@pytest.fixture
def engine():
    return Engine()


@pytest.fixture
def context():
    return Context()


@pytest.fixture
def radar_instruction():
    movr = InstructionDefinition("move radar", 1000)
    movr.args.add(VarDef("a", "i32"))
    movr.args.add(VarDef("b", "u8"))
    movr.args.add(VarDef("c", "u16"))
    movr.args.add(VarDef("d", "u8"))
    return movr
