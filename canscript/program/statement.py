"""
Statement definitions.

A Statement is one executable unit of a function: a kind, a content
string whose meaning depends on the kind, and a block of named
arguments. Statements are plain data so they can be stored and rebuilt
by the host; they carry no runtime state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from ..values import TaggedValue, VariableStore

# Argument names read by LOOP and SET_VAR statements
ARG_COUNT = "$count"
ARG_VARNAME = "$varname"
ARG_OP1 = "$op1"
ARG_OPERAND1 = "$operand1"
ARG_OP2 = "$op2"
ARG_OPERAND2 = "$operand2"


class StatementKind(Enum):
    """Statement kinds."""
    CALL_INSTRUCTION = auto()  # content: instruction name
    CALL_FUNCTION = auto()     # content: function name
    LOOP = auto()              # args: $count
    END_LOOP = auto()
    RETURN = auto()            # content: returned expression
    SET_VAR = auto()           # args: $varname $op1 $operand1 [$op2 $operand2]
    SET_LOCAL = auto()         # content: "name=value"
    SET_GLOBAL = auto()        # content: "name=value"


def _name_value(text: str) -> TaggedValue:
    """Names and operators are stored as str: unless given as an explicit var: reference."""
    if text.startswith(("var:", "str:")):
        return TaggedValue.parse(text)
    return TaggedValue.of_str(text)


@dataclass
class Statement:
    """Any executable statement of a function."""
    kind: StatementKind
    content: str = ""
    args: VariableStore = field(default_factory=VariableStore)
    note: str = ""

    @classmethod
    def call_instruction(cls, name: str, args: Optional[VariableStore] = None,
                         note: str = "") -> 'Statement':
        return cls(StatementKind.CALL_INSTRUCTION, name, args or VariableStore(), note)

    @classmethod
    def call_function(cls, name: str, args: Optional[VariableStore] = None,
                      note: str = "") -> 'Statement':
        return cls(StatementKind.CALL_FUNCTION, name, args or VariableStore(), note)

    @classmethod
    def loop(cls, count: Union[int, str], note: str = "") -> 'Statement':
        """Loop count is an int or an expression such as 'var:n'."""
        stmt = cls(StatementKind.LOOP, note=note)
        stmt.args.set_binding(ARG_COUNT, TaggedValue.coerce(count))
        return stmt

    @classmethod
    def end_loop(cls, note: str = "") -> 'Statement':
        return cls(StatementKind.END_LOOP, note=note)

    @classmethod
    def return_(cls, expr: str = "", note: str = "") -> 'Statement':
        return cls(StatementKind.RETURN, expr, note=note)

    @classmethod
    def set_var(cls, varname: str, op1: str, operand1: Union[str, int, float],
                op2: str = "", operand2: Union[str, int, float] = "",
                note: str = "") -> 'Statement':
        """
        Build a SET_VAR statement: varname op1 operand1 [op2 operand2].

        Examples:
            set_var("x", ":=", "int:1")               # global x = 1
            set_var("b", ":=", "var:gi1", "-", "int:2")
            set_var("s", "+=", "str:Hi")
        """
        stmt = cls(StatementKind.SET_VAR, note=note)
        stmt.args.set_binding(ARG_VARNAME, _name_value(varname))
        stmt.args.set_binding(ARG_OP1, _name_value(op1))
        stmt.args.set_binding(ARG_OPERAND1, TaggedValue.coerce(operand1))
        if op2:
            stmt.args.set_binding(ARG_OP2, _name_value(op2))
        stmt.args.set_binding(ARG_OPERAND2, TaggedValue.coerce(operand2))
        return stmt

    @classmethod
    def set_local(cls, expr: str, note: str = "") -> 'Statement':
        """expr: 'name=value'"""
        return cls(StatementKind.SET_LOCAL, expr, note=note)

    @classmethod
    def set_global(cls, expr: str, note: str = "") -> 'Statement':
        """expr: 'name=value'"""
        return cls(StatementKind.SET_GLOBAL, expr, note=note)

    def __repr__(self):
        return f"Statement({self.kind.name}, {self.content!r})"
