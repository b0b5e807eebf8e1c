"""Program model: statements, function and instruction definitions."""

from .statement import (
    Statement, StatementKind,
    ARG_COUNT, ARG_VARNAME, ARG_OP1, ARG_OPERAND1, ARG_OP2, ARG_OPERAND2,
)
from .function import FunctionDefinition, build_loop_pairs
from .instruction import InstructionDefinition

__all__ = [
    'Statement', 'StatementKind',
    'ARG_COUNT', 'ARG_VARNAME', 'ARG_OP1', 'ARG_OPERAND1', 'ARG_OP2', 'ARG_OPERAND2',
    'FunctionDefinition', 'build_loop_pairs',
    'InstructionDefinition',
]
