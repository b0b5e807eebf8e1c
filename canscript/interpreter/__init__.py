"""Statement interpreter and SET_VAR arithmetic."""

from .arithmetic import (
    apply_operator, OPERATORS, COMPOUND_OPERATORS, ASSIGN_GLOBAL, ASSIGN_LOCAL,
)
from .interpreter import StatementInterpreter, ExecutionFrame, RETURN_VAR, LOOP_INDEX

__all__ = [
    'apply_operator', 'OPERATORS', 'COMPOUND_OPERATORS', 'ASSIGN_GLOBAL', 'ASSIGN_LOCAL',
    'StatementInterpreter', 'ExecutionFrame', 'RETURN_VAR', 'LOOP_INDEX',
]
