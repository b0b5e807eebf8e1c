"""Tagged values, variable declarations and scoped variable stores."""

from .tagged import TaggedValue, ValueTag, parse_int
from .variables import VarDef, VarDefList, VarBinding, VariableStore

__all__ = [
    'TaggedValue', 'ValueTag', 'parse_int',
    'VarDef', 'VarDefList', 'VarBinding', 'VariableStore',
]
