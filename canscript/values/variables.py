"""
Variable declarations and variable stores.

A VariableStore maps names to tagged values. Stores are chained at
lookup time: a store resolves a name in itself first and then in up to
two fallback scopes, so the innermost scope shadows the outer ones.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

from ..errors import IndirectionCycleError
from .tagged import TaggedValue

ValueLike = Union[TaggedValue, str]


@dataclass
class VarDef:
    """Declaration of a formal argument."""
    name: str
    type: str  # i8, u8, i16, u16, i32, u32, f64, str, hex
    range: str = ""  # reserved: 'a..z' or 'a...z'
    default: str = ""  # used when the argument is not bound


class VarDefList:
    """Ordered list of VarDefs. Declaration order is preserved."""

    def __init__(self, defs: Optional[List[VarDef]] = None):
        self.defs: List[VarDef] = list(defs or [])

    def add(self, vardef: VarDef):
        self.defs.append(vardef)

    def add_more(self, defs: 'VarDefList'):
        for vardef in defs:
            self.add(vardef)

    def find(self, name: str) -> Optional[VarDef]:
        for vardef in self.defs:
            if vardef.name == name:
                return vardef
        return None

    def __iter__(self) -> Iterator[VarDef]:
        return iter(self.defs)

    def __len__(self):
        return len(self.defs)

    def __repr__(self):
        return f"VarDefList({self.defs!r})"


@dataclass(frozen=True)
class VarBinding:
    """One name -> value association."""
    name: str
    value: TaggedValue

    @classmethod
    def of(cls, name: str, value: ValueLike) -> 'VarBinding':
        return cls(name, TaggedValue.coerce(value))


class VariableStore:
    """
    Name -> tagged value mapping (a scope).

    Names are case sensitive and unique. Binding an empty value removes
    the name, so an empty string is never a stored value.
    """

    def __init__(self, bindings: Optional[Dict[str, ValueLike]] = None):
        self.bindings: Dict[str, VarBinding] = {}
        for name, value in (bindings or {}).items():
            self.set_binding(name, value)

    def add(self, binding: VarBinding):
        """Insert binding unless the name is already bound."""
        if binding.value.is_empty():
            return
        self.bindings.setdefault(binding.name, binding)

    def add_more(self, other: 'VariableStore'):
        for binding in other.bindings.values():
            self.add(binding)

    def set_binding(self, name: str, value: ValueLike):
        """
        Add a new binding, replace an old one, or remove it if value is empty.

        Values should normally carry a tag ('str:hello', 'int:123',
        'var:name', 'hex:FF 1A 00'); untagged text is ambiguous once it
        contains ':' itself.
        """
        value = TaggedValue.coerce(value)
        if value.is_empty():
            self.bindings.pop(name, None)
        else:
            self.bindings[name] = VarBinding(name, value)

    def remove_binding(self, name: str):
        self.bindings.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self.bindings

    def value_of(self, name: str) -> Optional[TaggedValue]:
        binding = self.bindings.get(name)
        return binding.value if binding else None

    def raw_value_of(self, name: str) -> Optional[str]:
        """Stored value in its text form, tag included."""
        value = self.value_of(name)
        return str(value) if value is not None else None

    def names(self) -> List[str]:
        return list(self.bindings)

    def copy(self) -> 'VariableStore':
        store = VariableStore()
        store.bindings = dict(self.bindings)
        return store

    def _lookup(self, name: str, scope1: Optional['VariableStore'],
                scope2: Optional['VariableStore']) -> Optional[TaggedValue]:
        for scope in (self, scope1, scope2):
            if scope is not None and name in scope.bindings:
                return scope.bindings[name].value
        return None

    def eval_var(self, name: str, scope1: Optional['VariableStore'] = None,
                 scope2: Optional['VariableStore'] = None,
                 _chain: Optional[List[str]] = None) -> Optional[TaggedValue]:
        """
        Resolve a variable by name.

        Looks in self, then scope1, then scope2; the first match wins.
        A 'var:' value is followed again from self with the same fallback
        scopes until a non-reference value is found.

        Returns:
            The resolved value with its tag, or None if a name in the
            chain is unbound.

        Raises:
            IndirectionCycleError: if the chain refers back to a name
                already visited.
        """
        chain = _chain if _chain is not None else [name]
        value = self._lookup(name, scope1, scope2)
        if value is None or not value.is_var:
            return value
        target = value.payload
        if target in chain:
            raise IndirectionCycleError(chain + [target])
        return self.eval_var(target, scope1, scope2, chain + [target])

    def eval(self, expr: ValueLike, scope1: Optional['VariableStore'] = None,
             scope2: Optional['VariableStore'] = None) -> Optional[TaggedValue]:
        """Evaluate an expression: 'var:' resolves, anything else is a literal."""
        expr = TaggedValue.coerce(expr)
        if expr.is_var:
            return self.eval_var(expr.payload, scope1, scope2)
        return expr

    def eval_var_str(self, name: str, scope1: Optional['VariableStore'] = None,
                     scope2: Optional['VariableStore'] = None) -> Optional[str]:
        value = self.eval_var(name, scope1, scope2)
        if value is None:
            return None
        assert not value.is_var
        return value.payload

    def eval_str(self, expr: ValueLike, scope1: Optional['VariableStore'] = None,
                 scope2: Optional['VariableStore'] = None) -> Optional[str]:
        value = self.eval(expr, scope1, scope2)
        if value is None:
            return None
        assert not value.is_var
        return value.payload

    def __contains__(self, name: str):
        return name in self.bindings

    def __iter__(self) -> Iterator[VarBinding]:
        return iter(list(self.bindings.values()))

    def __len__(self):
        return len(self.bindings)

    def __repr__(self):
        items = ", ".join(f"{b.name}={b.value}" for b in self.bindings.values())
        return f"VariableStore({items})"
