"""
Statement interpreter.

Runs the statements of one FunctionDefinition against a fresh local
scope and the shared global scope of a Context. Runtime state (the
instruction pointer and loop counters) lives in an ExecutionFrame owned
by the call, so the same definition can be executed recursively or
repeatedly without seeing stale loop state.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..errors import (
    BindingError, DefinitionNotFoundError, EngineError, OperatorError, StructuralError,
)
from ..program import (
    FunctionDefinition, Statement, StatementKind,
    ARG_COUNT, ARG_VARNAME, ARG_OP1, ARG_OPERAND1, ARG_OP2, ARG_OPERAND2,
)
from ..utils import split_lr
from ..values import TaggedValue, VariableStore, parse_int
from .arithmetic import ASSIGN_GLOBAL, ASSIGN_LOCAL, COMPOUND_OPERATORS, apply_operator

if TYPE_CHECKING:
    from ..engine import Engine, Context

RETURN_VAR = "$return"
LOOP_INDEX = "$index"


@dataclass
class ExecutionFrame:
    """Runtime state of one function call."""
    function: FunctionDefinition
    args: VariableStore
    locals: VariableStore
    eip: int = 0
    # statement position of an active LOOP -> its scratch store ($index, $count)
    loops: Dict[int, VariableStore] = field(default_factory=dict)
    result: Optional[TaggedValue] = None


class StatementInterpreter:
    """Executes function statements for an Engine."""

    def __init__(self, engine: 'Engine', context: 'Context', depth: int = 0):
        self.engine = engine
        self.context = context
        self.depth = depth
        self._handlers: Dict[StatementKind, Callable[[ExecutionFrame, Statement], Optional[int]]] = {
            StatementKind.CALL_INSTRUCTION: self._exec_call_instruction,
            StatementKind.CALL_FUNCTION: self._exec_call_function,
            StatementKind.LOOP: self._exec_loop,
            StatementKind.END_LOOP: self._exec_end_loop,
            StatementKind.RETURN: self._exec_return,
            StatementKind.SET_VAR: self._exec_set_var,
            StatementKind.SET_LOCAL: self._exec_set_local,
            StatementKind.SET_GLOBAL: self._exec_set_global,
        }
        missing = [kind.name for kind in StatementKind if kind not in self._handlers]
        if missing:
            raise EngineError(f"No handler for statement kinds: {missing}")

    @property
    def globals(self) -> VariableStore:
        return self.context.globals

    def execute(self, function: FunctionDefinition, args: VariableStore) -> Optional[TaggedValue]:
        """
        Run a function to completion.

        Args:
            function: Definition to run
            args: Call arguments; also copied to seed the local scope

        Returns:
            The value of an executed RETURN statement, or None
        """
        self.globals.remove_binding(RETURN_VAR)
        frame = ExecutionFrame(function, args, args.copy())
        stmts = function.stmts

        while frame.eip < len(stmts):
            stmt = stmts[frame.eip]
            try:
                target = self._handlers[stmt.kind](frame, stmt)
            except BindingError as e:
                self.context.log_error(f"{function.name}[{frame.eip}] {stmt.kind.name}: {e}")
                target = None
            frame.eip = frame.eip + 1 if target is None else target

        if frame.result is None:
            # implicit return: drop values left by nested calls
            self.globals.remove_binding(RETURN_VAR)
        return frame.result

    # Value resolution: args -> locals -> globals

    def resolve(self, frame: ExecutionFrame, expr) -> Optional[TaggedValue]:
        return frame.args.eval(expr, frame.locals, self.globals)

    def resolve_args(self, frame: ExecutionFrame, stmt: Statement) -> VariableStore:
        """Concrete values of a call statement's arguments in the caller's scopes."""
        actuals = VariableStore()
        for binding in stmt.args:
            value = self.resolve(frame, binding.value)
            if value is None:
                raise BindingError(f"Undefined variable: {binding.value.payload}")
            actuals.set_binding(binding.name, value)
        return actuals

    def _arg_value(self, frame: ExecutionFrame, stmt: Statement, name: str) -> TaggedValue:
        raw = stmt.args.value_of(name)
        if raw is None:
            raise BindingError(f"Missing argument: {name}")
        value = self.resolve(frame, raw)
        if value is None:
            raise BindingError(f"Undefined variable: {raw.payload}")
        return value

    def _loop_pairs(self, function: FunctionDefinition) -> Dict[int, int]:
        try:
            return function.loop_pairs
        except StructuralError as e:
            self.context.log_fatal(str(e))
            raise

    # Statement handlers. Each returns the next eip, or None to advance by one.

    def _exec_call_instruction(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        actuals = self.resolve_args(frame, stmt)
        try:
            self.engine.execute_instruction(stmt.content, actuals, self.context)
        except DefinitionNotFoundError:
            if self.engine.stop_on_error:
                raise
        return None

    def _exec_call_function(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        actuals = self.resolve_args(frame, stmt)
        try:
            self.engine.execute_function(stmt.content, actuals, self.context, depth=self.depth + 1)
        except DefinitionNotFoundError:
            if self.engine.stop_on_error:
                raise
        return None

    def _exec_loop(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        pos = frame.eip
        pairs = self._loop_pairs(frame.function)
        scratch = frame.loops.get(pos)
        if scratch is None:
            try:
                count = parse_int(self._arg_value(frame, stmt, ARG_COUNT).payload)
            except (BindingError, ValueError) as e:
                self.context.log_error(
                    f"{frame.function.name}[{pos}] LOOP: invalid {ARG_COUNT}, loop skipped: {e}")
                return pairs[pos] + 1
            scratch = frame.args.copy()
            scratch.set_binding(LOOP_INDEX, TaggedValue.of_int(0))
            scratch.set_binding(ARG_COUNT, TaggedValue.of_int(count))
            frame.loops[pos] = scratch

        index = parse_int(scratch.value_of(LOOP_INDEX).payload)
        count = parse_int(scratch.value_of(ARG_COUNT).payload)
        if index < count:
            scratch.set_binding(LOOP_INDEX, TaggedValue.of_int(index + 1))
            return None

        del frame.loops[pos]
        return pairs[pos] + 1

    def _exec_end_loop(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        return self._loop_pairs(frame.function)[frame.eip]

    def _exec_return(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        try:
            value = self.resolve(frame, stmt.content)
        except BindingError as e:
            self.context.log_error(f"{frame.function.name}[{frame.eip}] RETURN: {e}")
            return len(frame.function.stmts)
        if value is None:
            self.context.log_error(
                f"{frame.function.name}[{frame.eip}] RETURN: undefined value {stmt.content!r}")
        elif not value.is_empty():
            self.globals.set_binding(RETURN_VAR, value)
            frame.result = value
        return len(frame.function.stmts)

    def _exec_set_var(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        raw_name = stmt.args.value_of(ARG_VARNAME)
        if raw_name is None or not raw_name.payload:
            raise BindingError(f"Missing argument: {ARG_VARNAME}")
        # 'var:x' and 'str:x' both name the variable x
        varname = raw_name.payload
        op1 = self._arg_value(frame, stmt, ARG_OP1).payload
        value = self._arg_value(frame, stmt, ARG_OPERAND1)

        has_op2 = stmt.args.contains(ARG_OP2)
        if has_op2 != stmt.args.contains(ARG_OPERAND2):
            raise BindingError(f"{ARG_OP2} and {ARG_OPERAND2} must be given together")
        if has_op2:
            op2 = self._arg_value(frame, stmt, ARG_OP2).payload
            value = apply_operator(op2, value, self._arg_value(frame, stmt, ARG_OPERAND2))

        self.assign(frame, varname, op1, value)
        return None

    def assign(self, frame: ExecutionFrame, varname: str, op: str, value: TaggedValue):
        """Apply an assignment operator (':=', '=', '+=', '-=', '*=', '/=')."""
        if op == ASSIGN_GLOBAL:
            self.globals.set_binding(varname, value)
        elif op == ASSIGN_LOCAL:
            frame.locals.set_binding(varname, value)
        elif op in COMPOUND_OPERATORS:
            if frame.locals.contains(varname):
                scope = frame.locals
            elif self.globals.contains(varname):
                scope = self.globals
            else:
                raise BindingError(f"Undefined variable: {varname}")
            current = self.resolve(frame, scope.value_of(varname))
            if current is None:
                raise BindingError(f"Undefined variable: {scope.value_of(varname).payload}")
            scope.set_binding(varname, apply_operator(COMPOUND_OPERATORS[op], current, value))
        else:
            raise OperatorError(f"Unsupported assignment operator: '{op}'")

    def _parse_binding(self, stmt: Statement):
        name, value = split_lr(stmt.content, "=")
        if not name:
            raise BindingError(f"Expected 'name=value', got {stmt.content!r}")
        return name, value

    def _exec_set_local(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        name, value = self._parse_binding(stmt)
        frame.locals.set_binding(name, value)
        return None

    def _exec_set_global(self, frame: ExecutionFrame, stmt: Statement) -> Optional[int]:
        name, value = self._parse_binding(stmt)
        self.globals.set_binding(name, value)
        return None
