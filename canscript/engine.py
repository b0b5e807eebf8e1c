"""
Script engine.

The Engine owns the instruction and function registries and dispatches
calls by name. A Context carries the global variable store shared by all
calls of one host session, collects log messages and receives the
encoded instruction frames.
"""

import sys
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .can import Frame, InstructionEncoder, DEFAULT_FRAME_SIZE
from .errors import DefinitionNotFoundError, EncodingError, EngineError, StructuralError
from .interpreter import StatementInterpreter
from .program import FunctionDefinition, InstructionDefinition
from .values import TaggedValue, VarDef, VariableStore

SEVERITIES = ("info", "warning", "error", "fatal")

# Context keeps only the most recent frames and messages
DEFAULT_HISTORY = 1000


class Context:
    """
    Execution context: global variables, log messages and emitted frames.

    Args:
        verbose: Print info and warning messages too
        frame_sink: Called with every emitted Frame
        max_frames: Emitted frames kept in self.frames (None: unbounded)
        max_messages: Log messages kept in self.messages (None: unbounded)
    """

    def __init__(self, verbose: bool = False,
                 frame_sink: Optional[Callable[[Frame], None]] = None,
                 max_frames: Optional[int] = DEFAULT_HISTORY,
                 max_messages: Optional[int] = DEFAULT_HISTORY):
        self.verbose = verbose
        self.frame_sink = frame_sink
        self.globals = VariableStore()
        self.frames: Deque[Frame] = deque(maxlen=max_frames)
        self.messages: Deque[Tuple[str, str]] = deque(maxlen=max_messages)  # (severity, text)

    def _log(self, severity: str, text: str):
        self.messages.append((severity, text))
        if self.verbose or severity in ("error", "fatal"):
            print(f"[{severity}] {text}", file=sys.stderr)

    def log_info(self, text: str):
        self._log("info", text)

    def log_warning(self, text: str):
        self._log("warning", text)

    def log_error(self, text: str):
        self._log("error", text)

    def log_fatal(self, text: str):
        self._log("fatal", text)

    def get_messages(self, severity: Optional[str] = None) -> List[str]:
        """Logged texts, optionally only those of one severity."""
        if severity is not None and severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity}")
        return [text for sev, text in self.messages if severity is None or sev == severity]

    def clear(self):
        """Forget retained frames and messages. Globals are kept."""
        self.frames.clear()
        self.messages.clear()

    def emit(self, frame: Frame):
        self.frames.append(frame)
        if self.frame_sink is not None:
            self.frame_sink(frame)


class Engine:
    """Registries of instructions and functions, and the call entry points."""

    def __init__(self, verbose: bool = False, frame_size: Optional[int] = DEFAULT_FRAME_SIZE,
                 stop_on_error: bool = False, max_call_depth: Optional[int] = None):
        self.verbose = verbose
        self.stop_on_error = stop_on_error  # nested lookup errors abort the caller
        self.max_call_depth = max_call_depth  # None: bounded by the Python stack only
        self.encoder = InstructionEncoder(frame_size)
        self.instructions: Dict[str, InstructionDefinition] = {}
        self.functions: Dict[str, FunctionDefinition] = {}

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[canscript] {message}", file=sys.stderr)

    def fatal(self, message: str):
        """Print a fatal message; always shown."""
        print(f"[fatal] {message}", file=sys.stderr)

    def add_instruction(self, definition: InstructionDefinition):
        self.instructions[definition.name] = definition

    def add_function(self, definition: FunctionDefinition):
        """
        Register a function.

        Raises:
            StructuralError: if the loop statements are not properly paired
        """
        try:
            definition.validate()
        except StructuralError as e:
            self.fatal(str(e))
            raise
        self.functions[definition.name] = definition

    def find_instruction(self, name: str) -> Optional[InstructionDefinition]:
        return self.instructions.get(name)

    def find_function(self, name: str) -> Optional[FunctionDefinition]:
        return self.functions.get(name)

    def execute_function(self, name: str, args: Optional[VariableStore] = None,
                         context: Optional[Context] = None,
                         depth: int = 0) -> Optional[TaggedValue]:
        """
        Execute a registered function.

        Args:
            name: Function name (case sensitive)
            args: Call arguments
            context: Shared context; a fresh one is used if None
            depth: Call nesting depth, maintained by nested CALL_FUNCTION

        Returns:
            The returned value (also left in the global '$return'), or None

        Raises:
            DefinitionNotFoundError: no function with this name
            StructuralError, EncodingError: malformed program
        """
        context = context if context is not None else Context(self.verbose)
        definition = self.find_function(name)
        if definition is None:
            error = DefinitionNotFoundError("function", name)
            context.log_error(str(error))
            raise error
        if self.max_call_depth is not None and depth > self.max_call_depth:
            message = f"Call depth {depth} exceeds {self.max_call_depth} in function '{name}'"
            context.log_fatal(message)
            raise EngineError(message)

        self.log(f"exec function {name}")
        interpreter = StatementInterpreter(self, context, depth)
        return interpreter.execute(definition, args if args is not None else VariableStore())

    execute = execute_function

    def execute_instruction(self, name: str, args: Optional[VariableStore] = None,
                            context: Optional[Context] = None) -> Frame:
        """
        Encode a registered instruction and emit its frame to the context.

        Raises:
            DefinitionNotFoundError: no instruction with this name
            EncodingError: arguments do not fit the declared layout
        """
        context = context if context is not None else Context(self.verbose)
        definition = self.find_instruction(name)
        if definition is None:
            error = DefinitionNotFoundError("instruction", name)
            context.log_error(str(error))
            raise error

        try:
            frame = self.encoder.encode(definition, args if args is not None else VariableStore())
        except EncodingError as e:
            context.log_fatal(str(e))
            raise

        context.log_info(f"instruction data: {frame}")
        context.emit(frame)
        return frame


def parse_field(text: str) -> Tuple[VarDef, str]:
    """Parse a command-line field 'name:type=value'."""
    decl, value = text.split("=", 1) if "=" in text else (text, "")
    if ":" not in decl:
        raise ValueError(f"Expected name:type=value, got {text!r}")
    name, typ = decl.split(":", 1)
    return VarDef(name, typ), value


def main(argv: Optional[List[str]] = None):
    """Command-line interface: encode one instruction frame."""
    import argparse

    parser = argparse.ArgumentParser(
        description='canscript - Encode an instruction into a CAN frame'
    )
    parser.add_argument('fields', nargs='+', metavar='name:type=value',
                        help='Frame fields in wire order, e.g. speed:u16=1200')
    parser.add_argument('--id', type=int, required=True, dest='can_id',
                        help='Numeric CAN id of the instruction')
    parser.add_argument('--name', default='instruction',
                        help='Instruction name (default: instruction)')
    parser.add_argument('--frame-size', type=int, default=DEFAULT_FRAME_SIZE,
                        help='Required frame size in bytes, 0 to disable (default: 8)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    definition = InstructionDefinition(args.name, args.can_id)
    values = VariableStore()
    try:
        for text in args.fields:
            vardef, value = parse_field(text)
            definition.args.add(vardef)
            values.set_binding(vardef.name, value)
    except ValueError as e:
        parser.error(str(e))

    engine = Engine(verbose=args.verbose, frame_size=args.frame_size or None)
    engine.add_instruction(definition)
    try:
        frame = engine.execute_instruction(definition.name, values, Context(args.verbose))
    except EngineError:
        sys.exit(1)

    print(frame.hex())
    sys.exit(0)


if __name__ == '__main__':
    main()
