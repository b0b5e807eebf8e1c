"""
Exception hierarchy for the script engine.

Lookup and binding errors are recoverable: they are logged and the host
(or the interpreter) decides whether to go on. Structural and encoding
errors mean the program itself is malformed and always propagate.
"""


class EngineError(Exception):
    """Base exception for engine errors."""
    pass


class DefinitionNotFoundError(EngineError, LookupError):
    """No function or instruction registered under the given name."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"No such {kind}: {name}")
        self.kind = kind
        self.name = name


class BindingError(EngineError):
    """A statement could not bind or compute a variable."""
    pass


class OperatorError(BindingError):
    """Unsupported operator or operand types for an operator."""
    pass


class IndirectionCycleError(BindingError):
    """A chain of var: references leads back to itself."""

    def __init__(self, chain):
        super().__init__("Cyclic variable reference: " + " -> ".join(chain))
        self.chain = list(chain)


class StructuralError(EngineError):
    """Statement list is not well formed (e.g. unpaired loop)."""

    def __init__(self, message: str, function: str = "", position: int = -1):
        super().__init__(message)
        self.function = function
        self.position = position


class EncodingError(EngineError):
    """Instruction arguments cannot be packed into a frame."""
    pass
