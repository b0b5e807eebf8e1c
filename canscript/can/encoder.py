"""
Instruction encoder - packs instruction arguments into a CAN frame.

Arguments are written in declaration order, multi-byte fields in
big-endian byte order. The encoded frame must have the configured
frame size (8 bytes for classic CAN data frames).
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import struct

from ..errors import EncodingError, IndirectionCycleError
from ..program import InstructionDefinition
from ..values import TaggedValue, VariableStore, ValueTag

DEFAULT_FRAME_SIZE = 8

# type name -> (struct format, signed)
FIELD_FORMATS: Dict[str, Tuple[str, bool]] = {
    'byte': ('>B', False),
    'u8': ('>B', False),
    'i8': ('>B', True),
    'u16': ('>H', False),
    'i16': ('>H', True),
    'u32': ('>I', False),
    'i32': ('>I', True),
}


@dataclass(frozen=True)
class Frame:
    """One encoded instruction ready for transmission."""
    can_id: int
    data: bytes
    name: str = ""

    def hex(self) -> str:
        return " ".join(f"{b:02x}" for b in self.data)

    def __str__(self):
        return f"{self.name or 'frame'} id={self.can_id} [{self.hex()}]"


def pack_field(typ: str, value: TaggedValue) -> bytes:
    """
    Pack one value as the declared field type.

    Signed types also accept the unsigned range of their width, so an
    i16 field takes any value from -32768 to 65535.
    """
    if typ not in FIELD_FORMATS:
        raise EncodingError(f"Unsupported arg type: {typ}")
    fmt, signed = FIELD_FORMATS[typ]
    bits = struct.calcsize(fmt) * 8

    if value.tag in (ValueTag.FLOAT.value, ValueTag.STR.value):
        raise EncodingError(f"Invalid {typ} value: {value}")
    try:
        number = value.as_int()
    except ValueError:
        raise EncodingError(f"Invalid {typ} value: {value}")

    low = -(1 << (bits - 1)) if signed else 0
    high = (1 << bits) - 1
    if not low <= number <= high:
        raise EncodingError(f"Value {number} out of range for {typ}")
    if number < 0:
        number += 1 << bits  # two's complement
    return struct.pack(fmt, number)


class InstructionEncoder:
    """Encodes InstructionDefinitions into Frames."""

    def __init__(self, frame_size: Optional[int] = DEFAULT_FRAME_SIZE):
        self.frame_size = frame_size

    def resolve_arg(self, vardef, actuals: VariableStore) -> TaggedValue:
        """Bound value of one formal argument, else its default."""
        if actuals.contains(vardef.name):
            try:
                value = actuals.eval_var(vardef.name)
            except IndirectionCycleError as e:
                raise EncodingError(f"Arg {vardef.name}: {e}") from e
            if value is None:
                raise EncodingError(
                    f"Arg {vardef.name} refers to unbound {actuals.value_of(vardef.name)}")
            return value
        if not vardef.default:
            raise EncodingError(f"Require arg: {vardef.name}")
        return TaggedValue.parse(vardef.default)

    def encode(self, definition: InstructionDefinition, actuals: VariableStore) -> Frame:
        """
        Encode one instruction.

        Args:
            definition: Instruction whose args declare the layout
            actuals: Argument values by name

        Returns:
            The encoded Frame

        Raises:
            EncodingError: missing argument, unsupported type, value
                that does not fit, or wrong total frame size.
        """
        data = bytearray()
        for vardef in definition.args:
            value = self.resolve_arg(vardef, actuals)
            try:
                data.extend(pack_field(vardef.type, value))
            except EncodingError as e:
                raise EncodingError(f"{definition.name}.{vardef.name}: {e}") from e

        if self.frame_size is not None and len(data) != self.frame_size:
            raise EncodingError(
                f"{definition.name}: frame is {len(data)} bytes, expected {self.frame_size}")

        return Frame(definition.can_id, bytes(data), definition.name)
