"""
Tagged values.

Every literal, variable content and expression in a program is a tagged
value written as ``tag:payload`` at the API boundary, e.g. ``int:42``,
``str:hello``, ``var:name`` or ``hex:FF 1A 00``. Text without a tag is
an untagged literal. Inside the engine values are TaggedValue objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..utils import split_lr


class ValueTag(Enum):
    """Known value tags."""
    STR = "str"
    INT = "int"
    FLOAT = "float"
    VAR = "var"     # reference to another variable
    HEX = "hex"     # space separated hex bytes


@dataclass(frozen=True)
class TaggedValue:
    """A payload string plus the tag selecting its interpretation."""
    tag: str
    payload: str

    @classmethod
    def parse(cls, text: str) -> 'TaggedValue':
        """Parse ``tag:payload`` text. Text without ':' is untagged."""
        tag, payload = split_lr(text, ":")
        return cls(tag, payload)

    @classmethod
    def coerce(cls, value: Union['TaggedValue', str, int, float]) -> 'TaggedValue':
        """Accept a TaggedValue, its text form, or a plain Python number."""
        if isinstance(value, TaggedValue):
            return value
        if isinstance(value, bool):
            raise TypeError(f"Cannot tag a bool: {value!r}")
        if isinstance(value, int):
            return cls.of_int(value)
        if isinstance(value, float):
            return cls.of_float(value)
        return cls.parse(value)

    @classmethod
    def of_int(cls, value: int) -> 'TaggedValue':
        return cls(ValueTag.INT.value, str(value))

    @classmethod
    def of_float(cls, value: float) -> 'TaggedValue':
        return cls(ValueTag.FLOAT.value, repr(value))

    @classmethod
    def of_str(cls, value: str) -> 'TaggedValue':
        return cls(ValueTag.STR.value, value)

    @classmethod
    def var(cls, name: str) -> 'TaggedValue':
        return cls(ValueTag.VAR.value, name)

    @property
    def kind(self) -> Optional[ValueTag]:
        """The known tag, or None for untagged/unknown tags."""
        try:
            return ValueTag(self.tag)
        except ValueError:
            return None

    @property
    def is_var(self) -> bool:
        return self.tag == ValueTag.VAR.value

    def is_empty(self) -> bool:
        return not self.tag and not self.payload

    def as_int(self) -> int:
        """Payload as an integer. Hex payloads are read big-endian."""
        if self.tag == ValueTag.HEX.value:
            return int.from_bytes(self.as_bytes(), 'big')
        return parse_int(self.payload)

    def as_float(self) -> float:
        return float(self.payload)

    def as_bytes(self) -> bytes:
        """Payload of a hex value, e.g. 'FF 1A 00' -> b'\\xff\\x1a\\x00'."""
        return bytes.fromhex(self.payload)

    def __str__(self):
        if not self.tag:
            return self.payload
        return f"{self.tag}:{self.payload}"


def parse_int(text: str) -> int:
    """Parse decimal text, or 0x/0o/0b prefixed text."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return int(text, 0)
