"""Instruction definitions: the binary layout of one CAN frame."""

from dataclasses import dataclass, field

from ..values import VarDefList


@dataclass
class InstructionDefinition:
    """
    A hardware instruction addressed by a numeric CAN id.

    The declared order and types of args is the wire layout of the frame.
    """
    name: str
    can_id: int
    args: VarDefList = field(default_factory=VarDefList)
    note: str = ""
