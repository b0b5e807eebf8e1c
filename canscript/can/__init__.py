"""CAN frame encoding for instruction calls."""

from .encoder import InstructionEncoder, Frame, pack_field, FIELD_FORMATS, DEFAULT_FRAME_SIZE

__all__ = ['InstructionEncoder', 'Frame', 'pack_field', 'FIELD_FORMATS', 'DEFAULT_FRAME_SIZE']
