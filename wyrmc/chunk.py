"""Bytecode chunks, opcodes and constant values."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Opcode(enum.IntEnum):
    CONSTANT = 0
    POP = enum.auto()
    GET_LOCAL = enum.auto()
    ADD = enum.auto()
    SUBTRACT = enum.auto()
    EQUAL = enum.auto()
    LESS = enum.auto()
    LESS_EQ = enum.auto()
    GREATER = enum.auto()
    GREATER_EQ = enum.auto()
    JUMP = enum.auto()
    JUMP_IF_ZERO = enum.auto()
    CALL = enum.auto()
    RETURN = enum.auto()


def to_i32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


@dataclass
class Chunk:
    """A sequence of bytecode with its constant pool of 32-bit integers."""

    code: bytearray = field(default_factory=bytearray)
    constants: list[int] = field(default_factory=list)

    def write(self, byte: int) -> None:
        """Append one byte; values outside 0..255 raise ValueError."""
        self.code.append(int(byte))

    def add_constant(self, value: int) -> int:
        """Store a constant and return its one-byte index."""
        self.constants.append(to_i32(value))
        return (len(self.constants) - 1) & 0xFF

    def __len__(self) -> int:
        return len(self.code)


def format_value(value: int) -> str:
    return str(value)