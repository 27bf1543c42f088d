"""Stack-based interpreter for bytecode chunks."""

from __future__ import annotations

import enum
import operator
import sys
from typing import TextIO

from .chunk import Chunk, Opcode, format_value, to_i32

STACK_MAX = 256


class InterpretResult(enum.Enum):
    OK = enum.auto()
    COMPILE_ERROR = enum.auto()
    RUNTIME_ERROR = enum.auto()


class VMStackError(RuntimeError):
    """Raised on stack overflow, underflow or an invalid local slot."""


_BINARY = {
    Opcode.ADD: operator.add,
    Opcode.SUBTRACT: operator.sub,
    Opcode.EQUAL: operator.eq,
    Opcode.LESS: operator.lt,
    Opcode.LESS_EQ: operator.le,
    Opcode.GREATER: operator.gt,
    Opcode.GREATER_EQ: operator.ge,
}


class VM:
    """Executes chunks; the value returned by OP_RETURN is written to ``output``."""

    def __init__(self, output: TextIO | None = None) -> None:
        self.stack: list[int] = []
        self.output = output

    def push(self, value: int) -> None:
        if len(self.stack) >= STACK_MAX:
            raise VMStackError("stack overflow")
        self.stack.append(value)

    def pop(self) -> int:
        if not self.stack:
            raise VMStackError("stack underflow")
        return self.stack.pop()

    def _write(self, text: str) -> None:
        (self.output or sys.stdout).write(text)

    def evaluate(self, chunk: Chunk) -> InterpretResult:
        """Run ``chunk`` from its first byte until it returns or runs off the end.

        Jump and call instructions carry a big-endian 16-bit forward offset.
        """
        code = chunk.code
        ip = 0

        def read_byte() -> int:
            nonlocal ip
            if ip >= len(code):
                raise ValueError(f"truncated instruction at offset {ip}")
            byte = code[ip]
            ip += 1
            return byte

        def read_short() -> int:
            high = read_byte()
            return (high << 8) | read_byte()

        while ip < len(code):
            instruction = read_byte()
            if instruction == Opcode.CONSTANT:
                self.push(chunk.constants[read_byte()])
            elif instruction == Opcode.POP:
                self.pop()
            elif instruction == Opcode.GET_LOCAL:
                slot = read_byte()
                if slot >= len(self.stack):
                    raise VMStackError(f"local slot {slot} out of range")
                self.push(self.stack[slot])
            elif instruction in _BINARY:
                left = self.pop()
                right = self.pop()
                self.push(to_i32(int(_BINARY[Opcode(instruction)](left, right))))
            elif instruction in (Opcode.JUMP, Opcode.CALL):
                offset = read_short()
                ip += offset
            elif instruction == Opcode.JUMP_IF_ZERO:
                condition = self.pop()
                offset = read_short()
                if condition == 0:
                    ip += offset
            elif instruction == Opcode.RETURN:
                self._write(format_value(self.pop()) + "\n")
                return InterpretResult.OK
            else:
                self._write(f"Unknown instruction {instruction}\n")
                return InterpretResult.RUNTIME_ERROR
        return InterpretResult.OK