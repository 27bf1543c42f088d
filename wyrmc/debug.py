"""Human-readable disassembly of bytecode chunks."""

from __future__ import annotations

from .chunk import Chunk, Opcode, format_value

_SIMPLE = {
    Opcode.POP: "OP_POP",
    Opcode.ADD: "OP_ADD",
    Opcode.SUBTRACT: "OP_SUBTRACT",
    Opcode.EQUAL: "OP_EQUAL",
    Opcode.RETURN: "OP_RETURN",
}

_JUMPS = {
    Opcode.JUMP: "OP_JUMP",
    Opcode.JUMP_IF_ZERO: "OP_JUMP_IF_ZERO",
    Opcode.CALL: "OP_CALL",
}


def disassemble_chunk(chunk: Chunk, name: str) -> str:
    """Return the listing of every instruction in ``chunk`` under a header."""
    lines = [f" == {name} ==\n"]
    offset = 0
    while offset < len(chunk):
        text, offset = disassemble_instruction(chunk, offset)
        lines.append(text)
    return "".join(lines)


def disassemble_instruction(chunk: Chunk, offset: int) -> tuple[str, int]:
    """Return the listing line for the instruction at ``offset`` and the next offset."""
    code = chunk.code

    def operand(index: int) -> int:
        if offset + index >= len(code):
            raise ValueError(f"truncated instruction at offset {offset}")
        return code[offset + index]

    prefix = f"{offset:04d} "
    instruction = code[offset]

    if instruction == Opcode.CONSTANT:
        index = operand(1)
        value = format_value(chunk.constants[index])
        return f"{prefix}{'OP_CONSTANT':<16} {index:4d} '{value}'\n", offset + 2
    if instruction == Opcode.GET_LOCAL:
        return f"{prefix}{'OP_GET_LOCAL':<16} {operand(1):4d}\n", offset + 2
    if instruction in _SIMPLE:
        return f"{prefix}{_SIMPLE[Opcode(instruction)]}\n", offset + 1
    if instruction in _JUMPS:
        jump = (operand(1) << 8) | operand(2)
        target = offset + 3 + jump
        return f"{prefix}{_JUMPS[Opcode(instruction)]:<16} {offset:4d} -> {target}\n", offset + 3
    return f"{prefix}Unknown opcode 0x{instruction:x}\n", offset + 1