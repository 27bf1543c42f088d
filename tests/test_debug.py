import pytest

from wyrmc.chunk import Chunk, Opcode
from wyrmc.debug import disassemble_chunk, disassemble_instruction


def make_chunk(*code, constants=()):
    chunk = Chunk()
    for value in constants:
        chunk.add_constant(value)
    for byte in code:
        chunk.write(byte)
    return chunk


def test_empty_chunk_has_only_header():
    assert disassemble_chunk(Chunk(), "Generated Bytecode") == " == Generated Bytecode ==\n"


def test_simple_instruction():
    text, nxt = disassemble_instruction(make_chunk(Opcode.RETURN), 0)
    assert text.startswith("0000 ")
    assert "OP_RETURN" in text
    assert nxt == 1


def test_constant_instruction_shows_value():
    chunk = make_chunk(Opcode.CONSTANT, 0, constants=[42])
    text, nxt = disassemble_instruction(chunk, 0)
    assert "OP_CONSTANT" in text
    assert "'42'" in text
    assert nxt == 2


def test_get_local_instruction():
    text, nxt = disassemble_instruction(make_chunk(Opcode.GET_LOCAL, 3), 0)
    assert "OP_GET_LOCAL" in text
    assert text.rstrip().endswith("3")
    assert nxt == 2


@pytest.mark.parametrize(
    ("opcode", "name"),
    [(Opcode.JUMP, "OP_JUMP"), (Opcode.JUMP_IF_ZERO, "OP_JUMP_IF_ZERO"), (Opcode.CALL, "OP_CALL")],
)
def test_jump_instructions(opcode, name):
    text, nxt = disassemble_instruction(make_chunk(opcode, 0, 5), 0)
    assert name in text
    assert "-> 8" in text
    assert nxt == 3


def test_unlisted_opcode_is_unknown():
    text, nxt = disassemble_instruction(make_chunk(Opcode.LESS), 0)
    assert "Unknown opcode" in text
    assert nxt == 1


def test_full_listing_has_one_line_per_instruction():
    chunk = make_chunk(Opcode.CONSTANT, 0, Opcode.POP, Opcode.RETURN, constants=[1])
    lines = disassemble_chunk(chunk, "main").splitlines()
    assert len(lines) == 4
    assert lines[2].startswith("0002 ")
    assert "OP_POP" in lines[2]


def test_truncated_operand_raises():
    with pytest.raises(ValueError):
        disassemble_instruction(make_chunk(Opcode.JUMP), 0)