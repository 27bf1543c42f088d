import pytest

from wyrmc.chunk import Chunk, Opcode, format_value, to_i32


def test_write_appends_bytes():
    chunk = Chunk()
    chunk.write(Opcode.CONSTANT)
    chunk.write(7)
    chunk.write(Opcode.RETURN)
    assert len(chunk) == 3
    assert list(chunk.code) == [Opcode.CONSTANT, 7, Opcode.RETURN]


def test_write_rejects_non_byte():
    chunk = Chunk()
    with pytest.raises(ValueError):
        chunk.write(256)
    with pytest.raises(ValueError):
        chunk.write(-1)


def test_constant_indices_are_sequential():
    chunk = Chunk()
    indices = [chunk.add_constant(v) for v in (10, 20, 30, 40)]
    assert indices == list(range(4))
    assert chunk.constants == [10, 20, 30, 40]


def test_constant_index_wraps_to_a_byte():
    chunk = Chunk()
    for value in range(256):
        chunk.add_constant(value)
    assert chunk.add_constant(999) == 0
    assert chunk.constants[-1] == 999


def test_constants_are_32_bit():
    chunk = Chunk()
    chunk.add_constant(2**31)
    assert chunk.constants[0] == -(2**31)
    assert to_i32(-5) == -5


def test_opcode_order_starts_with_constant():
    assert Opcode(0) is Opcode.CONSTANT
    assert list(Opcode)[-1] is Opcode.RETURN
    assert [op.name for op in Opcode][:3] == ["CONSTANT", "POP", "GET_LOCAL"]


def test_format_value():
    assert format_value(-7) == "-7"
    assert format_value(42) == "42"