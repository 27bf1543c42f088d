import io

import pytest

from wyrmc.chunk import Chunk, Opcode
from wyrmc.vm import STACK_MAX, VM, InterpretResult, VMStackError


def make_chunk(*code, constants=()):
    chunk = Chunk()
    for value in constants:
        chunk.add_constant(value)
    for byte in code:
        chunk.write(byte)
    return chunk


def run(chunk):
    out = io.StringIO()
    result = VM(out).evaluate(chunk)
    return result, out.getvalue()


def test_return_prints_constant():
    result, out = run(make_chunk(Opcode.CONSTANT, 0, Opcode.RETURN, constants=[42]))
    assert result is InterpretResult.OK
    assert out == "42\n"


def test_return_prints_to_stdout_by_default(capsys):
    VM().evaluate(make_chunk(Opcode.CONSTANT, 0, Opcode.RETURN, constants=[-3]))
    assert capsys.readouterr().out == "-3\n"


def test_subtract_uses_top_as_left_operand():
    chunk = make_chunk(
        Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.SUBTRACT, Opcode.RETURN, constants=[3, 10]
    )
    assert run(chunk) == (InterpretResult.OK, "7\n")


def test_add():
    chunk = make_chunk(
        Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.ADD, Opcode.RETURN, constants=[4, 5]
    )
    assert run(chunk)[1] == "9\n"


def test_less_comparison():
    chunk = make_chunk(
        Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.LESS, Opcode.RETURN, constants=[2, 1]
    )
    assert run(chunk)[1] == "1\n"


def test_equal_and_greater_are_consistent():
    def compare(op, a, b):
        chunk = make_chunk(Opcode.CONSTANT, 1, Opcode.CONSTANT, 0, op, Opcode.RETURN, constants=[a, b])
        return run(chunk)[1]

    assert compare(Opcode.EQUAL, 5, 5) == compare(Opcode.GREATER_EQ, 5, 5)
    assert compare(Opcode.GREATER, 5, 5) == compare(Opcode.LESS, 5, 5)
    assert compare(Opcode.LESS_EQ, 2, 9) != compare(Opcode.GREATER, 2, 9)


def test_jump_skips_code():
    chunk = make_chunk(
        Opcode.JUMP, 0, 2, Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.RETURN, constants=[11, 22]
    )
    assert run(chunk)[1] == "22\n"


def test_call_jumps_forward():
    chunk = make_chunk(
        Opcode.CALL, 0, 2, Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.RETURN, constants=[11, 22]
    )
    assert run(chunk)[1] == "22\n"


@pytest.mark.parametrize(("condition", "expected"), [(0, "22\n"), (1, "11\n")])
def test_jump_if_zero(condition, expected):
    chunk = make_chunk(
        Opcode.CONSTANT, 2,
        Opcode.JUMP_IF_ZERO, 0, 3,
        Opcode.CONSTANT, 0, Opcode.RETURN,
        Opcode.CONSTANT, 1, Opcode.RETURN,
        constants=[11, 22, condition],
    )
    assert run(chunk)[1] == expected


def test_get_local_reads_stack_slot():
    chunk = make_chunk(
        Opcode.CONSTANT, 0, Opcode.CONSTANT, 1, Opcode.GET_LOCAL, 0, Opcode.RETURN, constants=[8, 9]
    )
    assert run(chunk)[1] == "8\n"


def test_get_local_out_of_range():
    with pytest.raises(VMStackError):
        run(make_chunk(Opcode.GET_LOCAL, 4))


def test_unknown_instruction():
    result, out = run(make_chunk(255))
    assert result is InterpretResult.RUNTIME_ERROR
    assert out == "Unknown instruction 255\n"


def test_running_off_the_end_is_ok():
    vm = VM(io.StringIO())
    assert vm.evaluate(make_chunk(Opcode.CONSTANT, 0, constants=[5])) is InterpretResult.OK
    assert vm.stack == [5]


def test_push_pop_round_trip():
    vm = VM()
    for value in (1, 2, 3):
        vm.push(value)
    assert [vm.pop(), vm.pop(), vm.pop()] == [3, 2, 1]


def test_pop_empty_raises():
    with pytest.raises(VMStackError):
        VM().pop()


def test_stack_overflow():
    vm = VM()
    for value in range(STACK_MAX):
        vm.push(value)
    assert len(vm.stack) == STACK_MAX
    with pytest.raises(VMStackError):
        vm.push(0)