#!/usr/bin/env python3
"""
Execution engine tests against in-memory channels.
"""

import io
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi import BFIOError, Engine, HaltReason, parse


class BrokenWriter:
    def write(self, data):
        raise BrokenPipeError(32, 'Broken pipe')

    def flush(self):
        pass


class ZeroWriter(io.BytesIO):
    def write(self, data):
        return 0


class BrokenReader:
    def read(self, n=-1):
        raise OSError(5, 'Input/output error')


def make_engine(source, input_data=b""):
    stdout = io.BytesIO()
    engine = Engine(parse(source), io.BytesIO(input_data), stdout)
    return engine, stdout


def test_empty_program_halts_immediately():
    engine, stdout = make_engine("only words here")
    assert engine.step() is False
    assert engine.state.halt_reason is HaltReason.END_OF_PROGRAM
    assert engine.state.pc == 0
    assert engine.tape.snapshot() == bytes(1024)
    assert stdout.getvalue() == b""


def test_increment_twice_then_output():
    engine, stdout = make_engine("++.")
    engine.run()
    assert stdout.getvalue() == bytes([2])


def test_echo_one_byte():
    engine, stdout = make_engine(",.", b"A")
    engine.run()
    assert stdout.getvalue() == b"\x41"


def test_wraparound():
    engine, stdout = make_engine("-.+.")
    engine.run()
    assert stdout.getvalue() == bytes([255, 0])


def test_decrement_loop_lands_after_close():
    engine, _ = make_engine("+[-]")
    assert engine.step()
    assert engine.step()
    assert engine.state.pc == 2
    assert engine.step()
    assert engine.cell == 0
    assert engine.step()
    assert engine.state.pc == 4
    assert engine.step() is False
    assert engine.state.halt_reason is HaltReason.END_OF_PROGRAM


def test_loop_on_zero_cell_is_skipped():
    engine, _ = make_engine("[+++]")
    assert engine.step()
    assert engine.state.pc == 5
    assert engine.cell == 0
    assert engine.step() is False

    engine, _ = make_engine("[]")
    assert engine.step()
    assert engine.state.pc == 2
    assert engine.step() is False


def test_close_jumps_back_while_nonzero():
    engine, stdout = make_engine("+++[>++<-]>.")
    engine.run()
    assert stdout.getvalue() == bytes([6])


def test_move_left_from_origin_halts_without_error():
    engine, stdout = make_engine("+<+.")
    state = engine.run()
    assert state.halt_reason is HaltReason.BOUNDARY
    assert state.pc == 1
    assert state.pointer == 0
    assert engine.tape[0] == 1
    assert stdout.getvalue() == b""
    assert engine.step() is False
    assert engine.state.pc == 1


def test_move_off_last_cell_grows_one_chunk():
    engine, _ = make_engine(">" * 1023 + "+>+")
    for _ in range(1024):
        assert engine.step()
    assert engine.state.pointer == 1023
    assert len(engine.tape) == 1024
    assert engine.step()
    assert engine.state.pointer == 1024
    assert len(engine.tape) == 2048
    assert engine.tape.snapshot()[1024:] == bytes(1024)
    engine.run()
    assert engine.tape[1023] == 1
    assert engine.tape[1024] == 1
    assert len(engine.tape) == 2048


def test_tape_only_grows_on_right_moves():
    engine, _ = make_engine("+" * 300 + "-" * 10 + "<")
    engine.run()
    assert len(engine.tape) == 1024


def test_input_at_eof_leaves_cell_unchanged():
    engine, stdout = make_engine("+++++,.,.", b"")
    state = engine.run()
    assert stdout.getvalue() == bytes([5, 5])
    assert state.halt_reason is HaltReason.END_OF_PROGRAM


def test_input_reads_one_byte_at_a_time():
    engine, stdout = make_engine(",.,.,.,.", b"hi")
    engine.run()
    assert stdout.getvalue() == b"hiii"


def test_write_failure_is_an_io_error():
    engine = Engine(parse("+.+."), io.BytesIO(), BrokenWriter())
    with pytest.raises(BFIOError) as exc:
        engine.run()
    err = exc.value
    assert err.instruction == '.'
    assert err.pc == 1
    assert isinstance(err.__cause__, BrokenPipeError)
    assert "Hint:" in str(err)
    assert engine.state.pc == 1
    assert not engine.state.halted


def test_zero_length_write_is_an_io_error():
    engine = Engine(parse("."), io.BytesIO(), ZeroWriter())
    with pytest.raises(BFIOError):
        engine.step()


def test_read_failure_is_an_io_error():
    engine = Engine(parse("+,"), BrokenReader(), io.BytesIO())
    with pytest.raises(BFIOError) as exc:
        engine.run()
    assert exc.value.instruction == ','
    assert engine.tape[0] == 1


def test_partial_output_is_kept():
    class FailSecond(io.BytesIO):
        def write(self, data):
            if self.tell() >= 1:
                raise OSError(28, 'No space left on device')
            return super().write(data)

    stdout = FailSecond()
    engine = Engine(parse("+.+."), io.BytesIO(), stdout)
    with pytest.raises(BFIOError):
        engine.run()
    assert stdout.getvalue() == bytes([1])


def test_hello_world():
    source = (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
        ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    )
    engine, stdout = make_engine(source)
    engine.run()
    assert stdout.getvalue() == b"Hello World!\n"


def test_steps_are_counted():
    engine, _ = make_engine("+[-]")
    state = engine.run()
    assert state.steps == 4


def test_write_that_returns_none_is_an_io_error():
    class NonBlockingWriter(io.BytesIO):
        def write(self, data):
            return None

    engine = Engine(parse("."), io.BytesIO(), NonBlockingWriter())
    with pytest.raises(BFIOError):
        engine.step()


def test_closed_standard_input_only_fails_when_read(monkeypatch):
    monkeypatch.setattr(sys, 'stdin', None)
    engine = Engine(parse("+.+"), stdout=io.BytesIO())
    assert engine.run().halt_reason is HaltReason.END_OF_PROGRAM

    engine = Engine(parse("+,"), stdout=io.BytesIO())
    with pytest.raises(BFIOError) as exc:
        engine.run()
    assert exc.value.instruction == ','
    assert "standard input is closed" in str(exc.value)


def test_closed_standard_output_only_fails_when_written(monkeypatch):
    monkeypatch.setattr(sys, 'stdout', None)
    engine = Engine(parse("+<"), io.BytesIO())
    assert engine.run().halt_reason is HaltReason.BOUNDARY

    engine = Engine(parse("+."), io.BytesIO())
    with pytest.raises(BFIOError) as exc:
        engine.run()
    assert "standard output is closed" in str(exc.value)
