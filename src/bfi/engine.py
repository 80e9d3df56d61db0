from __future__ import annotations

import logging
import sys
from typing import BinaryIO, Optional

from .errors import make_io_error
from .lexer import Instruction
from .parser import Program
from .state import ExecutionState, HaltReason
from .tape import Tape

logger = logging.getLogger(__name__)


def _std_buffer(stream) -> Optional[BinaryIO]:
    # sys.stdin/sys.stdout are None when the process starts with them closed
    return getattr(stream, 'buffer', None)


class Engine:
    """
    Executes a Program one instruction at a time against a fresh Tape.

    ``stdin`` and ``stdout`` are binary streams; ``None`` means the process's
    standard streams. Only "." and "," touch them.
    """

    def __init__(
        self,
        program: Program,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        *,
        flush_output: bool = True,
    ) -> None:
        self.program = program
        self.stdin = stdin
        self.stdout = stdout
        self.flush_output = flush_output
        self.tape = Tape()
        self.state = ExecutionState()

    @property
    def cell(self) -> int:
        return self.tape[self.state.pointer]

    def step(self) -> bool:
        """
        Execute the instruction at the program counter.

        Returns:
            True if the program can continue, False once it has halted, either
            by running off the end or by moving left of cell 0.

        Raises:
            BFIOError: if writing output or reading input fails. End of input
                is not a failure; the cell is left as it was.
        """
        state = self.state
        if state.halted:
            return False
        if state.pc >= len(self.program):
            self._halt(HaltReason.END_OF_PROGRAM)
            return False

        op = self.program.instructions[state.pc]
        if op is Instruction.MOVE_RIGHT:
            if state.pointer + 1 == len(self.tape):
                self.tape.grow()
                logger.debug("tape grown to %d cells", len(self.tape))
            state.pointer += 1
        elif op is Instruction.MOVE_LEFT:
            if state.pointer == 0:
                self._halt(HaltReason.BOUNDARY)
                return False
            state.pointer -= 1
        elif op is Instruction.INCREMENT:
            self.tape.increment(state.pointer)
        elif op is Instruction.DECREMENT:
            self.tape.decrement(state.pointer)
        elif op is Instruction.OUTPUT:
            self._write(self.tape[state.pointer])
        elif op is Instruction.INPUT:
            value = self._read()
            if value is not None:
                self.tape[state.pointer] = value
        elif op is Instruction.LOOP_OPEN:
            if self.tape[state.pointer] == 0:
                state.pc = self.program.jumps[state.pc]
        elif op is Instruction.LOOP_CLOSE:
            if self.tape[state.pointer] != 0:
                state.pc = self.program.jumps[state.pc]

        state.pc += 1
        state.steps += 1
        return True

    def run(self) -> ExecutionState:
        """Step until the program halts. I/O faults propagate unchanged."""
        while self.step():
            pass
        return self.state

    def _halt(self, reason: HaltReason) -> None:
        self.state.halt_reason = reason
        logger.debug(
            "halted (%s) after %d steps, pc=%d pointer=%d",
            reason.value, self.state.steps, self.state.pc, self.state.pointer,
        )

    def _write(self, value: int) -> None:
        stdout = self.stdout if self.stdout is not None else _std_buffer(sys.stdout)
        if stdout is None:
            raise make_io_error(message="write failed: standard output is closed", instruction='.', pc=self.state.pc)
        try:
            written = stdout.write(bytes((value,)))
            if not written:
                raise OSError('failed to write whole buffer')
            if self.flush_output:
                stdout.flush()
        except (OSError, ValueError) as exc:
            raise make_io_error(message=f"write failed: {exc}", instruction='.', pc=self.state.pc) from exc

    def _read(self) -> Optional[int]:
        stdin = self.stdin if self.stdin is not None else _std_buffer(sys.stdin)
        if stdin is None:
            raise make_io_error(message="read failed: standard input is closed", instruction=',', pc=self.state.pc)
        try:
            data = stdin.read(1)
        except (OSError, ValueError) as exc:
            raise make_io_error(message=f"read failed: {exc}", instruction=',', pc=self.state.pc) from exc
        if not data:
            return None
        return data[0]
