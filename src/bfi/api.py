from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .engine import Engine
from .parser import Program, load_file, parse
from .state import ExecutionState, HaltReason


@dataclass(frozen=True)
class RunOptions:
    flush_output: bool = True


@dataclass(frozen=True)
class RunResult:
    output: bytes
    halt_reason: HaltReason
    steps: int
    pointer: int
    tape_size: int


def run_program(program: Program, *, input_data: bytes = b"", options: Optional[RunOptions] = None) -> RunResult:
    opts = RunOptions() if options is None else options
    stdout = io.BytesIO()
    engine = Engine(program, io.BytesIO(input_data), stdout, flush_output=opts.flush_output)
    state = engine.run()
    return RunResult(
        output=stdout.getvalue(),
        halt_reason=state.halt_reason,
        steps=state.steps,
        pointer=state.pointer,
        tape_size=len(engine.tape),
    )


def run_string(
    source: Union[bytes, str],
    *,
    input_data: bytes = b"",
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_program(parse(source), input_data=input_data, options=options)


def run_file(
    path: Union[str, Path],
    *,
    input_data: bytes = b"",
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_program(load_file(path), input_data=input_data, options=options)


def run_stdio(program: Program, *, options: Optional[RunOptions] = None) -> ExecutionState:
    """Run against the process's standard input and output."""
    opts = RunOptions() if options is None else options
    return Engine(program, flush_output=opts.flush_output).run()
