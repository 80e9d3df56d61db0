from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, List, Tuple, Union

from .errors import UnmatchedCloseError, UnmatchedOpenError, make_syntax_error
from .lexer import Instruction, iter_instructions, to_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """
    A parsed program.

    ``instructions`` holds only the eight commands, in source order. ``jumps`` maps
    the index of every "[" to the index of its "]" and back again. ``offsets``
    gives the byte offset in the original source of each instruction.
    """

    instructions: Tuple[Instruction, ...]
    jumps: Dict[int, int] = field(default_factory=dict)
    offsets: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.instructions)

    def __str__(self) -> str:
        return ''.join(op.value for op in self.instructions)


def parse(source: Union[bytes, str]) -> Program:
    """
    Parse source into a Program, resolving every loop in one pass.

    Raises:
        UnmatchedCloseError: on the first "]" that has no open "[" before it
        UnmatchedOpenError: if any "[" is still open at the end; the innermost
            one is reported
    """
    raw = to_bytes(source)
    instructions: List[Instruction] = []
    offsets: List[int] = []
    jumps: Dict[int, int] = {}
    open_stack: List[int] = []

    for pos, (offset, op) in enumerate(iter_instructions(raw)):
        instructions.append(op)
        offsets.append(offset)
        if op is Instruction.LOOP_OPEN:
            open_stack.append(pos)
        elif op is Instruction.LOOP_CLOSE:
            if not open_stack:
                raise make_syntax_error(
                    UnmatchedCloseError,
                    message='unmatched ]',
                    source=raw,
                    position=pos,
                    offset=offset,
                )
            start = open_stack.pop()
            jumps[start] = pos
            jumps[pos] = start

    if open_stack:
        pos = open_stack[-1]
        raise make_syntax_error(
            UnmatchedOpenError,
            message='unmatched [',
            source=raw,
            position=pos,
            offset=offsets[pos],
        )

    logger.debug("parsed %d instructions (%d loops) from %d bytes", len(instructions), len(jumps) // 2, len(raw))
    return Program(instructions=tuple(instructions), jumps=jumps, offsets=tuple(offsets))


def load(stream: BinaryIO) -> Program:
    return parse(stream.read())


def load_file(path: Union[str, Path]) -> Program:
    with open(path, 'rb') as f:
        return load(f)
