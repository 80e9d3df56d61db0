from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


def _excerpt(text: str, line: int, column: int) -> str:
    return f"> {line:4d} | {text}\n  {'':4s} | {' ' * (column - 1)}^"


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'syntax':
        if 'unmatched [' in msg:
            return 'Every "[" needs a matching "]" later in the program.'
        if 'unmatched ]' in msg:
            return 'A "]" closes the nearest unclosed "[" before it. Remove it or add a "[" earlier.'
        return None
    if kind == 'io':
        if 'broken pipe' in msg:
            return 'The output stream was closed before the program finished writing.'
        return None
    return None


def _locate(source: bytes, offset: int) -> Tuple[int, int]:
    line_start = source.rfind(b'\n', 0, offset) + 1
    line = source.count(b'\n', 0, offset) + 1
    column = len(source[line_start:offset].decode('utf-8', errors='replace')) + 1
    return line, column


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    position: int
    offset: int
    line: int
    column: int
    context: str


class UnmatchedOpenError(BFSyntaxError):
    """A "[" with no "]" after it."""


class UnmatchedCloseError(BFSyntaxError):
    """A "]" with no unclosed "[" before it."""


@dataclass
class BFIOError(BFError):
    instruction: str
    pc: int


def make_syntax_error(
    cls: type,
    *,
    message: str,
    source: bytes,
    position: int,
    offset: int,
) -> BFSyntaxError:
    """
    Build a syntax error pointing at one bracket.

    Args:
        cls: UnmatchedOpenError or UnmatchedCloseError
        message: Short description, e.g. "unmatched ]"
        source: The raw program bytes
        position: Index of the bracket in the filtered instruction sequence
        offset: Byte offset of the bracket in ``source``
    """
    line, column = _locate(source, offset)
    text = source.decode('utf-8', errors='replace').split('\n')[line - 1]
    ctx = _excerpt(text, line, column)
    hint = _hint_for(message, kind='syntax')
    hint_block = f"\nHint: {hint}" if hint else ""
    return cls(
        message=f"{message} at line {line}, column {column}\n{ctx}{hint_block}",
        position=position,
        offset=offset,
        line=line,
        column=column,
        context=ctx,
    )


def make_io_error(*, message: str, instruction: str, pc: int) -> BFIOError:
    hint = _hint_for(message, kind='io')
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFIOError(
        message=f"{message} (instruction {instruction!r} at {pc}){hint_block}",
        instruction=instruction,
        pc=pc,
    )
