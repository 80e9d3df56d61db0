from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union


class Instruction(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_OPEN = '['
    LOOP_CLOSE = ']'

    @classmethod
    def from_byte(cls, b: int) -> Optional['Instruction']:
        return _BY_BYTE.get(b)

    def __str__(self) -> str:
        return self.value


_BY_BYTE: Dict[int, Instruction] = {ord(op.value): op for op in Instruction}


def to_bytes(source: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(source, str):
        return source.encode('utf-8')
    return bytes(source)


def iter_instructions(source: bytes) -> Iterator[Tuple[int, Instruction]]:
    """Yield (byte offset, instruction) pairs; every other byte is a comment."""
    for offset, b in enumerate(source):
        op = _BY_BYTE.get(b)
        if op is not None:
            yield offset, op


def tokenize(source: Union[bytes, str]) -> List[Instruction]:
    return [op for _, op in iter_instructions(to_bytes(source))]
