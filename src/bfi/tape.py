from __future__ import annotations

import numpy as np

TAPE_CHUNK = 1024


class Tape:
    """
    Growable tape of 8-bit cells.

    The visible length starts at one chunk and grows one chunk at a time. The
    backing array doubles when it runs out so growth stays amortized O(1).
    """

    def __init__(self) -> None:
        self._cells = np.zeros(TAPE_CHUNK, dtype=np.uint8)
        self._size = TAPE_CHUNK

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> int:
        return int(self._cells[self._check(index)])

    def __setitem__(self, index: int, value: int) -> None:
        self._cells[self._check(index)] = value & 0xFF

    def _check(self, index: int) -> int:
        if not 0 <= index < self._size:
            raise IndexError(f"tape index out of range: {index}")
        return index

    def grow(self) -> None:
        new_size = self._size + TAPE_CHUNK
        if new_size > len(self._cells):
            cells = np.zeros(max(new_size, len(self._cells) * 2), dtype=np.uint8)
            cells[:self._size] = self._cells[:self._size]
            self._cells = cells
        self._size = new_size

    def increment(self, index: int) -> None:
        self[index] = self[index] + 1

    def decrement(self, index: int) -> None:
        self[index] = self[index] - 1

    def snapshot(self) -> bytes:
        return self._cells[:self._size].tobytes()
