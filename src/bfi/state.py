from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class HaltReason(Enum):
    END_OF_PROGRAM = 'end-of-program'
    BOUNDARY = 'boundary'


@dataclass
class ExecutionState:
    pc: int = 0
    pointer: int = 0
    steps: int = 0
    halt_reason: Optional[HaltReason] = None

    @property
    def halted(self) -> bool:
        return self.halt_reason is not None
