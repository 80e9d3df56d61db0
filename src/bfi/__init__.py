from .api import RunOptions, RunResult, run_file, run_program, run_stdio, run_string
from .engine import Engine
from .errors import BFError, BFIOError, BFSyntaxError, UnmatchedCloseError, UnmatchedOpenError
from .lexer import Instruction, tokenize
from .parser import Program, load, load_file, parse
from .state import ExecutionState, HaltReason
from .tape import TAPE_CHUNK, Tape

__all__ = [
    'Engine',
    'ExecutionState',
    'HaltReason',
    'Instruction',
    'Program',
    'Tape',
    'TAPE_CHUNK',
    'tokenize',
    'parse',
    'load',
    'load_file',
    'BFError',
    'BFSyntaxError',
    'UnmatchedOpenError',
    'UnmatchedCloseError',
    'BFIOError',
    'RunOptions',
    'RunResult',
    'run_program',
    'run_string',
    'run_file',
    'run_stdio',
]
