"""
tcforth - Threaded-code Forth interpreter
Modular package implementation

Usage:
    from tcforth import InteractiveForth
    forth = InteractiveForth()
    forth.execute(": square dup * ; 5 square .")
"""

from .errors import (
    ForthError, StackUnderflow, TypeMismatch, UnknownWord, ModeError,
    TruncatedDefinition, DivisionByZero, StackOverflow,
)
from .core import ForthBase, Mode, Token, TokenKind, TokenStream, EOF, tokenize
from .dictionary import Cell, CellKind, Dictionary, Primitive, Word, WordRef
from .stack_ops import OperandStack, ForthStack
from .arithmetic import ForthArithmetic
from .compiler import ForthCompiler, is_immediate_marker
from .executor import ForthExecutor
from .io_words import ForthIO
from .repl import Forth, ForthREPL, InteractiveForth

__all__ = [
    'Forth', 'InteractiveForth', 'ForthError', 'StackUnderflow',
    'TypeMismatch', 'UnknownWord', 'ModeError', 'TruncatedDefinition',
    'DivisionByZero', 'StackOverflow', 'tokenize', 'TokenStream',
]
__version__ = '1.0.0'
