"""
tcforth Core - Base class with fundamental infrastructure
- Token model and tokenizer
- Interpreter state and primitive registration
"""

import enum
import sys
from dataclasses import dataclass

from .dictionary import Dictionary, Primitive
from .errors import UnknownWord
from .stack_ops import OperandStack

DEFAULT_MAX_DEPTH = 1000


class Mode(enum.Enum):
    INTERPRET = "interpret"
    COMPILE = "compile"


class TokenKind(enum.Enum):
    INTEGER = "integer"
    IDENTIFIER = "identifier"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: object
    text: str

    @property
    def is_identifier(self):
        return self.kind is TokenKind.IDENTIFIER

    @property
    def is_integer(self):
        return self.kind is TokenKind.INTEGER


EOF = Token(TokenKind.EOF, None, "")


def parse_number(text):
    """Parse an integer literal, or return None when the text is not one"""
    body = text[1:] if text[:1] in "+-" else text
    sign = -1 if text.startswith("-") else 1
    prefixes = {"0x": 16, "0b": 2, "0o": 8}
    base = prefixes.get(body[:2].lower(), 10)
    if base != 10:
        body = body[2:]
    if not body or not body.isascii() or body[0] in "+-" or '_' in body:
        return None
    try:
        return sign * int(body, base)
    except ValueError:
        return None


def tokenize(text):
    """Split source text into classified tokens, dropping comments"""
    tokens = []
    i = 0
    n = len(text)

    while i < n:
        if text[i].isspace():
            i += 1
            continue

        if text[i] == '\\' and (i + 1 >= n or text[i + 1].isspace()):
            while i < n and text[i] != '\n':
                i += 1
            continue

        if text[i] == '(' and (i + 1 >= n or text[i + 1].isspace()):
            i += 1
            depth = 1
            while i < n and depth > 0:
                if text[i] == '(':
                    depth += 1
                elif text[i] == ')':
                    depth -= 1
                i += 1
            continue

        start = i
        while i < n and not text[i].isspace():
            i += 1
        word = text[start:i]
        number = parse_number(word)
        if number is None:
            tokens.append(Token(TokenKind.IDENTIFIER, word, word))
        else:
            tokens.append(Token(TokenKind.INTEGER, number, word))

    return tokens


class TokenStream:
    """Pull-based token source with one token of lookahead"""

    def __init__(self, tokens):
        self._tokens = list(tokens)
        self._index = 0

    def next(self):
        if self._index >= len(self._tokens):
            return EOF
        token = self._tokens[self._index]
        self._index += 1
        return token

    def peek(self):
        if self._index >= len(self._tokens):
            return EOF
        return self._tokens[self._index]


class ForthBase:
    """Base mixin holding the interpreter state shared by every word"""

    def __init__(self, output=None, max_depth=DEFAULT_MAX_DEPTH):
        self.stack = OperandStack()
        self.dictionary = Dictionary()
        self.mode = Mode.INTERPRET
        self.output = output if output is not None else sys.stdout
        self.max_depth = max_depth

        self._frames = []
        self._input = None

    def _primitive(self, name, function, immediate=False):
        """Add a built-in word whose body is a single primitive cell"""
        return self.dictionary.add_primitive(Primitive(name, function), immediate)

    def _write(self, text):
        self.output.write(text)
        if hasattr(self.output, 'flush'):
            self.output.flush()

    def _next_name(self, op):
        """Read the next token from the current input as a word name"""
        token = self._input.next() if self._input is not None else EOF
        if token is EOF:
            raise UnknownWord(op, "missing word name")
        return token.text
