"""
tcforth Compiler - Word definitions and the interpret/compile state machine

The outer interpreter reads one token at a time. In interpret mode a token
is executed (identifiers) or pushed (integers). ':' switches to compile
mode, the next token names the new word, and every following token is
compiled into its body until ';'. Immediate words run at once even while
compiling.
"""

import logging

from .core import EOF, Mode
from .dictionary import Cell, CellKind, WordRef
from .errors import ModeError, TruncatedDefinition, TypeMismatch, UnknownWord


logger = logging.getLogger(__name__)

BEGIN_DEFINITION = ':'
END_DEFINITION = ';'
IMMEDIATE_MARKER = 'immediate'


def is_immediate_marker(token):
    """True when the token right after a new word's name asks for immediacy"""
    return token.is_identifier and token.text == IMMEDIATE_MARKER


class ForthCompiler:
    """Mixin providing word compilation and definition"""

    def _register_compiler_words(self):
        """Register compiler words"""
        self._primitive(BEGIN_DEFINITION, ForthCompiler._begin_definition)
        self._primitive(END_DEFINITION, ForthCompiler._end_definition, immediate=True)

        self._primitive("'", ForthCompiler._tick)
        self._primitive('execute', ForthCompiler._execute_xt)
        self._primitive('words', ForthCompiler._list_words)
        self._primitive('see', ForthCompiler._see)

    def _begin_definition(self):
        if self.dictionary.active is not None:
            name = self.dictionary.word(self.dictionary.active).name
            raise ModeError(BEGIN_DEFINITION, f"already defining {name!r}")
        self.mode = Mode.COMPILE

    def _end_definition(self):
        if self.mode is Mode.INTERPRET:
            raise ModeError(END_DEFINITION)
        self.dictionary.finish()
        self.mode = Mode.INTERPRET

    def interpret(self, stream, final=True):
        """Feed every token of stream through the state machine"""
        previous = self._input
        self._input = stream
        try:
            while True:
                token = stream.next()
                if token is EOF:
                    break
                self._dispatch(token)
        finally:
            self._input = previous

        if final and self.mode is Mode.COMPILE:
            raise TruncatedDefinition(self._open_definition_name())
        return self

    def _dispatch(self, token):
        if self.mode is Mode.COMPILE:
            if self.dictionary.active is None:
                self._start_definition(token)
            else:
                self._compile_token(token)
        else:
            self._interpret_token(token)

    def _interpret_token(self, token):
        if self.dictionary.active is not None:
            self.dictionary.finish()

        if token.is_integer:
            self.stack.push(token.value)
            return

        handle = self.dictionary.lookup(token.text)
        if handle is None:
            raise UnknownWord(token.text)
        self.execute_word(handle)

    def _start_definition(self, token):
        handle = self.dictionary.define(token.text)
        if is_immediate_marker(self._input.peek()):
            self._input.next()
            self.dictionary.mark_immediate(handle)

    def _compile_token(self, token):
        word = self.dictionary.word(self.dictionary.active)

        if token.is_integer:
            word.append(Cell.literal(token.value))
            return

        if token.text == END_DEFINITION:
            self._end_definition()
            return

        handle = self.dictionary.lookup(token.text, excluding_active=True)
        if handle is None:
            raise UnknownWord(token.text)

        target = self.dictionary.word(handle)
        if target.immediate:
            logger.debug("running immediate %r while compiling %r", target.name, word.name)
            self.execute_word(handle)
        else:
            word.append(Cell.word(target.ref()))

    def _open_definition_name(self):
        if self.dictionary.active is None:
            return None
        return self.dictionary.word(self.dictionary.active).name

    def _tick(self):
        name = self._next_name("'")
        handle = self.dictionary.lookup(name, excluding_active=True)
        if handle is None:
            raise UnknownWord(name)
        self.stack.push(self.dictionary.word(handle).ref())

    def _execute_xt(self):
        xt = self.stack.pop('execute')
        if not isinstance(xt, WordRef):
            raise TypeMismatch('execute', f"word reference expected, got {xt}")
        self._call_ref(xt)

    def _list_words(self):
        self._write(' '.join(self.dictionary.names()) + '\n')

    def _see(self):
        name = self._next_name('see')
        handle = self.dictionary.lookup(name, excluding_active=True)
        if handle is None:
            raise UnknownWord(name)
        self._write(self.decompile(handle) + '\n')

    def decompile(self, handle):
        """Source-like rendering of a dictionary entry"""
        word = self.dictionary.word(handle)
        parts = [BEGIN_DEFINITION, word.name]
        if word.immediate:
            parts.append(IMMEDIATE_MARKER)
        for cell in word.code:
            if cell.kind is CellKind.PRIMITIVE:
                parts.append(f"<primitive {cell.value.name}>")
            elif cell.kind is CellKind.WORD:
                parts.append(cell.value.name)
            else:
                parts.append(str(cell.value))
        parts.append(END_DEFINITION)
        return ' '.join(parts)
