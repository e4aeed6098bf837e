"""
tcforth REPL - Interpreter assembly, interactive loop and DSL interface
"""

import logging

from .core import DEFAULT_MAX_DEPTH, ForthBase, Mode, TokenStream, tokenize
from .arithmetic import ForthArithmetic
from .stack_ops import ForthStack, format_value
from .compiler import ForthCompiler
from .executor import ForthExecutor
from .io_words import ForthIO
from .errors import ForthError, UnknownWord


logger = logging.getLogger(__name__)


class Forth(ForthBase, ForthArithmetic, ForthStack, ForthCompiler,
            ForthExecutor, ForthIO):
    """Complete Forth interpreter combining all mixins"""

    def __init__(self, output=None, max_depth=DEFAULT_MAX_DEPTH):
        super().__init__(output=output, max_depth=max_depth)
        self._register_all_words()

    def _register_all_words(self):
        """Register all words from all mixins"""
        self._register_compiler_words()
        self._register_stack_words()
        self._register_arithmetic_words()
        self._register_io_words()
        logger.debug("registered %d primitives", len(self.dictionary))

    def execute(self, text, final=True):
        """Execute Forth code"""
        tokens = tokenize(text)
        self.interpret(TokenStream(tokens), final=final)
        return self

    def abort(self):
        """Forget everything a failed run left behind"""
        self.stack.clear()
        self.dictionary.abandon()
        self.mode = Mode.INTERPRET
        self._frames.clear()
        return self


class ForthREPL:
    """Mixin providing the interactive loop"""

    def _prompt(self):
        return "...> " if self.mode is Mode.COMPILE else "OK> "

    def repl(self, get_input=input):
        """Start interactive REPL

        Args:
            get_input: callable taking a prompt and returning one line;
                       raises EOFError when input is exhausted.
        """
        self._write("tcforth - threaded-code Forth\n")
        self._write("Type 'bye' to quit\n\n")

        while True:
            try:
                try:
                    line = get_input(self._prompt())
                except EOFError:
                    break

                if line.strip() == 'bye':
                    break

                self.execute(line, final=False)
                if self.mode is Mode.INTERPRET:
                    self._write(" ok\n")

            except KeyboardInterrupt:
                self._write("\n(Ctrl+C) type 'bye' to quit\n")
                self.abort()
            except ForthError as e:
                self._write(f"\nError: {e}\n")
                self.abort()

        return self


class InteractiveForth(Forth, ForthREPL):
    """Complete Interactive Forth with REPL and DSL support"""

    def __repr__(self):
        items = ' '.join(format_value(item) for item in self.stack)
        return f"<{self.stack.depth()}> {items}".rstrip()

    def __call__(self, *values):
        return self.push(*values)

    def push(self, *values):
        for v in values:
            self.stack.push(v)
        return self

    def pop(self):
        return self.stack.pop('pop')

    def peek(self):
        return self.stack.peek('peek')

    def values(self):
        """Snapshot of the stack, bottom first"""
        return list(self.stack)

    def run(self, name):
        """Execute the word called name"""
        handle = self.dictionary.lookup(name, excluding_active=True)
        if handle is None:
            raise UnknownWord(name)
        self.execute_word(handle)
        return self

    def see(self, name):
        """Decompiled source of the word called name"""
        handle = self.dictionary.lookup(name, excluding_active=True)
        if handle is None:
            raise UnknownWord(name)
        return self.decompile(handle)
