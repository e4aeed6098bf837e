"""
tcforth Executor - Inner interpreter for threaded code

Nested word calls are kept on an explicit frame stack of [word, ip]
pairs instead of Python recursion, so deeply nested user words are
limited by max_depth rather than by the interpreter's recursion limit.
"""

from .dictionary import CellKind
from .errors import ForthError, StackOverflow


class ForthExecutor:
    """Mixin that replays a word's code cells"""

    def _enter(self, word):
        """Push a call frame for word"""
        if len(self._frames) >= self.max_depth:
            raise StackOverflow(word.name)
        self._frames.append([word, 0])

    def execute_word(self, handle):
        """Run the dictionary entry at handle until it returns"""
        word = self.dictionary.word(handle)
        base = len(self._frames)
        self._enter(word)
        try:
            while len(self._frames) > base:
                frame = self._frames[-1]
                word, ip = frame
                if ip >= len(word.code):
                    self._frames.pop()
                    continue
                frame[1] = ip + 1
                cell = word.code[ip]

                if cell.kind is CellKind.PRIMITIVE:
                    cell.value(self)
                elif cell.kind is CellKind.WORD:
                    self._enter(self.dictionary.word(cell.value.handle))
                elif cell.kind is CellKind.LITERAL:
                    self.stack.push(cell.value)
                else:
                    raise ValueError(f"unknown cell kind {cell.kind!r}")
        except ForthError as error:
            if not error.backtrace:
                error.backtrace = self.backtrace()
            raise
        finally:
            del self._frames[base:]

    def _call_ref(self, ref):
        """Call a WordRef from inside a running primitive"""
        word = self.dictionary.word(ref.handle)
        if self._frames:
            self._enter(word)
        else:
            self.execute_word(ref.handle)

    def backtrace(self):
        """Names of the words currently being executed, outermost first"""
        return [word.name for word, _ in self._frames]
