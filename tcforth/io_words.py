"""
tcforth I/O - Output channel words
"""

from .errors import TypeMismatch


class ForthIO:
    """Mixin providing I/O operations"""

    def _register_io_words(self):
        """Register I/O words"""
        self._primitive('cr', ForthIO._cr)
        self._primitive('emit', ForthIO._emit)
        self._primitive('space', ForthIO._space)

    def _cr(self):
        self._write('\n')

    def _emit(self):
        code = self.stack.pop_int('emit')
        if not 0 <= code <= 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise TypeMismatch("emit", f"not a character code: {code}")
        self._write(chr(code))

    def _space(self):
        self._write(' ')
