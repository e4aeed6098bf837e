"""
tcforth Dictionary - Words, code cells and name resolution

A word's body is a list of cells. Each cell is one of:
  PRIMITIVE  a built-in operation, called with the interpreter
  WORD       a reference to another dictionary entry
  LITERAL    an integer pushed when the cell runs

The dictionary only ever grows. Redefining a name appends a new entry,
and lookup walks from the newest entry back, so the latest definition
shadows earlier ones without removing them.
"""

import enum
import logging
from dataclasses import dataclass

from .errors import ModeError


logger = logging.getLogger(__name__)


class CellKind(enum.Enum):
    PRIMITIVE = "primitive"
    WORD = "word"
    LITERAL = "literal"


@dataclass(frozen=True)
class Primitive:
    """A named built-in operation ( interpreter -- )"""
    name: str
    function: object

    def __call__(self, forth):
        self.function(forth)


@dataclass(frozen=True)
class WordRef:
    """Stable reference to a dictionary entry, usable as a stack value"""
    handle: int
    name: str

    def __str__(self):
        return f"<word {self.name}>"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: object

    @classmethod
    def primitive(cls, primitive):
        return cls(CellKind.PRIMITIVE, primitive)

    @classmethod
    def word(cls, ref):
        return cls(CellKind.WORD, ref)

    @classmethod
    def literal(cls, number):
        return cls(CellKind.LITERAL, number)


class Word:
    """A named code list plus its immediacy flag"""

    def __init__(self, name, handle):
        self.name = name
        self.handle = handle
        self.immediate = False
        self.hidden = False
        self.code = []
        self._sealed = False

    def __repr__(self):
        return f"Word({self.name!r}, handle={self.handle}, cells={len(self.code)})"

    @property
    def sealed(self):
        return self._sealed

    def ref(self):
        return WordRef(self.handle, self.name)

    def append(self, cell):
        if self._sealed:
            raise ModeError(self.name, "cannot extend a finished definition")
        self.code.append(cell)

    def seal(self):
        self._sealed = True


class Dictionary:
    """Append-only list of words searched newest-first"""

    def __init__(self):
        self._entries = []
        self.active = None

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def word(self, handle):
        return self._entries[handle]

    def add_primitive(self, primitive, immediate=False):
        """Append a finished word wrapping a single primitive cell"""
        handle = len(self._entries)
        word = Word(primitive.name, handle)
        word.append(Cell.primitive(primitive))
        word.immediate = immediate
        word.seal()
        self._entries.append(word)
        return handle

    def define(self, name):
        """Start a new empty definition and make it the active word"""
        handle = len(self._entries)
        self._entries.append(Word(name, handle))
        self.active = handle
        logger.debug("defining %r (handle %d)", name, handle)
        return handle

    def lookup(self, name, excluding_active=False):
        """Find the newest entry called name.

        With excluding_active set and a definition in progress, the search
        starts just below the active entry, so the word being built never
        resolves to itself and a redefinition can still call the word it
        shadows.
        """
        start = len(self._entries) - 1
        if excluding_active and self.active is not None:
            start = self.active - 1
        for handle in range(start, -1, -1):
            word = self._entries[handle]
            if word.name == name and not word.hidden:
                return handle
        return None

    def mark_immediate(self, handle):
        self._entries[handle].immediate = True

    def finish(self):
        """Seal the active definition and clear the active handle"""
        if self.active is None:
            return None
        word = self._entries[self.active]
        word.seal()
        self.active = None
        logger.debug("finished %r with %d cells", word.name, len(word.code))
        return word

    def abandon(self):
        """Drop the active definition out of sight after a failed run"""
        if self.active is None:
            return
        word = self._entries[self.active]
        word.hidden = True
        word.seal()
        self.active = None
        logger.debug("abandoned definition of %r", word.name)

    def names(self):
        """Visible names, newest first, each listed once"""
        seen = set()
        names = []
        for word in reversed(self._entries):
            if word.hidden or word.name in seen:
                continue
            seen.add(word.name)
            names.append(word.name)
        return names
