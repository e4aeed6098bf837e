"""
tcforth Stack Operations - Operand stack and stack manipulation words
"""

from .errors import StackUnderflow, TypeMismatch


class OperandStack:
    """LIFO of stack values: ints and WordRefs"""

    def __init__(self):
        self._items = []

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self):
        return f"OperandStack({self._items!r})"

    def push(self, value):
        self._items.append(value)

    def pop(self, op=None):
        if not self._items:
            raise StackUnderflow(op)
        return self._items.pop()

    def peek(self, op=None):
        if not self._items:
            raise StackUnderflow(op)
        return self._items[-1]

    def pick(self, n, op=None):
        """Copy of the n-th item below the top (0 is the top)"""
        if n >= len(self._items):
            raise StackUnderflow(op)
        return self._items[-(n + 1)]

    def pop_int(self, op=None):
        value = self.pop(op)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch(op, f"integer expected, got {format_value(value)}")
        return value

    def depth(self):
        return len(self._items)

    def clear(self):
        self._items.clear()


def format_value(value):
    """External representation of a stack value"""
    return str(value)


class ForthStack:
    """Mixin providing stack manipulation operations"""

    def _register_stack_words(self):
        """Register stack words"""
        self._primitive('dup', ForthStack._dup)
        self._primitive('drop', ForthStack._drop)
        self._primitive('swap', ForthStack._swap)
        self._primitive('over', ForthStack._over)
        self._primitive('rot', ForthStack._rot)
        self._primitive('depth', ForthStack._depth)

        self._primitive('.', ForthStack._dot)
        self._primitive('.s', ForthStack._dot_s)

    def _dup(self):
        self.stack.push(self.stack.peek('dup'))

    def _drop(self):
        self.stack.pop('drop')

    def _swap(self):
        self.stack.pick(1, 'swap')
        b = self.stack.pop()
        a = self.stack.pop()
        self.stack.push(b)
        self.stack.push(a)

    def _over(self):
        self.stack.push(self.stack.pick(1, 'over'))

    def _rot(self):
        self.stack.pick(2, 'rot')
        c = self.stack.pop()
        b = self.stack.pop()
        a = self.stack.pop()
        self.stack.push(b)
        self.stack.push(c)
        self.stack.push(a)

    def _depth(self):
        self.stack.push(self.stack.depth())

    def _dot(self):
        value = self.stack.pop('.')
        self._write(format_value(value) + ' ')

    def _dot_s(self):
        items = ' '.join(format_value(item) for item in self.stack)
        self._write(f"<{self.stack.depth()}> {items}".rstrip() + '\n')
