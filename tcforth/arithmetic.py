"""
tcforth Arithmetic - Integer operations
"""

from .errors import DivisionByZero


class ForthArithmetic:
    """Mixin providing arithmetic operations"""

    def _register_arithmetic_words(self):
        """Register arithmetic words"""
        self._primitive('+', ForthArithmetic._plus)
        self._primitive('-', ForthArithmetic._minus)
        self._primitive('*', ForthArithmetic._mult)
        self._primitive('/', ForthArithmetic._div)
        self._primitive('mod', ForthArithmetic._mod)
        self._primitive('negate', ForthArithmetic._negate)

    def _operands(self, op):
        """Pop ( a b -- ) as integers, returning (a, b)"""
        b = self.stack.pop_int(op)
        a = self.stack.pop_int(op)
        return a, b

    def _plus(self):
        a, b = self._operands('+')
        self.stack.push(a + b)

    def _minus(self):
        a, b = self._operands('-')
        self.stack.push(a - b)

    def _mult(self):
        a, b = self._operands('*')
        self.stack.push(a * b)

    def _div(self):
        a, b = self._operands('/')
        if b == 0:
            raise DivisionByZero('/')
        self.stack.push(a // b)

    def _mod(self):
        a, b = self._operands('mod')
        if b == 0:
            raise DivisionByZero('mod')
        self.stack.push(a % b)

    def _negate(self):
        self.stack.push(-self.stack.pop_int('negate'))
