"""
tcforth Errors - every failure a run can end with

All of them are fatal to the run in progress; nothing inside the
interpreter catches them.
"""


class ForthError(Exception):
    """Base class for every error raised while running Forth code"""

    message = "forth error"

    def __init__(self, context=None, message=None):
        self.context = context
        self.backtrace = []
        super().__init__(message or self.message)

    def __str__(self):
        text = super().__str__()
        if self.context is None:
            return text
        return f"{self.context}: {text}"


class StackUnderflow(ForthError):
    message = "stack underflow"


class TypeMismatch(ForthError):
    message = "integer expected"


class UnknownWord(ForthError):
    message = "unknown word"


class ModeError(ForthError):
    message = "end-definition without begin-definition"


class TruncatedDefinition(ForthError):
    message = "end of input inside a definition"


class DivisionByZero(ForthError):
    message = "division by zero"


class StackOverflow(ForthError):
    message = "call nesting too deep"
