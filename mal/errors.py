from typing import Any


class MalError(Exception):
    """ Base class for all mal errors"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class MalThrown(MalError):
    """ Raised by evaluated code to carry an arbitrary value to the caller"""

    def __init__(self, value: Any):
        super().__init__("thrown value")
        self.value = value


class MalUnboundSymbol(MalError):
    """ Raised when a symbol is used before it is bound"""


class MalArityError(MalError):
    """ Raised when the number of arguments passed to a form or function is incorrect"""


class MalInvalidSymbol(MalError):
    """ Raised when something other than a symbol is used as a name"""


class MalSyntaxError(MalError):
    """ Raised when source text or a special form is malformed"""


class MalIncompleteInput(MalSyntaxError):
    """ Raised when the reader runs out of input in the middle of a form"""


class MalTypeError(MalError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class MalNotCallable(MalTypeError):
    """ Raised when the head of an application is not a function"""
