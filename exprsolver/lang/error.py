"""Error handling for exprsolver. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are three disjoint families of errors, one per pipeline stage:

```
ParseError       ; ExpectedError, UnexpectedError     (raised by the parser)
SymbolError      ; SymbolNotFoundError, SymbolRedeclaredError  (raised by the symbol table)
CalculatorError  ; UndefinedError, ArgumentCountError, LogicError  (raised during evaluation)
```

None of them are rendered as text until they reach ErrorHandler.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an exprsolver error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Raised when a token stream does not form a valid expression. source and start locate the offending token."""

    def __init__(self, msg, what, source="", start=0, length=1):
        super().__init__(msg, (source, what), start=start, end=start + length, diagnosis=bool(source))
        self.what = what


class ExpectedError(ParseError):
    """A required token is absent or mismatched."""

    def __init__(self, what, source="", start=0, length=1):
        super().__init__("expected '{1}'", what, source, start, length)


class UnexpectedError(ParseError):
    """A token is structurally invalid in its position, including trailing input after a complete expression."""

    def __init__(self, what, source="", start=0, length=1):
        super().__init__("unexpected '{1}'", what, source, start, length)


class SymbolError(GenericException):
    """Superclass for symbol table errors."""

    def __init__(self, msg, name):
        super().__init__(msg, name, diagnosis=False)
        self.name = name


class SymbolNotFoundError(SymbolError):

    def __init__(self, name):
        super().__init__("symbol '{}' not found", name)


class SymbolRedeclaredError(SymbolError):

    def __init__(self, name):
        super().__init__("redeclaration of symbol '{}'", name)


class CalculatorError(GenericException):
    """Superclass for evaluation errors."""

    def __init__(self, msg, detail):
        super().__init__(msg, detail, diagnosis=False)


class UndefinedError(CalculatorError):
    """An identifier or function name does not resolve to the expected kind of symbol. what is e.g. 'identifier foo'."""

    def __init__(self, what):
        super().__init__("undefined {}", what)
        self.what = what


class ArgumentCountError(CalculatorError):

    def __init__(self, message):
        super().__init__("invalid argument count: {}", message)
        self.message = message


class LogicError(CalculatorError):
    """Runtime domain violation, e.g. factorial of a value less than 1."""

    def __init__(self, message):
        super().__init__("logic error: {}", message)
        self.message = message


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom exprsolver errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    SOURCE = "<expr>"  # name used for expressions given on the command line

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_source(self, source, name=SOURCE):
        """Registers source in traceback. Should be called prior to Session run."""
        self.traceback[name] = source

    def remove_source(self, name=SOURCE):
        """Removes source from traceback. Should be called after successful Session run."""
        self.traceback.pop(name, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        if self.traceback:
            name, source = next(iter(self.traceback.items()))
            col = source.find(error.expr)
            error_msg += colored(f"{name}:{max(col, 0) + error.start}: ", attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException."""
        error_msg = ""
        for name, source in self.traceback.items():  # assumes dict is insertion-ordered
            if error.diagnosis and error.expr == source:
                continue  # diagnosis below already shows the source
            error_msg += f"  In '{name}':\n"
            error_msg += f"    {source}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
