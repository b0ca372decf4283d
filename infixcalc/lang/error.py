"""Error handling for infixcalc. Only CalcExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class CalcException(Exception):
    """Templates an error/warning message so that it can be reported against the expression that caused it. exprs[0]
    should be the offending expression; start and end delimit the offending span within it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.raw_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.raw_msg)


class ParseError(CalcException):
    """Malformed input: raised while tokenizing or parsing, never while evaluating."""


class EvaluationError(CalcException):
    """Raised while evaluating an expression tree."""


class DivisionByZeroError(EvaluationError):
    """Right operand of a division evaluated to exactly zero."""


class InvalidOperatorError(EvaluationError):
    """Operator outside of + - * / reached evaluation. The parser never builds such a tree."""


class ErrorHandler:
    """Context manager that reports CalcExceptions (and suppresses them unless fatal)."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.location = None  # (path, line, line_num) of the expression being handled
        self.errors = 0

    def register_line(self, path, line, line_num):
        """Registers line as the origin of any error raised. Should be called prior to Session add/run."""
        self.location = (path, line, line_num)

    def remove_line(self):
        """Should be called after a successful Session add/run."""
        self.location = None

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _header(self):
        if self.location is None:
            return ""
        path, line, line_num = self.location
        if path is None:
            return ""
        return f"  File '{path}', line {line_num}:\n    {line}\n"

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = CalcException(*args, **kwargs)

        warning_msg = self._header()
        warning_msg += colored("Warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        self._print(warning_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Reports error, which must be a CalcException, against the registered location. Exits if fatal."""
        error_msg = self._header()

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("Error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error))

        self.errors += 1
        if self.fatal:
            sys.exit(1)
        self.location = None  # if error occurred, reset location (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CalcException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(CalcException("expression is nested too deeply (maximum recursion depth exceeded)"))
        elif exc_type is not None and issubclass(exc_type, CalcException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CalcException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
