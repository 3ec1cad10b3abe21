"""Error handling for the lox language. There are three disjoint kinds of errors a lox program can run into:

1. lexical (unterminated string, unexpected character): reported through ErrorHandler.error, scanning continues
2. syntactic (grammar violation): raised as a ParseError, reported through ErrorHandler.parse_error, the parser
   synchronizes to the next statement and continues
3. runtime (type mismatch, undefined variable): raised as a LoxRuntimeError, reported once through
   ErrorHandler.runtime_error, the current run is aborted

Only LoxExceptions should be encountered during running: if another type of error makes it all the way to
ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored

from lox.grammar.token import TokenKind

# sysexits.h codes, also used by the reference lox implementations
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74


class LoxException(Exception):
    """Templates an error message so that it can be used to throw a lox error. exprs are formatted into msg and
    highlighted. code is the process exit code used if the error is fatal.
    """

    def __init__(self, msg, exprs=None, code=EX_SOFTWARE, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        if exprs:
            msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        super().__init__(msg)

        self.msg = msg
        self.code = code
        self.internal = internal


class ParseError(LoxException):
    """Grammar violation at token. Only used within the parser to unwind to the nearest statement boundary."""

    def __init__(self, token, msg):
        super().__init__(msg, code=EX_DATAERR)
        self.token = token


class LoxRuntimeError(LoxException):
    """Error raised while evaluating a lox program. token locates the offending operator or name."""

    def __init__(self, token, msg):
        super().__init__(msg, code=EX_SOFTWARE)
        self.token = token


class ErrorHandler:
    """Collects and displays lox errors. had_error and had_runtime_error are sticky: they are only cleared by reset,
    which the host calls (once per shell line, never in file mode).

    Also a context manager that will suppress Python errors raised within it and report them as lox errors.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal

        self.had_error = False
        self.had_runtime_error = False
        self.reports = []  # uncolored diagnostics, in the order they were reported

    def error(self, line, message):
        """Reports a lexical error on line."""
        self.report(line, "", message)

    def parse_error(self, token, message):
        """Reports a syntactic error at token."""
        if token.kind is TokenKind.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error):
        """Reports a LoxRuntimeError."""
        self.reports.append(f"{error.msg}\n[line {error.token.line}]")
        self.had_runtime_error = True

        print(colored(error.msg, ErrorHandler.ERROR, attrs=["bold"]), file=sys.stderr)
        print(colored(f"[line {error.token.line}]", attrs=["bold"]), file=sys.stderr)

    def report(self, line, where, message):
        self.reports.append(f"[line {line}] Error{where}: {message}")
        self.had_error = True

        error_msg = colored(f"[line {line}] ", attrs=["bold"])
        error_msg += colored(f"Error{where}: ", ErrorHandler.ERROR, attrs=["bold"]) + message
        print(error_msg, file=sys.stderr)

    def reset(self):
        """Clears error flags. Reports are kept."""
        self.had_error = False
        self.had_runtime_error = False

    def throw(self, error):
        """Displays a host-level LoxException (unreadable file, interrupt, internal error). Exits with error.code if
        this handler is fatal.
        """
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self.reports.append(f"error: {error.msg}")
        print(error_msg, file=sys.stderr)

        if self.fatal:
            sys.exit(error.code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(LoxException("keyboard interrupt", code=EX_SOFTWARE))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(LoxException("maximum recursion depth exceeded"))
        elif issubclass(exc_type, LoxRuntimeError):
            self.runtime_error(exc_val)
        elif issubclass(exc_type, ParseError):
            self.parse_error(exc_val.token, exc_val.msg)
        elif issubclass(exc_type, LoxException):
            self.throw(exc_val)
        else:
            self.throw(LoxException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
