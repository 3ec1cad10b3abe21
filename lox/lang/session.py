"""Session control for the lox language. Runs the scanner -> parser -> interpreter pipeline over a script file or over
lines typed into the shell, and keeps the interpreter (and so the global environment) alive between runs.
"""

import sys

from lox.grammar.lexical import Scanner
from lox.grammar.parser import Parser
from lox.grammar.printer import AstPrinter
from lox.lang.error import EX_DATAERR, EX_IOERR, EX_SOFTWARE, LoxException
from lox.lang.interpreter import Interpreter


class Session:
    """Governs a lox session. In file mode, the script at path is loaded on creation and executed by run. In
    command-line mode (path == SH_FILE), each call to run executes one chunk of source typed into the shell.
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, show_tokens=False, show_ast=False, out=None):
        self.error_handler = error_handler

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.show_tokens = show_tokens  # dump tokens before running
        self.show_ast = show_ast        # dump syntax trees before running
        self.out = out

        self.interpreter = Interpreter(error_handler, out)
        self.source = ""

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise LoxException("'{}' could not be opened", path, code=EX_IOERR)

        elif not cmd_line:
            raise LoxException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips trailing whitespace from a chunk of shell input. Returns it along with whether or not a line
        continuation is necessary: brackets are still open or a string is unterminated.
        """
        line = line.rstrip()

        depth = 0
        in_string = False
        idx = 0
        while idx < len(line):
            char = line[idx]
            if in_string:
                in_string = char != "\""
            elif char == "\"":
                in_string = True
            elif line.startswith("//", idx):
                idx = line.find("\n", idx)  # comment runs to end of line
                if idx == -1:
                    break
            elif char in "({":
                depth += 1
            elif char in ")}":
                depth -= 1
            idx += 1

        return line, in_string or depth > 0

    def tokenize(self, source):
        return Scanner(source, self.error_handler).scan_tokens()

    def parse(self, source):
        """Scans and parses source. Returns None if a lexical or syntactic error was reported."""
        tokens = self.tokenize(source)
        if self.show_tokens:
            for token in tokens:
                self._write(str(token))

        statements = Parser(tokens, self.error_handler).parse()
        if self.error_handler.had_error:
            return None

        if self.show_ast:
            printer = AstPrinter()
            for stmt in statements:
                self._write(printer.print(stmt))

        return statements

    def run(self, source=None):
        """Runs source (or, in file mode, the loaded script). Nothing is executed if source fails to parse, and a
        runtime error aborts the rest of the run.
        """
        if source is None:
            source = self.source

        if self.cmd_line:
            self.error_handler.reset()  # errors on a previous line do not affect this one

        statements = self.parse(source)
        if statements is None:
            return

        self.interpreter.interpret(statements)

    @property
    def exit_code(self):
        """Process exit code for the errors reported so far."""
        if self.error_handler.had_error:
            return EX_DATAERR
        if self.error_handler.had_runtime_error:
            return EX_SOFTWARE
        return 0

    def _write(self, text):
        print(text, file=self.out if self.out is not None else sys.stdout)
