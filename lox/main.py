"""Runs the lox interpreter over a .lox script, or in command-line mode if no script is given. Called from the lox
executable script.

Basic program flow:
    1. Scanner: converts source text into a flat list of tokens (see grammar/lexical.py)
    2. Parser: builds a list of statements by recursive descent (see grammar/parser.py)
        - if any lexical or syntactic error was reported, nothing is executed
    3. Interpreter: walks the statements against a chain of environments (see lang/interpreter.py)
        - the first runtime error aborts the run

Exit codes follow sysexits.h: 64 on bad usage, 65 if the script failed to scan/parse, 70 on a runtime error and 74 if
the script could not be read.
"""

import argparse
import sys

from lox.lang.error import EX_USAGE, ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def main(argv=None):
    """Runs lox interpreter. Called from lox executable script. Returns the process exit code, also when a
    fatal error makes the ErrorHandler exit.
    """
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print scanned tokens before running")
    parser.add_argument("--ast", action="store_true", help="print parsed statements before running")

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return EX_USAGE if exc.code else 0

    try:
        with ErrorHandler() as error_handler:
            if args.file is not None:
                sess = Session(error_handler, args.file, cmd_line=False, show_tokens=args.tokens, show_ast=args.ast)
                sess.run()
                return sess.exit_code

            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, show_tokens=args.tokens, show_ast=args.ast)
            Shell(sess).cmdloop()
    except SystemExit as exc:
        # a fatal ErrorHandler reports, then exits with the code of the error
        return exc.code

    return 0


if __name__ == "__main__":
    sys.exit(main())
