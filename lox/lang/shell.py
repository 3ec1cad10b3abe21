"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd

from lox.lang.value import stringify, type_name


class Shell(cmd.Cmd):
    """lox interpreter shell."""
    intro = "lox interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + "\n" + line if self._tmp_line else line
            source, add_to_prev = self.sess.preprocess_line(source)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.run(source)

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep accumulating a continued one."""
        if self._tmp_line:
            return self.default("")
        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(self.lastcmd)  # lox source that happens to start with "help"
        print("Welcome to the lox interpreter!\n\n"
              "lox is a small dynamically-typed scripting language with numbers, strings, \n"
              "booleans and nil, block-scoped variables, if/else, while and for loops. \n\n"
              "Try it out by typing 'var greeting = \"hello\";'. This will bind the string \n"
              "'hello' to the name 'greeting'. Next, try typing 'print greeting + \" world\";'.\n"
              "Type 'env' to list global variables and 'exit' to quit.")

    def do_env(self, arg):
        """Lists the global variables of this session."""
        if arg:
            return self.default(self.lastcmd)
        for name, value in self.sess.interpreter.globals.values.items():
            shown = f"\"{value}\"" if isinstance(value, str) else stringify(value)
            print(f"{name} = {shown} ({type_name(value)})")

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        return True
