import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()     # lox print statements
        self.stdout = io.StringIO()  # shell commands (help, env)
        self.sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, out=self.out)

    def run_shell(self, *lines):
        """Feeds lines to a shell until its input is exhausted."""
        shell = Shell(self.sess, stdin=io.StringIO("\n".join(lines) + "\n"), stdout=io.StringIO())
        shell.use_rawinput = False

        with redirect_stdout(self.stdout), redirect_stderr(io.StringIO()):
            shell.cmdloop()
        return shell

    def test_statements(self):
        self.run_shell("var a = 1;", "a = a + 1;", "print a;")
        self.assertEqual("2\n", self.out.getvalue())

    def test_line_continuation(self):
        shell = self.run_shell("var a = 1;", "{", "", "  a = a + 1;", "  print a;", "}", "print a;")

        self.assertEqual("2\n2\n", self.out.getvalue())
        self.assertEqual(Shell.prompt, shell.prompt)

    def test_errors_do_not_stop_shell(self):
        self.run_shell("print ;", "print -nil;", "print undefined;", "print 2;")
        self.assertEqual("2\n", self.out.getvalue())

    def test_exit(self):
        self.run_shell("print 1;", "exit", "print 2;")
        self.assertEqual("1\n", self.out.getvalue())

    def test_command_names_as_source(self):
        self.run_shell("var exit = 1;", "exit = exit + 1;", "print exit;", "var env = \"e\";", "env = env + \"!\";",
                       "print env;")
        self.assertEqual("2\ne!\n", self.out.getvalue())

    def test_env(self):
        self.run_shell("var a = 1.5;", "var s = \"x\";", "var n;", "{ var hidden = true; }", "env")

        listing = self.stdout.getvalue()
        self.assertIn("a = 1.5 (number)", listing)
        self.assertIn("s = \"x\" (string)", listing)
        self.assertIn("n = nil (nil)", listing)
        self.assertNotIn("hidden", listing)

    def test_help(self):
        self.run_shell("help")
        self.assertIn("Welcome to the lox interpreter!", self.stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
