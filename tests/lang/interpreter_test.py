import io
import math
import unittest
from contextlib import redirect_stderr

from lox.grammar.lexical import Scanner
from lox.grammar.parser import Parser
from lox.lang.error import ErrorHandler, LoxRuntimeError
from lox.lang.interpreter import Interpreter


class InterpreterTestCase(unittest.TestCase):

    def setUp(self):
        self.handler = ErrorHandler(fatal=False)
        self.out = io.StringIO()
        self.interpreter = Interpreter(self.handler, self.out)

    def parse(self, source):
        with redirect_stderr(io.StringIO()):
            statements = Parser(Scanner(source, self.handler).scan_tokens(), self.handler).parse()
        self.assertFalse(self.handler.had_error, self.handler.reports)
        return statements

    def evaluate(self, source):
        """Evaluates a single expression, letting runtime errors through."""
        stmt, = self.parse(source + ";")
        return self.interpreter.evaluate(stmt.expression)

    def execute(self, source):
        """Interprets source and returns the printed lines since the last call."""
        self.out.seek(0)
        self.out.truncate()
        with redirect_stderr(io.StringIO()):
            self.interpreter.interpret(self.parse(source))
        return self.out.getvalue().splitlines()


class ExpressionTestCase(InterpreterTestCase):

    def test_arithmetic(self):
        cases = {
            "1 + 2 * 3": 7.0,
            "(1 + 2) * 3": 9.0,
            "10 - 4 - 3": 3.0,
            "2 * 3 / 4": 1.5,
            "-(1 + 1)": -2.0,
            "- -3": 3.0,
            "0.1 + 0.2": 0.1 + 0.2,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.evaluate(case), case)

    def test_division_by_zero(self):
        self.assertEqual(math.inf, self.evaluate("1 / 0"))
        self.assertEqual(-math.inf, self.evaluate("-1 / 0"))
        self.assertEqual(-math.inf, self.evaluate("1 / -0"))
        self.assertTrue(math.isnan(self.evaluate("0 / 0")))

    def test_comparison(self):
        cases = {
            "1 < 2": True,
            "2 < 1": False,
            "2 <= 2": True,
            "3 > 2": True,
            "2 >= 3": False,
            "1 + 1 == 2": True,
        }
        for case, expected in cases.items():
            self.assertIs(expected, self.evaluate(case), case)

    def test_equality(self):
        cases = {
            "1 == \"1\"": False,
            "1 != \"1\"": True,
            "nil == nil": True,
            "nil == false": False,
            "true == 1": False,
            "false == 0": False,
            "\"a\" == \"a\"": True,
            "\"a\" != \"b\"": True,
            "0 / 0 == 0 / 0": False,
        }
        for case, expected in cases.items():
            self.assertIs(expected, self.evaluate(case), case)

    def test_strings(self):
        self.assertEqual("foobar", self.evaluate("\"foo\" + \"bar\""))
        self.assertEqual("", self.evaluate("\"\" + \"\""))

    def test_unary(self):
        cases = {"!true": False, "!nil": True, "!0": False, "!\"\"": False, "!!nil": False}
        for case, expected in cases.items():
            self.assertIs(expected, self.evaluate(case), case)

    def test_type_errors(self):
        cases = {
            "-\"a\"": ("-", "Operand must be a number."),
            "-nil": ("-", "Operand must be a number."),
            "\"foo\" + 1": ("+", "Operands must be two numbers or two strings."),
            "1 + nil": ("+", "Operands must be two numbers or two strings."),
            "true + true": ("+", "Operands must be two numbers or two strings."),
            "\"a\" * 2": ("*", "Operands must be numbers."),
            "1 < \"2\"": ("<", "Operands must be numbers."),
            "nil >= nil": (">=", "Operands must be numbers."),
            "1 - true": ("-", "Operands must be numbers."),
            "\"a\" / \"b\"": ("/", "Operands must be numbers."),
        }
        for case, (lexeme, msg) in cases.items():
            with self.assertRaises(LoxRuntimeError, msg=case) as ctx:
                self.evaluate(case)
            self.assertEqual(lexeme, ctx.exception.token.lexeme, case)
            self.assertEqual(msg, ctx.exception.msg, case)

    def test_logical_values(self):
        cases = {
            "nil or \"x\"": "x",
            "1 or 2": 1.0,
            "1 and 2": 2.0,
            "false or false": False,
            "\"\" and 0": 0.0,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.evaluate(case), case)

        self.assertIsNone(self.evaluate("nil and 1"))

    def test_short_circuit_skips_right(self):
        # the right operand would raise if it were evaluated
        self.assertIs(False, self.evaluate("false and undefined"))
        self.assertIs(True, self.evaluate("true or -nil"))
        self.assertRaises(LoxRuntimeError, self.evaluate, "true and undefined")
        self.assertRaises(LoxRuntimeError, self.evaluate, "false or -nil")

    def test_undefined_variable(self):
        with self.assertRaises(LoxRuntimeError) as ctx:
            self.evaluate("missing")
        self.assertEqual("Undefined variable 'missing'.", ctx.exception.msg)


class StatementTestCase(InterpreterTestCase):

    def test_print(self):
        source = "print 1 / 3; print 7; print 2.5; print true; print nil; print \"s\"; print 1 == 1;"
        self.assertEqual(["0.33333333", "7", "2.5", "true", "nil", "s", "true"], self.execute(source))

    def test_print_small_numbers(self):
        source = "print 0.00001; print 0.0000001; print -0; print 0.5 * 0.0001; print 0.000000001;"
        self.assertEqual(["0.00001", "0.0000001", "-0", "0.00005", "0"], self.execute(source))

    def test_var(self):
        self.assertEqual(["nil", "2", "3"], self.execute("var a; print a; var b = 2; print b; var b = 3; print b;"))

    def test_shadowing(self):
        self.assertEqual(["2", "1"], self.execute("var a = 1; { var a = 2; print a; } print a;"))

        source = "var a = \"g\"; { var a = \"b\"; { a = \"c\"; print a; } print a; } print a;"
        self.assertEqual(["c", "c", "g"], self.execute(source))

    def test_assignment(self):
        self.assertEqual(["2"], self.execute("var x = 1; x = 2; print x;"))
        self.assertEqual(["2"], self.execute("var a = 1; { a = 2; } print a;"))
        self.assertEqual(["3", "3", "4"], self.execute("var a; var b; a = b = 3; print a; print b; print a = 4;"))

    def test_assignment_requires_declaration(self):
        self.assertEqual([], self.execute("x = 1;"))
        self.assertTrue(self.handler.had_runtime_error)
        self.assertEqual(["Undefined variable 'x'.\n[line 1]"], self.handler.reports)
        self.assertNotIn("x", self.interpreter.globals.values)

    def test_short_circuit_side_effects(self):
        source = ("var a = 0;"
                  "false and (a = 1); print a;"
                  "true or (a = 2); print a;"
                  "true and (a = 3); print a;"
                  "false or (a = 4); print a;")
        self.assertEqual(["0", "0", "3", "4"], self.execute(source))

    def test_evaluation_order(self):
        self.assertEqual(["lr"], self.execute("var log = \"\"; (log = log + \"l\") + (log = log + \"r\"); print log;"))

    def test_if(self):
        cases = {
            "if (true) print 1; else print 2;": ["1"],
            "if (nil) print 1; else print 2;": ["2"],
            "if (false) print 1;": [],
            "if (0) print \"zero is truthy\";": ["zero is truthy"],
            "if (false) if (true) print 1; else print 2;": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.execute(case), case)

    def test_while(self):
        source = "var i = 3; while (i > 0) { print i; i = i - 1; }"
        self.assertEqual(["3", "2", "1"], self.execute(source))
        self.assertEqual([], self.execute("while (false) print 1;"))

    def test_for(self):
        self.assertEqual(["0", "1", "2"], self.execute("for (var i = 0; i < 3; i = i + 1) print i;"))

        source = "var s = \"a\"; for (var i = 0; i < 3; i = i + 1) s = s + \"b\"; print s;"
        self.assertEqual(["abbb"], self.execute(source))

        source = "var a = 0; var b = 1; for (; a < 20; ) { print a; var t = a; a = b; b = t + b; }"
        self.assertEqual(["0", "1", "1", "2", "3", "5", "8", "13"], self.execute(source))

    def test_for_variable_is_scoped(self):
        self.execute("for (var i = 0; i < 1; i = i + 1) {} print i;")
        self.assertEqual(["Undefined variable 'i'.\n[line 1]"], self.handler.reports)

    def test_block_variable_is_scoped(self):
        self.assertEqual(["1"], self.execute("{ var a = 1; print a; } print a;"))
        self.assertEqual(["Undefined variable 'a'.\n[line 1]"], self.handler.reports)


class RuntimeErrorTestCase(InterpreterTestCase):

    def test_aborts_run(self):
        self.assertEqual(["1"], self.execute("print 1;\nprint -\"a\";\nprint 2;"))
        self.assertTrue(self.handler.had_runtime_error)
        self.assertFalse(self.handler.had_error)
        self.assertEqual(["Operand must be a number.\n[line 2]"], self.handler.reports)

    def test_aborts_loop(self):
        self.assertEqual(["0"], self.execute("var i = 0; while (i < 3) { print i; i = i + nil; }"))
        self.assertEqual(1, len(self.handler.reports))

        self.execute("var j = 0; while (j < \"x\") j = j + 1;")
        self.assertEqual("Operands must be numbers.\n[line 1]", self.handler.reports[-1])

    def test_restores_environment(self):
        self.execute("var a = 1; { var b = 2; { var c = 3; print -nil; } }")

        self.assertIs(self.interpreter.globals, self.interpreter.environment)
        self.assertIn("a", self.interpreter.globals.values)
        self.assertNotIn("b", self.interpreter.globals.values)
        self.assertNotIn("c", self.interpreter.globals.values)

    def test_globals_persist(self):
        self.execute("var a = 1;")
        self.execute("print a + 1;")
        self.execute("a = \"x\"; print a;")
        self.assertEqual(["x"], self.out.getvalue().splitlines())


if __name__ == '__main__':
    unittest.main()
