import unittest

from lox.grammar import syntax
from lox.grammar.printer import AstPrinter
from lox.grammar.token import Token, TokenKind


def token(kind, lexeme):
    return Token(kind, lexeme, None, 1)


class AstPrinterTestCase(unittest.TestCase):

    def setUp(self):
        self.printer = AstPrinter()

    def test_expression(self):
        expr = syntax.Binary(
            syntax.Unary(token(TokenKind.MINUS, "-"), syntax.Literal(123.0)),
            token(TokenKind.STAR, "*"),
            syntax.Grouping(syntax.Literal(45.67))
        )
        self.assertEqual("(* (- 123) (group 45.67))", self.printer.print(expr))

    def test_stable(self):
        expr = syntax.Logical(
            syntax.Variable(token(TokenKind.IDENTIFIER, "a")),
            token(TokenKind.OR, "or"),
            syntax.Assign(token(TokenKind.IDENTIFIER, "b"), syntax.Literal("text"))
        )
        first = self.printer.print(expr)

        self.assertEqual("(or a (= b \"text\"))", first)
        for __ in range(3):
            self.assertEqual(first, self.printer.print(expr))
        self.assertEqual(first, AstPrinter().print(expr))

    def test_literals(self):
        cases = {
            "nil": syntax.Literal(None),
            "true": syntax.Literal(True),
            "false": syntax.Literal(False),
            "2.5": syntax.Literal(2.5),
            "\"\"": syntax.Literal(""),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, self.printer.print(case))

    def test_statements(self):
        condition = syntax.Variable(token(TokenKind.IDENTIFIER, "c"))
        say = syntax.Print(syntax.Literal(1.0))

        cases = {
            "(if c (print 1))": syntax.If(condition, say),
            "(if-else c (print 1) (block))": syntax.If(condition, say, syntax.Block(())),
            "(while c (block (print 1) (; c)))": syntax.While(condition, syntax.Block((say, syntax.Expression(condition)))),
            "(var x nil)": syntax.Var(token(TokenKind.IDENTIFIER, "x"), syntax.Literal(None)),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, self.printer.print(case))

    def test_unknown_node(self):
        self.assertRaises(TypeError, self.printer.print, object())


if __name__ == '__main__':
    unittest.main()
