"""Diagnostic printer for lox syntax trees. Renders any node as a fully parenthesized prefix form, reusing operator
lexemes, e.g. "-123 * (45.67)" is rendered as "(* (- 123) (group 45.67))". Used by the --ast command-line flag.
"""

from lox.grammar import syntax
from lox.lang.value import stringify


class AstPrinter:
    """Stateless: printing the same tree twice always gives the same text."""

    def print(self, node):
        if isinstance(node, syntax.Expr):
            return self.print_expr(node)
        return self.print_stmt(node)

    def print_expr(self, expr):
        if isinstance(expr, syntax.Literal):
            if isinstance(expr.value, str):
                return f"\"{expr.value}\""
            return stringify(expr.value)

        elif isinstance(expr, syntax.Grouping):
            return self.parenthesize("group", expr.expression)

        elif isinstance(expr, syntax.Unary):
            return self.parenthesize(expr.operator.lexeme, expr.right)

        elif isinstance(expr, (syntax.Binary, syntax.Logical)):
            return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

        elif isinstance(expr, syntax.Variable):
            return expr.name.lexeme

        elif isinstance(expr, syntax.Assign):
            return self.parenthesize("=", expr.name.lexeme, expr.value)

        raise TypeError(f"cannot print {type(expr).__name__}")

    def print_stmt(self, stmt):
        if isinstance(stmt, syntax.Expression):
            return self.parenthesize(";", stmt.expression)

        elif isinstance(stmt, syntax.Print):
            return self.parenthesize("print", stmt.expression)

        elif isinstance(stmt, syntax.Var):
            return self.parenthesize("var", stmt.name.lexeme, stmt.initializer)

        elif isinstance(stmt, syntax.Block):
            return self.parenthesize("block", *stmt.statements)

        elif isinstance(stmt, syntax.If):
            if stmt.else_branch is None:
                return self.parenthesize("if", stmt.condition, stmt.then_branch)
            return self.parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

        elif isinstance(stmt, syntax.While):
            return self.parenthesize("while", stmt.condition, stmt.body)

        raise TypeError(f"cannot print {type(stmt).__name__}")

    def parenthesize(self, name, *parts):
        """Parts are nodes (printed recursively) or plain strings (printed as is)."""
        result = f"({name}"
        for part in parts:
            result += " " + (part if isinstance(part, str) else self.print(part))
        return result + ")"
