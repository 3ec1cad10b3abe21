"""Tree-walking evaluator for the lox language. Walks the statements produced by the parser, reading and mutating a
chain of Environments. The current environment is pushed on block entry and popped on block exit, so it always behaves
as an implicit stack.
"""

import math
import sys

from lox.grammar import syntax
from lox.grammar.token import TokenKind
from lox.lang.environment import Environment
from lox.lang.error import LoxRuntimeError
from lox.lang.value import is_equal, is_number, is_truthy, stringify


class Interpreter:
    """Evaluates lox programs against one global environment, which persists across calls to interpret. out is the
    stream print statements write to (defaults to sys.stdout at the time of printing).
    """

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.out = out

        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements):
        """Executes statements in order. The first runtime error aborts the rest and is reported once."""
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoxRuntimeError as error:
            self.error_handler.runtime_error(error)

    # statements

    def execute(self, stmt):
        if isinstance(stmt, syntax.Expression):
            self.evaluate(stmt.expression)

        elif isinstance(stmt, syntax.Print):
            value = self.evaluate(stmt.expression)
            print(stringify(value), file=self.out if self.out is not None else sys.stdout)

        elif isinstance(stmt, syntax.Var):
            self.environment.define(stmt.name.lexeme, self.evaluate(stmt.initializer))

        elif isinstance(stmt, syntax.Block):
            self.execute_block(stmt.statements, Environment(self.environment))

        elif isinstance(stmt, syntax.If):
            if is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)

        elif isinstance(stmt, syntax.While):
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)

        else:
            raise TypeError(f"cannot execute {type(stmt).__name__}")

    def execute_block(self, statements, environment):
        """Executes statements with environment as the current environment, restoring the previous one however the
        block is exited.
        """
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # expressions

    def evaluate(self, expr):
        if isinstance(expr, syntax.Literal):
            return expr.value

        elif isinstance(expr, syntax.Grouping):
            return self.evaluate(expr.expression)

        elif isinstance(expr, syntax.Unary):
            return self._unary(expr)

        elif isinstance(expr, syntax.Binary):
            return self._binary(expr)

        elif isinstance(expr, syntax.Logical):
            left = self.evaluate(expr.left)
            if expr.operator.kind is TokenKind.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)

        elif isinstance(expr, syntax.Variable):
            return self.environment.get(expr.name)

        elif isinstance(expr, syntax.Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value

        raise TypeError(f"cannot evaluate {type(expr).__name__}")

    def _unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.kind is TokenKind.BANG:
            return not is_truthy(right)

        # TokenKind.MINUS
        Interpreter.check_number_operand(expr.operator, right)
        return -right

    def _binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind is TokenKind.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind is TokenKind.BANG_EQUAL:
            return not is_equal(left, right)

        if kind is TokenKind.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(expr.operator, "Operands must be two numbers or two strings.")

        Interpreter.check_number_operands(expr.operator, left, right)

        if kind is TokenKind.MINUS:
            return left - right
        if kind is TokenKind.STAR:
            return left * right
        if kind is TokenKind.SLASH:
            return Interpreter.divide(left, right)
        if kind is TokenKind.GREATER:
            return left > right
        if kind is TokenKind.GREATER_EQUAL:
            return left >= right
        if kind is TokenKind.LESS:
            return left < right
        if kind is TokenKind.LESS_EQUAL:
            return left <= right

        raise LoxRuntimeError(expr.operator, f"Unknown binary operator '{expr.operator.lexeme}'.")

    @staticmethod
    def divide(left, right):
        """Divides with IEEE semantics: x / 0 is a signed infinity and 0 / 0 is nan."""
        if right == 0:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    @staticmethod
    def check_number_operand(operator, operand):
        if not is_number(operand):
            raise LoxRuntimeError(operator, "Operand must be a number.")

    @staticmethod
    def check_number_operands(operator, left, right):
        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError(operator, "Operands must be numbers.")
