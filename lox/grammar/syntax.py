"""Abstract syntax tree for the lox language. Nodes are immutable and carry no behavior: the parser builds them (see
grammar/parser.py) and the interpreter walks them (see lang/interpreter.py).

```
<expr> ::= Literal(value)                  ; float, str, True, False or None
         | Grouping(expression)
         | Unary(operator, right)          ; "!" or "-"
         | Binary(left, operator, right)
         | Logical(left, operator, right)  ; "and" or "or"
         | Variable(name)
         | Assign(name, value)

<stmt> ::= Expression(expression)
         | Print(expression)
         | Var(name, initializer)
         | Block(statements)
         | If(condition, then_branch, else_branch)
         | While(condition, body)
```

There is no node for "for" loops: the parser desugars them into Blocks and Whiles.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from lox.grammar.token import Token


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: object


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Expr


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt
