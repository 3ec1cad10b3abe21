"""Recursive-descent parser for the lox language. Consumes the scanner's tokens with one token of lookahead and produces
a list of statements. Formally, the grammar is

```
<program>     ::= <declaration>* EOF
<declaration> ::= <var_decl> | <statement>
<var_decl>    ::= "var" IDENTIFIER ( "=" <expression> )? ";"
<statement>   ::= <expr_stmt> | <for_stmt> | <if_stmt> | <print_stmt> | <while_stmt> | <block>
<expr_stmt>   ::= <expression> ";"
<for_stmt>    ::= "for" "(" ( <var_decl> | <expr_stmt> | ";" ) <expression>? ";" <expression>? ")" <statement>
<if_stmt>     ::= "if" "(" <expression> ")" <statement> ( "else" <statement> )?
<print_stmt>  ::= "print" <expression> ";"
<while_stmt>  ::= "while" "(" <expression> ")" <statement>
<block>       ::= "{" <declaration>* "}"

<expression>  ::= <assignment>
<assignment>  ::= IDENTIFIER "=" <assignment> | <logic_or>       ; right-associative
<logic_or>    ::= <logic_and> ( "or" <logic_and> )*
<logic_and>   ::= <equality> ( "and" <equality> )*
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <primary>
<primary>     ::= "true" | "false" | "nil" | NUMBER | STRING | "(" <expression> ")" | IDENTIFIER
```

Every binary level is left-associative. "for" loops have no node of their own: they are desugared into an equivalent
Block/While combination.

On a grammar violation, the error is reported right away and the parser synchronizes to the next statement boundary,
so that one pass reports every independent error in the source.
"""

from lox.grammar import syntax
from lox.grammar.token import TokenKind
from lox.lang.error import ParseError


class Parser:
    """Single-use parser over one list of tokens (which must end with an EOF token)."""
    # kinds that start a new statement: safe places to resume after an error
    BOUNDARIES = {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }

    def __init__(self, tokens, error_handler):
        self.tokens = tokens
        self.error_handler = error_handler
        self.current = 0

    def parse(self):
        """Returns the program's statements. Declarations that failed to parse are left out, so the result should be
        discarded if the error handler reported any error.
        """
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # statements

    def declaration(self):
        try:
            if self.match(TokenKind.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def var_declaration(self):
        name = self.consume(TokenKind.IDENTIFIER, "Expect variable name.")

        initializer = syntax.Literal(None)
        if self.match(TokenKind.EQUAL):
            initializer = self.expression()

        self.consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.")
        return syntax.Var(name, initializer)

    def statement(self):
        if self.match(TokenKind.FOR):
            return self.for_statement()
        if self.match(TokenKind.IF):
            return self.if_statement()
        if self.match(TokenKind.PRINT):
            return self.print_statement()
        if self.match(TokenKind.WHILE):
            return self.while_statement()
        if self.match(TokenKind.LEFT_BRACE):
            return syntax.Block(tuple(self.block()))
        return self.expression_statement()

    def for_statement(self):
        """Desugars "for (init; cond; incr) body" into "{ init; while (cond) { body; incr; } }"."""
        self.consume(TokenKind.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenKind.SEMICOLON):
            initializer = None
        elif self.match(TokenKind.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenKind.SEMICOLON):
            condition = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenKind.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = syntax.Block((body, syntax.Expression(increment)))
        if condition is None:
            condition = syntax.Literal(True)
        body = syntax.While(condition, body)
        if initializer is not None:
            body = syntax.Block((initializer, body))

        return body

    def if_statement(self):
        self.consume(TokenKind.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenKind.ELSE):  # binds to the nearest if
            else_branch = self.statement()

        return syntax.If(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return syntax.Print(value)

    def while_statement(self):
        self.consume(TokenKind.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after condition.")
        return syntax.While(condition, self.statement())

    def block(self):
        """Parses the declarations of a block whose "{" has already been consumed."""
        statements = []
        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return syntax.Expression(expr)

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, syntax.Variable):
                return syntax.Assign(expr.name, value)

            # reported but not raised: the parser is not confused, so there is no need to synchronize
            self.error(equals, "Invalid assignment target.")

        return expr

    def logic_or(self):
        return self._left_assoc(syntax.Logical, self.logic_and, TokenKind.OR)

    def logic_and(self):
        return self._left_assoc(syntax.Logical, self.equality, TokenKind.AND)

    def equality(self):
        return self._left_assoc(syntax.Binary, self.comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def comparison(self):
        kinds = (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL)
        return self._left_assoc(syntax.Binary, self.term, *kinds)

    def term(self):
        return self._left_assoc(syntax.Binary, self.factor, TokenKind.MINUS, TokenKind.PLUS)

    def factor(self):
        return self._left_assoc(syntax.Binary, self.unary, TokenKind.SLASH, TokenKind.STAR)

    def unary(self):
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            return syntax.Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenKind.FALSE):
            return syntax.Literal(False)
        if self.match(TokenKind.TRUE):
            return syntax.Literal(True)
        if self.match(TokenKind.NIL):
            return syntax.Literal(None)

        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return syntax.Literal(self.previous().literal)

        if self.match(TokenKind.IDENTIFIER):
            return syntax.Variable(self.previous())

        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return syntax.Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    def _left_assoc(self, node_cls, operand, *kinds):
        """Parses operand ( kind operand )*, folding into a left-leaning tree of node_cls."""
        expr = operand()
        while self.match(*kinds):
            operator = self.previous()
            expr = node_cls(expr, operator, operand())
        return expr

    # token helpers

    def match(self, *kinds):
        """Consumes the current token if it is of one of kinds."""
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, message):
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind is TokenKind.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, message):
        """Reports message at token and returns (does not raise) the matching ParseError."""
        self.error_handler.parse_error(token, message)
        return ParseError(token, message)

    def synchronize(self):
        """Discards tokens until the start of the next statement: just past a ";" or right before a keyword that begins
        a statement.
        """
        self.advance()

        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in Parser.BOUNDARIES:
                return
            self.advance()
