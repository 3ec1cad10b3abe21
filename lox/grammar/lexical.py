"""Lexical analysis for the lox language. Converts raw source text into a flat list of Tokens in a single left-to-right
pass, with at most two characters of lookahead.

Lexical grammar:

```
<number>     ::= <digit>+ ( "." <digit>+ )?        ; a "." not followed by a digit is scanned as a DOT token
<string>     ::= '"' <char>* '"'                   ; may span lines, no escape sequences
<identifier> ::= <alpha> ( <alpha> | <digit> )*    ; <alpha> includes "_"
<comment>    ::= "//" <char>*                      ; runs to end of line, discarded
```

Scanning is fail-soft: unterminated strings and unexpected characters are reported to the error handler and the
scanner carries on, so a single pass surfaces every lexical error in the source.
"""

from lox.grammar.token import KEYWORDS, Token, TokenKind


class Scanner:
    """Single-use scanner over one source string."""
    SINGLE = {
        "(": TokenKind.LEFT_PAREN,
        ")": TokenKind.RIGHT_PAREN,
        "{": TokenKind.LEFT_BRACE,
        "}": TokenKind.RIGHT_BRACE,
        ",": TokenKind.COMMA,
        ".": TokenKind.DOT,
        "-": TokenKind.MINUS,
        "+": TokenKind.PLUS,
        ";": TokenKind.SEMICOLON,
        "*": TokenKind.STAR,
    }
    # char: (kind if followed by "=", kind otherwise)
    DOUBLE = {
        "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
        "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
        "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
        ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    }
    WHITESPACE = " \r\t"

    def __init__(self, source, error_handler):
        self.source = source
        self.error_handler = error_handler

        self.tokens = []
        self.start = 0    # first char of the lexeme being scanned
        self.current = 0  # char currently being considered
        self.line = 1
        self.start_line = 1  # line the lexeme being scanned starts on

    def scan_tokens(self):
        """Scans the whole source and returns its tokens, always terminated by an EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.start_line = self.line
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])

        elif char in Scanner.DOUBLE:
            matched, unmatched = Scanner.DOUBLE[char]
            self.add_token(matched if self.match("=") else unmatched)

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenKind.SLASH)

        elif char in Scanner.WHITESPACE:
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif Scanner.is_digit(char):
            self.number()

        elif Scanner.is_alpha(char):
            self.identifier()

        else:
            self.error_handler.error(self.line, "Unexpected character.")

    def string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.error_handler.error(self.line, "Unterminated string.")
            return

        self.advance()  # closing "
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while Scanner.is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            self.advance()  # consume the "."
            while Scanner.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while Scanner.is_alpha(self.peek()) or Scanner.is_digit(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

    def is_at_end(self):
        return self.current >= len(self.source)

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the current char only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.start_line))

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return char.isalpha() or char == "_"
