# src/monkey/lexer.py
from .monkey_token import *

_WHITESPACE = (" ", "\t", "\r", "\n")

# Single-character tokens that never start a longer operator
_SINGLE_CHAR_TOKENS = {
    "+": PLUS,
    "-": MINUS,
    "*": STAR,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    ":": COLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
}


def is_letter(ch):
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch):
    return "0" <= ch <= "9"


class Lexer:
    def __init__(self, source_code):
        self.input = source_code
        self.position = 0
        self.read_position = 0
        self.ch = ""
        # Position of self.ch; the first read_char moves to line 1, column 1
        self.line = 1
        self.column = 0
        self.read_char()

    def read_char(self):
        if self.ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        if self.read_position >= len(self.input):
            self.ch = ""
        else:
            self.ch = self.input[self.read_position]

        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        if self.read_position >= len(self.input):
            return ""
        return self.input[self.read_position]

    def next_token(self):
        self.skip_whitespace()

        line = self.line
        column = self.column

        if self.ch == "=":
            if self.peek_char() == "=":
                ch = self.ch
                self.read_char()
                tok = Token(EQ, ch + self.ch, line, column)
            else:
                tok = Token(ASSIGN, self.ch, line, column)
        elif self.ch == "!":
            if self.peek_char() == "=":
                ch = self.ch
                self.read_char()
                tok = Token(NOT_EQ, ch + self.ch, line, column)
            else:
                tok = Token(BANG, self.ch, line, column)
        elif self.ch == '"':
            return Token(STRING, self.read_string(), line, column)
        elif self.ch in _SINGLE_CHAR_TOKENS:
            tok = Token(_SINGLE_CHAR_TOKENS[self.ch], self.ch, line, column)
        elif self.ch == "":
            # Input exhausted; keep handing out EOF on every later call
            return Token(EOF, "", line, column)
        elif is_letter(self.ch):
            literal = self.read_identifier()
            return Token(lookup_ident(literal), literal, line, column)
        elif is_digit(self.ch):
            return Token(INT, self.read_number(), line, column)
        else:
            tok = Token(ILLEGAL, self.ch, line, column)

        self.read_char()
        return tok

    def tokens(self):
        """Yield every token up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return

    def skip_whitespace(self):
        while self.ch in _WHITESPACE:
            self.read_char()

    def read_identifier(self):
        start = self.position
        while is_letter(self.ch):
            self.read_char()
        return self.input[start:self.position]

    def read_number(self):
        start = self.position
        while is_digit(self.ch):
            self.read_char()
        return self.input[start:self.position]

    def read_string(self):
        # Unterminated strings run to the end of input
        start = self.position + 1
        while True:
            self.read_char()
            if self.ch == '"' or self.ch == "":
                break
        literal = self.input[start:self.position]
        if self.ch == '"':
            self.read_char()
        return literal
