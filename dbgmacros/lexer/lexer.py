"""
ES module lexer - Tokenizes JavaScript source code into tokens.

Handles:
- Identifiers and keywords
- String literals ('...', "...") and template strings without substitutions
- Numbers (decimal, hex, binary, octal, fractions, exponents)
- Line and block comments
- Punctuators (longest match)

Regular expression literals are not recognized; ``/`` is always division.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, List


class TokenType(Enum):
    """Token types."""
    NAME = auto()        # identifier (including contextual words: from, as, of)
    KEYWORD = auto()     # reserved word
    STRING = auto()      # 'text', "text"
    TEMPLATE = auto()    # `text`
    NUMBER = auto()      # 123, 0xff, 1.5e3
    PUNCT = auto()       # operators and delimiters

    # End of file
    EOF = auto()


KEYWORDS = frozenset({
    'break', 'case', 'catch', 'class', 'const', 'continue', 'debugger',
    'default', 'delete', 'do', 'else', 'export', 'extends', 'false',
    'finally', 'for', 'function', 'if', 'import', 'in', 'instanceof',
    'let', 'new', 'null', 'return', 'super', 'switch', 'this', 'throw',
    'true', 'try', 'typeof', 'var', 'void', 'while', 'with', 'yield',
})

# Longest first so that maximal munch works with a simple prefix scan
PUNCTUATORS = sorted([
    '>>>=', '...', '===', '!==', '**=', '<<=', '>>=', '>>>', '&&=', '||=', '??=',
    '=>', '==', '!=', '<=', '>=', '&&', '||', '??', '?.', '++', '--',
    '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '**', '<<', '>>',
    '{', '}', '(', ')', '[', ']', ';', ',', '.', '<', '>', '+', '-', '*',
    '/', '%', '&', '|', '^', '!', '~', '?', ':', '=', '@',
], key=len, reverse=True)

SIMPLE_ESCAPES = {
    'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0',
}


@dataclass
class Token:
    """Represents a single token."""
    type: TokenType
    value: any
    line: int
    column: int
    raw: Optional[str] = None
    newline_before: bool = False  # A line break separates this token from the previous one

    def is_punct(self, *values: str) -> bool:
        return self.type == TokenType.PUNCT and self.value in values

    def is_keyword(self, *values: str) -> bool:
        return self.type == TokenType.KEYWORD and self.value in values

    def is_name(self, *values: str) -> bool:
        return self.type == TokenType.NAME and (not values or self.value in values)

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """Tokenizes ES module source code."""

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.saw_newline = False

    def error(self, message: str):
        """Raise a lexer error with location information."""
        raise SyntaxError(f"{self.filename}:{self.line}:{self.column}: {message}")

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
            self.saw_newline = True
        else:
            self.column += 1

        return ch

    def skip_whitespace_and_comments(self):
        """Skip whitespace, ``// line`` and ``/* block */`` comments."""
        while self.peek() is not None:
            ch = self.peek()
            if ch in ' \t\n\r\f\v\ufeff\xa0\u2028\u2029':
                if ch in '\u2028\u2029':
                    self.saw_newline = True
                self.advance()
            elif ch == '/' and self.peek(1) == '/':
                while self.peek() is not None and self.peek() != '\n':
                    self.advance()
            elif ch == '/' and self.peek(1) == '*':
                start_line, start_col = self.line, self.column
                self.advance()
                self.advance()
                while self.peek() is not None and not (self.peek() == '*' and self.peek(1) == '/'):
                    self.advance()
                if self.peek() is None:
                    self.error(f"Unterminated comment starting at {start_line}:{start_col}")
                self.advance()
                self.advance()
            else:
                break

    def read_escape(self) -> str:
        """Read the character(s) after a backslash inside a string."""
        ch = self.advance()
        if ch is None:
            self.error("Unterminated escape sequence")
        if ch in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[ch]
        if ch == 'x':
            digits = (self.advance() or '') + (self.advance() or '')
            try:
                return chr(int(digits, 16))
            except ValueError:
                self.error(f"Invalid hex escape: \\x{digits}")
        if ch == 'u':
            if self.peek() == '{':
                self.advance()
                digits = []
                while self.peek() is not None and self.peek() != '}':
                    digits.append(self.advance())
                self.advance()
                digits = ''.join(digits)
            else:
                digits = ''.join(self.advance() or '' for _ in range(4))
            try:
                return chr(int(digits, 16))
            except ValueError:
                self.error(f"Invalid unicode escape: \\u{digits}")
        if ch == '\r' and self.peek() == '\n':
            self.advance()
            return ''
        if ch == '\n':
            # Line continuation
            return ''
        return ch

    def read_string(self) -> tuple:
        """Read a quoted string literal. Returns (value, raw)."""
        start_line = self.line
        start_col = self.column
        start = self.pos
        quote = self.advance()
        chars = []

        while self.peek() is not None and self.peek() != quote:
            ch = self.peek()
            if ch == '\\':
                self.advance()
                chars.append(self.read_escape())
            elif ch == '\n':
                self.error(f"Unterminated string starting at {start_line}:{start_col}")
            else:
                chars.append(self.advance())

        if self.peek() != quote:
            self.error(f"Unterminated string starting at {start_line}:{start_col}")

        self.advance()  # closing quote
        return ''.join(chars), self.source[start:self.pos]

    def read_template(self) -> tuple:
        """Read a template string. Substitutions (``${...}``) are not supported."""
        start_line = self.line
        start_col = self.column
        start = self.pos
        self.advance()  # opening backtick
        chars = []

        while self.peek() is not None and self.peek() != '`':
            ch = self.peek()
            if ch == '\\':
                self.advance()
                chars.append(self.read_escape())
            elif ch == '$' and self.peek(1) == '{':
                self.error("Template literal substitutions are not supported")
            else:
                chars.append(self.advance())

        if self.peek() != '`':
            self.error(f"Unterminated template starting at {start_line}:{start_col}")

        self.advance()
        return ''.join(chars), self.source[start:self.pos]

    def read_number(self) -> tuple:
        """Read a number (decimal, hex, binary or octal). Returns (value, raw)."""
        start = self.pos

        if self.peek() == '0' and self.peek(1) and self.peek(1) in 'xXbBoO':
            base = {'x': 16, 'b': 2, 'o': 8}[self.peek(1).lower()]
            self.advance()
            self.advance()
            while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
                self.advance()
            raw = self.source[start:self.pos]
            try:
                return int(raw[2:].replace('_', ''), base), raw
            except ValueError:
                self.error(f"Invalid number: {raw}")

        while self.peek() and (self.peek().isdigit() or self.peek() == '_'):
            self.advance()
        is_float = False
        if self.peek() == '.':
            is_float = True
            self.advance()
            while self.peek() and (self.peek().isdigit() or self.peek() == '_'):
                self.advance()
        if self.peek() and self.peek() in 'eE':
            is_float = True
            self.advance()
            if self.peek() and self.peek() in '+-':
                self.advance()
            if not (self.peek() and self.peek().isdigit()):
                self.error("Invalid number: missing exponent digits")
            while self.peek() and self.peek().isdigit():
                self.advance()

        raw = self.source[start:self.pos]
        if self.peek() and self.is_identifier_start(self.peek()):
            self.error(f"Identifier directly after number: {raw}{self.peek()}")

        text = raw.replace('_', '')
        try:
            return (float(text) if is_float else int(text)), raw
        except ValueError:
            self.error(f"Invalid number: {raw}")

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        while self.peek() and self.is_identifier_part(self.peek()):
            chars.append(self.advance())
        return ''.join(chars)

    @staticmethod
    def is_identifier_start(ch: str) -> bool:
        return ch.isalpha() or ch in '_$'

    @staticmethod
    def is_identifier_part(ch: str) -> bool:
        return ch.isalnum() or ch in '_$'

    def add_token(self, token_type: TokenType, value, line: int, col: int, raw: str = None):
        self.tokens.append(Token(token_type, value, line, col, raw, self.saw_newline))
        self.saw_newline = False

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source code."""
        while True:
            self.skip_whitespace_and_comments()

            if self.pos >= len(self.source):
                break

            ch = self.peek()
            line = self.line
            col = self.column

            if ch in '\'"':
                value, raw = self.read_string()
                self.add_token(TokenType.STRING, value, line, col, raw)
            elif ch == '`':
                value, raw = self.read_template()
                self.add_token(TokenType.TEMPLATE, value, line, col, raw)
            elif ch.isdigit() or (ch == '.' and self.peek(1) and self.peek(1).isdigit()):
                value, raw = self.read_number()
                self.add_token(TokenType.NUMBER, value, line, col, raw)
            elif self.is_identifier_start(ch):
                name = self.read_identifier()
                token_type = TokenType.KEYWORD if name in KEYWORDS else TokenType.NAME
                self.add_token(token_type, name, line, col, name)
            else:
                for punct in PUNCTUATORS:
                    if self.source.startswith(punct, self.pos):
                        # `a?.5:b` is a conditional, not optional chaining
                        if punct == '?.' and self.peek(2) and self.peek(2).isdigit():
                            continue
                        for _ in punct:
                            self.advance()
                        self.add_token(TokenType.PUNCT, punct, line, col, punct)
                        break
                else:
                    self.error(f"Unexpected character: {ch!r}")

        self.add_token(TokenType.EOF, None, self.line, self.column)
        return self.tokens


def tokenize(source: str, filename: str = "<input>") -> List[Token]:
    """Convenience function to tokenize source code."""
    lexer = Lexer(source, filename)
    return lexer.tokenize()
