"""
Lexical Analyzer (Lexer) for C-like source snippets

Converts C, C++ or Java source text into a flat stream of classified tokens.
The same keyword and operator tables are used whatever the language tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Set
import logging
import re
import string

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token categories produced by the lexer"""
    KEYWORD = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    NUMBER = auto()
    STRING = auto()
    CHARACTER = auto()
    PREPROCESSOR = auto()
    EOF = auto()
    UNKNOWN = auto()


@dataclass
class Token:
    """Represents a lexical token"""
    type: TokenType
    value: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {repr(self.value)}, {self.line}:{self.column})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.name,
            "value": self.value,
            "line": self.line,
            "column": self.column,
        }


class LexError(Exception):
    """Lexer error with line and column information"""
    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at {line}:{column}")

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnterminatedComment(LexError):
    pass


class InvalidNumber(LexError):
    pass


class UnterminatedLiteral(LexError):
    pass


class NewlineInLiteral(LexError):
    pass


class InvalidCharLiteral(LexError):
    pass


class UnknownCharacter(LexError):
    pass


@dataclass
class SourcePosition:
    """Cursor over the source text with 1-based line/column counters"""
    offset: int = 0
    line: int = 1
    column: int = 1

    def step(self, char: str) -> None:
        self.offset += 1
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1


# C, C++ and Java reserved words plus a few library identifiers
KEYWORDS: Set[str] = {
    # shared / JavaScript-flavoured declarations
    'let', 'const', 'var', 'if', 'else', 'for', 'while', 'do', 'function',
    'return', 'class', 'new', 'import', 'export', 'from', 'switch', 'case',
    'default', 'break', 'continue', 'try', 'catch', 'finally', 'throw',
    'async', 'await', 'public', 'private', 'protected', 'static', 'void',
    'interface', 'implements', 'extends', 'super', 'this', 'true', 'false',
    'null', 'undefined',
    # C
    'int', 'float', 'double', 'char', 'long', 'short', 'unsigned', 'signed',
    'struct', 'union', 'enum', 'typedef', 'sizeof', 'goto', 'volatile',
    'extern', 'register', 'auto', 'restrict', 'inline',
    # C++
    'bool', 'namespace', 'using', 'template', 'typename', 'virtual',
    'override', 'final', 'delete', 'explicit', 'friend', 'mutable', 'nullptr',
    'operator', 'reinterpret_cast', 'static_cast', 'dynamic_cast',
    'const_cast', 'noexcept',
    # Java
    'package', 'boolean', 'byte', 'instanceof', 'native', 'strictfp',
    'synchronized', 'throws', 'transient', 'abstract', 'assert',
    # library identifiers
    'String', 'std', 'cout', 'cin', 'endl',
}

DIRECTIVES: Set[str] = {
    '#include', '#define', '#undef', '#ifdef', '#ifndef', '#if', '#elif',
    '#else', '#endif', '#pragma',
}

OPERATORS: Set[str] = {
    '+', '-', '*', '/', '%',
    '=', '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', '<<=', '>>=',
    '==', '===', '!=', '!==', '<', '>', '<=', '>=',
    '&&', '||', '!',
    '++', '--',
    '&', '|', '^', '~', '<<', '>>',
    '?', ':',
    '.', '->', '::', '=>',
}

# ':' is shadowed by the operator table
PUNCTUATION: Set[str] = {'{', '}', '(', ')', '[', ']', ';', ',', ':'}

ESCAPES: Dict[str, str] = {
    'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', "'": "'", '"': '"',
}

NUMBER_RE = re.compile(r'(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?', re.ASCII)

# Character classes are ASCII only
WHITESPACE = ' \t\r\n\f\v'
IDENT_START = string.ascii_letters + '_'
IDENT_CHARS = IDENT_START + string.digits


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and '0' <= char <= '9'


def _is_ident_start(char: Optional[str]) -> bool:
    return char is not None and char in IDENT_START


def _is_ident_char(char: Optional[str]) -> bool:
    return char is not None and char in IDENT_CHARS


class Lexer:
    """Lexical analyzer for C-like source code"""

    def __init__(self, source: str):
        self.source = source
        self.pos = SourcePosition()
        self.tokens: List[Token] = []

    def current_char(self) -> Optional[str]:
        """Get current character without consuming"""
        if self.pos.offset >= len(self.source):
            return None
        return self.source[self.pos.offset]

    def peek_char(self, offset: int = 1) -> Optional[str]:
        """Peek ahead at character"""
        idx = self.pos.offset + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def advance(self) -> Optional[str]:
        """Consume and return current character"""
        char = self.current_char()
        if char is not None:
            self.pos.step(char)
        return char

    def _emit(self, kind: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(kind, value, line, column))

    def skip_line_comment(self) -> None:
        """Skip single-line comment (//...)"""
        while self.current_char() is not None and self.current_char() != '\n':
            self.advance()

    def skip_block_comment(self) -> None:
        """Skip multi-line comment (/* ... */)"""
        line, column = self.pos.line, self.pos.column
        self.advance()  # /
        self.advance()  # *
        while self.current_char() is not None:
            if self.current_char() == '*' and self.peek_char() == '/':
                self.advance()
                self.advance()
                return
            self.advance()
        raise UnterminatedComment("Unterminated block comment", line, column)

    def read_directive(self, line: int, column: int) -> None:
        """Read `#word`; known directives swallow the rest of the line."""
        word = self.advance()
        while _is_ident_start(self.current_char()):
            word += self.advance()

        if word not in DIRECTIVES:
            self._emit(TokenType.UNKNOWN, word, line, column)
            return

        self._emit(TokenType.PREPROCESSOR, word, line, column)
        # Directive arguments (header names, macro bodies) are not tokenized.
        while self.current_char() is not None and self.current_char() != '\n':
            self.advance()

    def match_operator(self) -> Optional[str]:
        """Longest operator starting at the cursor, if any"""
        start = self.pos.offset
        for width in (3, 2, 1):
            candidate = self.source[start:start + width]
            if len(candidate) == width and candidate in OPERATORS:
                return candidate
        return None

    def read_number(self, line: int, column: int) -> str:
        """Read a decimal number literal with optional fraction and exponent"""
        num_str = ""
        seen_dot = False

        while self.current_char() is not None:
            char = self.current_char()
            if _is_digit(char):
                num_str += self.advance()
            elif char == '.' and not seen_dot:
                seen_dot = True
                num_str += self.advance()
            else:
                break

        # The exponent is committed to as soon as a digit or a sign follows
        # the 'e'; the grammar check below rejects a sign with no digits.
        nxt = self.peek_char()
        if self.current_char() in ('e', 'E') and (_is_digit(nxt) or nxt in ('+', '-')):
            num_str += self.advance()
            if self.current_char() in ('+', '-'):
                num_str += self.advance()
            while _is_digit(self.current_char()):
                num_str += self.advance()

        if not NUMBER_RE.fullmatch(num_str):
            raise InvalidNumber(f"Invalid number format near '{num_str}'", line, column)
        return num_str

    def read_identifier(self) -> str:
        """Read identifier or keyword"""
        ident = ""
        while _is_ident_char(self.current_char()):
            ident += self.advance()
        return ident

    def read_literal(self, line: int, column: int) -> str:
        """Read a quoted literal and return its decoded body"""
        quote = self.advance()
        result = ""
        while True:
            char = self.current_char()
            if char is None:
                raise UnterminatedLiteral(f"Unterminated literal starting with {quote}", line, column)
            if char == '\n':
                raise NewlineInLiteral("Newline in string or character literal", line, column)
            if char == quote:
                self.advance()
                return result
            if char == '\\':
                nxt = self.peek_char()
                if nxt is None:
                    self.advance()
                    raise UnterminatedLiteral(f"Unterminated literal starting with {quote}", line, column)
                if nxt == '\n':
                    self.advance()
                    raise NewlineInLiteral("Newline in string or character literal", line, column)
                self.advance()
                self.advance()
                # Unrecognized escapes are kept as written.
                result += ESCAPES.get(nxt, '\\' + nxt)
                continue
            result += self.advance()

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source; raises a LexError subclass on bad input"""
        self.tokens = []
        self.pos = SourcePosition()

        while self.current_char() is not None:
            char = self.current_char()
            line, column = self.pos.line, self.pos.column

            if char in WHITESPACE:
                self.advance()
                continue

            # Comments
            if char == '/' and self.peek_char() == '/':
                self.skip_line_comment()
                continue
            if char == '/' and self.peek_char() == '*':
                self.skip_block_comment()
                continue

            if char == '#':
                self.read_directive(line, column)
                continue

            # ".5" is a number, not member access
            starts_fraction = char == '.' and _is_digit(self.peek_char())

            op = None if starts_fraction else self.match_operator()
            if op is not None:
                for _ in op:
                    self.advance()
                self._emit(TokenType.OPERATOR, op, line, column)
                continue

            if char in PUNCTUATION:
                self.advance()
                self._emit(TokenType.PUNCTUATION, char, line, column)
                continue

            if _is_digit(char) or starts_fraction:
                self._emit(TokenType.NUMBER, self.read_number(line, column), line, column)
                continue

            if _is_ident_start(char):
                ident = self.read_identifier()
                kind = TokenType.KEYWORD if ident in KEYWORDS else TokenType.IDENTIFIER
                self._emit(kind, ident, line, column)
                continue

            if char in ('"', "'"):
                value = self.read_literal(line, column)
                if char == '"':
                    self._emit(TokenType.STRING, value, line, column)
                elif len(value) == 1:
                    self._emit(TokenType.CHARACTER, value, line, column)
                else:
                    raise InvalidCharLiteral(
                        f"Character literal must hold exactly one character, got {len(value)}",
                        line,
                        column,
                    )
                continue

            self.advance()
            raise UnknownCharacter(f"Unknown character '{char}'", line, column)

        self._emit(TokenType.EOF, 'EOF', self.pos.line, self.pos.column)
        logger.debug("tokenized %d characters into %d tokens", len(self.source), len(self.tokens))
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize source text with a fresh Lexer"""
    return Lexer(source).tokenize()
