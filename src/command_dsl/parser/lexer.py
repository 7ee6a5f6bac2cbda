"""
lexer.py

PURPOSE: Tokenize command file source for the parser.
DEPENDENCIES: lookahead, errors

ARCHITECTURE NOTES:
The lexer pulls characters from a text stream one at a time and exposes
tokens through the LookaheadIterator contract, so the parser can peek one
token ahead. It handles:
- Word runs of printable ASCII (0x21-0x7E) outside the structural set
- Double-quoted strings with backslash escapes
- The structural characters { } ;
- // line comments and /* block */ comments
- Line counting for error messages

Exactly one END_OF_INPUT token is produced, after which the lexer is done.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol, TextIO

from command_dsl.parser.errors import ParseError
from command_dsl.parser.lookahead import LookaheadIterator


class TokenType(Enum):
    """Types of tokens produced by the lexer."""

    STRING = auto()  # Word run or quoted string
    OPEN_BLOCK = auto()  # {
    CLOSE_BLOCK = auto()  # }
    STATEMENT_END = auto()  # ;
    END_OF_INPUT = auto()


@dataclass(frozen=True)
class Token:
    """A single token from lexer output."""

    type: TokenType
    value: str

    @classmethod
    def string(cls, value: str) -> "Token":
        return cls(TokenType.STRING, value)

    @property
    def is_string(self) -> bool:
        return self.type is TokenType.STRING

    def __str__(self) -> str:
        if self.type is TokenType.STRING:
            return f'"{self.value}"'
        if self.type is TokenType.END_OF_INPUT:
            return "end of input"
        return f"'{self.value}'"


OPEN_BLOCK = Token(TokenType.OPEN_BLOCK, "{")
CLOSE_BLOCK = Token(TokenType.CLOSE_BLOCK, "}")
STATEMENT_END = Token(TokenType.STATEMENT_END, ";")
END_OF_INPUT = Token(TokenType.END_OF_INPUT, "")

STRUCTURAL_TOKENS: dict[str, Token] = {
    "{": OPEN_BLOCK,
    "}": CLOSE_BLOCK,
    ";": STATEMENT_END,
}

QUOTE = '"'

# Escapes recognised inside quoted strings; any other escaped char is literal
ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}


def is_word_char(c: str) -> bool:
    """True for printable ASCII characters that may appear in a bare word."""
    return "!" <= c <= "~" and c not in STRUCTURAL_TOKENS and c != QUOTE


class TokenStream(Protocol):
    """What argument type resolvers see of the lexer."""

    def has_next(self) -> bool: ...
    def next(self) -> Token: ...
    def peek(self) -> Token: ...
    def create_error(self, message: str, cause: BaseException | None = None) -> ParseError: ...


class Lexer(LookaheadIterator[Token]):
    """Converts a character stream into a sequence of tokens."""

    def __init__(self, reader: TextIO):
        super().__init__()
        self._reader = reader
        self._line = 1
        self._pushback: list[str] = []
        self._end = False

    @property
    def line(self) -> int:
        """Current 1-based line number."""
        return self._line

    def create_error(self, message: str, cause: BaseException | None = None) -> ParseError:
        """Build a ParseError positioned at the current line."""
        return ParseError(message, self._line, cause)

    def _wrap_failure(self, exc: Exception) -> Exception:
        if isinstance(exc, ParseError):
            return exc
        # UnicodeDecodeError is a ValueError raised by text streams mid-read
        if isinstance(exc, (OSError, ValueError)):
            return self.create_error(f"Error whilst reading input: {exc}", exc)
        return super()._wrap_failure(exc)

    def _compute_next(self) -> Token | None:
        if self._end:
            return self._end_of_data()

        c = self._skip_whitespace_and_comments()
        if c == "":
            self._end = True
            return END_OF_INPUT
        if c in STRUCTURAL_TOKENS:
            return STRUCTURAL_TOKENS[c]
        if c == QUOTE:
            return Token.string(self._read_quoted())
        if is_word_char(c):
            return Token.string(self._read_word(c))

        raise self.create_error(f"Unknown token: {c!r} (U+{ord(c):04X})")

    # ------------------------------------------------------------------
    # Character access
    # ------------------------------------------------------------------

    def _read(self) -> str:
        """Return the next character, or '' at end of input."""
        if self._pushback:
            return self._pushback.pop()
        chunk = self._reader.read(1)
        # codecs.StreamReader and similar readers may return more than asked
        if len(chunk) > 1:
            self._pushback.extend(reversed(chunk[1:]))
            return chunk[0]
        return chunk

    def _unread(self, c: str) -> None:
        if c:
            self._pushback.append(c)

    def _consume_newline(self, c: str) -> None:
        """Count a line break; \\r\\n counts once."""
        self._line += 1
        if c == "\r":
            following = self._read()
            if following != "\n":
                self._unread(following)

    # ------------------------------------------------------------------
    # Scanners
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> str:
        """Discard whitespace and comments; return the first significant char."""
        while True:
            c = self._read()
            if c == "":
                return c
            if c in "\r\n":
                self._consume_newline(c)
                continue
            if c <= " ":
                continue
            if c == "/":
                following = self._read()
                if following == "/":
                    self._skip_line_comment()
                    continue
                if following == "*":
                    self._skip_block_comment()
                    continue
                self._unread(following)
            return c

    def _skip_line_comment(self) -> None:
        while True:
            c = self._read()
            if c == "":
                return
            if c in "\r\n":
                # Leave the line break for the whitespace loop to count
                self._unread(c)
                return

    def _skip_block_comment(self) -> None:
        previous = ""
        while True:
            c = self._read()
            if c == "":
                raise self.create_error("Unterminated block comment")
            if c in "\r\n":
                self._consume_newline(c)
                previous = ""
                continue
            if previous == "*" and c == "/":
                return
            previous = c

    def _read_word(self, first: str) -> str:
        chars = [first]
        while True:
            c = self._read()
            if c and is_word_char(c):
                chars.append(c)
            else:
                self._unread(c)
                return "".join(chars)

    def _read_quoted(self) -> str:
        chars: list[str] = []
        while True:
            c = self._read()
            if c == "" or c in "\r\n":
                raise self.create_error("Unterminated quoted string")
            if c == QUOTE:
                return "".join(chars)
            if c == "\\":
                escaped = self._read()
                if escaped == "" or escaped in "\r\n":
                    raise self.create_error("Unterminated quoted string")
                chars.append(ESCAPES.get(escaped, escaped))
                continue
            chars.append(c)
