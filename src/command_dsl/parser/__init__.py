"""Parser module for command files."""

from command_dsl.parser.errors import ParseError
from command_dsl.parser.lexer import Lexer, Token, TokenStream, TokenType
from command_dsl.parser.lookahead import (
    IteratorFailedError,
    LookaheadComputeError,
    LookaheadIterator,
    NoSuchElementError,
)
from command_dsl.parser.parser import Parser
from command_dsl.parser.resolver import (
    ArgumentTypeParser,
    ArgumentTypeRegistry,
    BuiltinArgumentTypeParser,
    default_registry,
)

__all__ = [
    "ArgumentTypeParser",
    "ArgumentTypeRegistry",
    "BuiltinArgumentTypeParser",
    "IteratorFailedError",
    "Lexer",
    "LookaheadComputeError",
    "LookaheadIterator",
    "NoSuchElementError",
    "ParseError",
    "Parser",
    "Token",
    "TokenStream",
    "TokenType",
    "default_registry",
]
