"""
conftest.py

Shared pytest fixtures for command_dsl tests.
"""

import io
from pathlib import Path
from typing import ClassVar

import pytest

from command_dsl.models.arguments import ArgumentType
from command_dsl.parser.lexer import Lexer, TokenStream
from command_dsl.parser.resolver import BuiltinArgumentTypeParser
from command_dsl.reader import CommandFileReader, ReaderBuilder, default_reader

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class ColorArgumentType(ArgumentType):
    """A caller-defined argument type used to exercise custom resolvers."""

    namespace: ClassVar[str] = "demo"
    name: ClassVar[str] = "color"

    palette: str = "rgb"

    def parameters(self) -> list[str]:
        return [self.palette]


class ColorResolver:
    """Resolves demo:color with an optional palette parameter."""

    def can_resolve(self, namespace: str, name: str) -> bool:
        return (namespace, name) == ("demo", "color")

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ArgumentType:
        if tokens.peek().is_string:
            return ColorArgumentType(palette=tokens.next().value)
        return ColorArgumentType()


def make_lexer(text: str) -> Lexer:
    """Lexer over an in-memory string."""
    return Lexer(io.StringIO(text, newline=""))


@pytest.fixture
def teleport_path() -> Path:
    """Path to the sample teleport command file."""
    return FIXTURES_DIR / "teleport.commands"


@pytest.fixture
def invalid_bounds_path() -> Path:
    """A command file that parses but fails validation."""
    return FIXTURES_DIR / "invalid_bounds.commands"


@pytest.fixture
def unterminated_path() -> Path:
    """A command file with an unclosed block."""
    return FIXTURES_DIR / "unterminated.commands"


@pytest.fixture
def reader() -> CommandFileReader:
    """Reader with only the builtin resolver."""
    return default_reader()


@pytest.fixture
def color_reader() -> CommandFileReader:
    """Reader with the demo color resolver ahead of the builtin one."""
    return (
        ReaderBuilder()
        .with_argument_type_parser(ColorResolver())
        .with_argument_type_parser(BuiltinArgumentTypeParser())
        .build()
    )


@pytest.fixture
def lexer_for():
    """Factory building a lexer over a string."""
    return make_lexer


@pytest.fixture
def color_resolver() -> ColorResolver:
    """The demo color resolver."""
    return ColorResolver()
