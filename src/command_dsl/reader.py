"""
reader.py

PURPOSE: Public entry point for reading command files.
DEPENDENCIES: parser, resolver, observability

ARCHITECTURE NOTES:
A CommandFileReader pairs an immutable ArgumentTypeRegistry with the
lexer and parser. Readers are built with ReaderBuilder, or with
default_reader() for one preloaded with the builtin resolver.

Sources and ownership:
- str / os.PathLike: opened here, closed here on every exit path
- text stream: read as-is, left open for the caller
- binary stream: decoded with the reader's encoding, left open
- any other object with read(): treated as text or bytes by what read(0)
  returns, left open

I/O failures reach the caller as the original OSError, even when they
happen mid-lexing. Everything else is a ParseError.
"""

import codecs
import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, TextIO

from command_dsl.models.tree import LiteralNode
from command_dsl.observability import get_tracer
from command_dsl.parser.errors import ParseError
from command_dsl.parser.lexer import Lexer
from command_dsl.parser.parser import Parser
from command_dsl.parser.resolver import (
    ArgumentTypeParser,
    ArgumentTypeRegistry,
    BuiltinArgumentTypeParser,
)

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

DEFAULT_ENCODING = "utf-8"

Source = str | os.PathLike[str] | TextIO | BinaryIO


class CommandFileReader:
    """Reads literal-rooted command trees from command files."""

    def __init__(self, registry: ArgumentTypeRegistry, encoding: str = DEFAULT_ENCODING):
        self._registry = registry
        self._encoding = encoding

    @property
    def registry(self) -> ArgumentTypeRegistry:
        return self._registry

    @property
    def encoding(self) -> str:
        return self._encoding

    def parse(self, source: Source) -> LiteralNode:
        """
        Parse a command file from a path or an open stream.

        Args:
            source: File path, text or binary stream, or any object with read()

        Returns:
            The root LiteralNode of the file

        Raises:
            OSError: If reading the source fails
            ParseError: If the content is not a valid command file
            TypeError: If the source is not a path and has no read method
        """
        if isinstance(source, (str, os.PathLike)):
            return self.parse_path(source)
        if isinstance(source, io.TextIOBase):
            return self.parse_stream(source)
        if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
            return self.parse_bytes(source)

        read = getattr(source, "read", None)
        if not callable(read):
            raise TypeError(f"Cannot read a command file from {type(source).__name__}")
        # Any other reader: an empty read tells text from bytes without consuming input
        if isinstance(read(0), str):
            return self.parse_stream(source)  # type: ignore[arg-type]
        decoded = codecs.getreader(self._encoding)(source)
        return self.parse_stream(decoded)  # type: ignore[arg-type]

    def parse_path(self, path: str | os.PathLike[str]) -> LiteralNode:
        """Parse the command file at path."""
        path = Path(path)
        with tracer.start_as_current_span("command_file.parse_path") as span:
            span.set_attribute("command_file.path", str(path))
            with path.open(encoding=self._encoding, newline="") as f:
                return self.parse_stream(f)

    def parse_bytes(self, stream: BinaryIO) -> LiteralNode:
        """Parse from a binary stream; the stream is not closed."""
        wrapper = io.TextIOWrapper(stream, encoding=self._encoding, newline="")
        try:
            return self.parse_stream(wrapper)
        finally:
            # Detach so closing the wrapper leaves the caller's stream open
            wrapper.detach()

    def parse_text(self, text: str) -> LiteralNode:
        """Parse command file source held in a string."""
        return self.parse_stream(io.StringIO(text, newline=""))

    def parse_stream(self, stream: TextIO) -> LiteralNode:
        """Parse from a text stream; the stream is not closed."""
        with tracer.start_as_current_span("command_file.parse") as span:
            lexer = Lexer(stream)
            try:
                root = Parser(lexer, self._registry).parse()
            except ParseError as e:
                span.record_exception(e)
                span.set_attribute("command_file.error_line", e.line)
                if isinstance(e.cause, OSError):
                    raise e.cause from None
                logger.debug(f"Parse failed: {e}")
                raise

            node_count = sum(1 for _ in root.walk())
            span.set_attribute("command_file.root", root.name)
            span.set_attribute("command_file.node_count", node_count)
            span.set_attribute("command_file.lines", lexer.line)
            logger.debug(f"Read command tree '{root.name}' with {node_count} nodes")
            return root


class ReaderBuilder:
    """
    Accumulates argument type resolvers and builds a CommandFileReader.

    Usage:
        reader = (
            ReaderBuilder()
            .with_argument_type_parser(BuiltinArgumentTypeParser())
            .with_argument_type_parser(MyResolver())
            .build()
        )
    """

    def __init__(self) -> None:
        self._parsers: list[ArgumentTypeParser] = []
        self._encoding = DEFAULT_ENCODING

    def with_argument_type_parser(self, parser: ArgumentTypeParser) -> "ReaderBuilder":
        """Append a resolver; earlier resolvers take precedence."""
        if parser is None:
            raise ValueError("argument type parser must not be None")
        if not isinstance(parser, ArgumentTypeParser):
            raise TypeError(f"{parser!r} does not implement can_resolve/resolve")
        self._parsers.append(parser)
        return self

    def with_encoding(self, encoding: str) -> "ReaderBuilder":
        """Set the encoding used for paths and binary streams."""
        self._encoding = encoding
        return self

    def build(self) -> CommandFileReader:
        return CommandFileReader(ArgumentTypeRegistry(self._parsers), encoding=self._encoding)


def default_reader(encoding: str = DEFAULT_ENCODING) -> CommandFileReader:
    """Create a reader with the builtin primitive resolver registered."""
    return (
        ReaderBuilder()
        .with_argument_type_parser(BuiltinArgumentTypeParser())
        .with_encoding(encoding)
        .build()
    )
