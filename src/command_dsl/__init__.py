"""
Command DSL - Describe command trees as text.

This package provides tools for:
- Reading command files into trees of literal and argument nodes
- Resolving typed arguments through pluggable resolvers
- Writing trees back out in canonical form
"""

from command_dsl.models.tree import ArgumentNode, CommandNode, LiteralNode
from command_dsl.parser.errors import ParseError
from command_dsl.reader import CommandFileReader, ReaderBuilder, default_reader

__version__ = "0.1.0"

__all__ = [
    "ArgumentNode",
    "CommandFileReader",
    "CommandNode",
    "LiteralNode",
    "ParseError",
    "ReaderBuilder",
    "default_reader",
]
