"""Data models for command trees and argument types."""

from command_dsl.models.arguments import (
    BUILTIN_NAMESPACE,
    ArgumentType,
    BoolArgumentType,
    BoundedArgumentType,
    DoubleArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    LongArgumentType,
    StringArgumentType,
    StringKind,
)
from command_dsl.models.tree import ArgumentNode, CommandNode, LiteralNode

__all__ = [
    "BUILTIN_NAMESPACE",
    "ArgumentNode",
    "ArgumentType",
    "BoolArgumentType",
    "BoundedArgumentType",
    "CommandNode",
    "DoubleArgumentType",
    "FloatArgumentType",
    "IntegerArgumentType",
    "LiteralNode",
    "LongArgumentType",
    "StringArgumentType",
    "StringKind",
]
