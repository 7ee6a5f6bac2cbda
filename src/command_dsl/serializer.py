"""
serializer.py

PURPOSE: Write command trees back out as command file source.
DEPENDENCIES: tree models, lexer character classes

ARCHITECTURE NOTES:
Output is canonical: one node per line, nested blocks indented, argument
type keys and parameters always quoted. Names are quoted only when the
lexer would not read them back as a single word. Reading the output with
the same resolvers yields a tree equal to the input.
"""

from typing import TextIO

from command_dsl.models.tree import ArgumentNode, CommandNode
from command_dsl.parser.lexer import ESCAPES, QUOTE, is_word_char

# Inverse of the lexer's escape table, plus the characters that must be escaped
_ESCAPE_OUT: dict[str, str] = {v: f"\\{k}" for k, v in ESCAPES.items()}
_ESCAPE_OUT[QUOTE] = '\\"'
_ESCAPE_OUT["\\"] = "\\\\"


def needs_quotes(text: str) -> bool:
    """Whether text must be quoted to read back as one string token."""
    if not text:
        return True
    if text.startswith(("//", "/*")):
        return True
    return not all(is_word_char(c) for c in text)


def quote(text: str) -> str:
    """Quote text, escaping characters the lexer treats specially."""
    return QUOTE + "".join(_ESCAPE_OUT.get(c, c) for c in text) + QUOTE


def format_token(text: str) -> str:
    return quote(text) if needs_quotes(text) else text


def _head(node: CommandNode) -> str:
    parts = [format_token(node.name)]
    if isinstance(node, ArgumentNode):
        parts.append(quote(node.type.key))
        parts.extend(quote(p) for p in node.type.parameters())
    return " ".join(parts)


def _render_lines(root: CommandNode, indent: str) -> list[str]:
    lines: list[str] = []
    # None marks the closing brace of the block at that depth
    pending: list[tuple[CommandNode | None, int]] = [(root, 0)]
    while pending:
        node, depth = pending.pop()
        if node is None:
            lines.append(indent * depth + "}")
            continue
        if not node.children:
            lines.append(indent * depth + _head(node) + ";")
            continue
        lines.append(indent * depth + _head(node) + " {")
        pending.append((None, depth))
        pending.extend((child, depth + 1) for child in reversed(node.children))
    return lines


def dumps(node: CommandNode, indent: int = 4) -> str:
    """
    Render a command tree as command file source.

    Args:
        node: Root of the tree to render
        indent: Spaces per nesting level

    Returns:
        Source text ending with a newline
    """
    lines = _render_lines(node, " " * indent)
    return "\n".join(lines) + "\n"


def dump(node: CommandNode, fp: TextIO, indent: int = 4) -> None:
    """Write a command tree as command file source to a text stream."""
    fp.write(dumps(node, indent=indent))
