"""
parser.py

PURPOSE: Parse a token stream into a command tree.
DEPENDENCIES: lexer, resolver, tree models

ARCHITECTURE NOTES:
The parser reads this grammar with one token of lookahead:
    TREE := NODE EOF
    NODE := NAME [TYPE] ( "{" NODE* "}" | ";" )
    NAME := STRING
    TYPE := STRING      "namespace:typename", parameters read by the resolver

A string token after the node name makes the node an argument node.
Open blocks are kept on an explicit stack rather than the call stack, so
deeply nested files parse without hitting the recursion limit.
The root of a file must be a literal node. There is no error recovery:
the first ParseError aborts the parse.
"""

import logging
from dataclasses import dataclass, field

from command_dsl.models.arguments import ArgumentType
from command_dsl.models.tree import ArgumentNode, CommandNode, LiteralNode
from command_dsl.parser.errors import ParseError
from command_dsl.parser.lexer import (
    CLOSE_BLOCK,
    END_OF_INPUT,
    OPEN_BLOCK,
    STATEMENT_END,
    Lexer,
)
from command_dsl.parser.resolver import ArgumentTypeRegistry

logger = logging.getLogger(__name__)

KEY_SEPARATOR = ":"


@dataclass
class _OpenBlock:
    """A node whose block has been opened but not yet closed."""

    name: str
    argument_type: ArgumentType | None
    children: list[CommandNode] = field(default_factory=list)


def _make_node(
    name: str, argument_type: ArgumentType | None, children: tuple[CommandNode, ...]
) -> CommandNode:
    if argument_type is None:
        return LiteralNode(name=name, children=children)
    return ArgumentNode(name=name, type=argument_type, children=children)


class Parser:
    """Builds a command tree from the tokens of a single command file."""

    def __init__(self, lexer: Lexer, registry: ArgumentTypeRegistry):
        self._lexer = lexer
        self._registry = registry

    def parse(self) -> LiteralNode:
        """
        Parse exactly one literal-rooted tree followed by end of input.

        Returns:
            The root LiteralNode

        Raises:
            ParseError: On any lexical, grammar or type resolution failure
        """
        node = self.parse_node()
        if not isinstance(node, LiteralNode):
            raise self._lexer.create_error("Root command node is not a literal command node")

        following = self._lexer.peek()
        if following != END_OF_INPUT:
            raise self._lexer.create_error(f"Expected end of file but got {following}")

        logger.debug(f"Parsed command tree '{node.name}' ending at line {self._lexer.line}")
        return node

    def parse_node(self) -> CommandNode:
        """
        Parse one node and its children, without the root or end checks.

        Blocks are tracked on an explicit stack, so nesting depth is
        limited only by memory.
        """
        open_blocks: list[_OpenBlock] = []
        while True:
            name, argument_type = self._parse_head()
            if self._lexer.peek() == OPEN_BLOCK:
                self._lexer.next()
                open_blocks.append(_OpenBlock(name, argument_type))
            else:
                following = self._lexer.peek()
                if following != STATEMENT_END:
                    raise self._lexer.create_error(
                        f"Node definition not ended with semicolon, got {following}"
                    )
                self._lexer.next()
                node = _make_node(name, argument_type, ())
                if not open_blocks:
                    return node
                open_blocks[-1].children.append(node)

            # Close every block whose closing brace comes next
            while True:
                block = open_blocks[-1]
                following = self._lexer.peek()
                if following == END_OF_INPUT:
                    raise self._lexer.create_error(
                        f"Block of node '{block.name}' not closed before end of input"
                    )
                if following != CLOSE_BLOCK:
                    break
                self._lexer.next()
                open_blocks.pop()
                node = _make_node(block.name, block.argument_type, tuple(block.children))
                if not open_blocks:
                    return node
                open_blocks[-1].children.append(node)

    def _parse_head(self) -> tuple[str, ArgumentType | None]:
        """Read a node name and its optional argument type."""
        token = self._lexer.next()
        if not token.is_string:
            raise self._lexer.create_error(f"Expected string token for node name but got {token}")

        argument_type = None
        if self._lexer.peek().is_string:
            argument_type = self._parse_argument_type()
        return token.value, argument_type

    def _parse_argument_type(self) -> ArgumentType:
        token = self._lexer.next()
        if not token.is_string:
            raise self._lexer.create_error(
                f"Expected string token for argument type but got {token}"
            )

        key = token.value.split(KEY_SEPARATOR)
        if len(key) != 2 or not all(key):
            raise self._lexer.create_error(f"Invalid key for argument type: {token.value!r}")

        namespace, name = key
        return self._registry.resolve(namespace, name, self._lexer)


__all__ = ["ParseError", "Parser"]
