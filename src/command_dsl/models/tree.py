"""
tree.py

PURPOSE: Pydantic models for the parsed command tree.
DEPENDENCIES: pydantic, arguments

ARCHITECTURE NOTES:
A command tree is made of two node kinds:
- LiteralNode: a fixed keyword
- ArgumentNode: a named, typed value

Nodes are frozen and children are stored as a tuple in source order, so
a parsed tree can be shared freely and compared structurally. Sibling
names are NOT required to be unique; the validator reports duplicates.
"""

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from command_dsl.models.arguments import ArgumentType


class _Node(BaseModel):
    """Fields and helpers shared by both node kinds."""

    model_config = ConfigDict(frozen=True)

    name: str
    children: tuple["CommandNode", ...] = Field(default=())

    def child(self, name: str) -> "CommandNode | None":
        """Return the first child with the given name, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def walk(self) -> Iterator["CommandNode"]:
        """Yield this node and all descendants, depth first."""
        pending: list[_Node] = [self]
        while pending:
            node = pending.pop()
            yield node  # type: ignore[misc]
            pending.extend(reversed(node.children))


class LiteralNode(_Node):
    """A node matching a fixed keyword."""

    kind: Literal["literal"] = "literal"


class ArgumentNode(_Node):
    """A node accepting a value of the given argument type."""

    kind: Literal["argument"] = "argument"
    type: SerializeAsAny[ArgumentType]


CommandNode = Annotated[LiteralNode | ArgumentNode, Field(discriminator="kind")]

_Node.model_rebuild()
LiteralNode.model_rebuild()
ArgumentNode.model_rebuild()
