"""
plain.py

PURPOSE: Console output formatting for the CLI.
DEPENDENCIES: rich

ARCHITECTURE NOTES:
This module provides formatted console output using Rich.
It handles:
- Command trees rendered as a rich Tree
- Messages, errors and validation issues
- Titles
"""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from command_dsl.models.tree import ArgumentNode, CommandNode
from command_dsl.validator import ValidationIssue, ValidationSeverity

# Global console instance
console = Console()

SEVERITY_STYLES: dict[ValidationSeverity, str] = {
    ValidationSeverity.ERROR: "red",
    ValidationSeverity.WARNING: "yellow",
    ValidationSeverity.INFO: "dim",
}


def node_label(node: CommandNode) -> Text:
    """One-line description of a node for tree output."""
    if isinstance(node, ArgumentNode):
        label = Text(f"<{node.name}>", style="bold cyan")
        label.append(f" {node.type.key}", style="magenta")
        for parameter in node.type.parameters():
            label.append(f" {parameter}", style="dim")
        return label
    return Text(node.name, style="bold")


def build_tree(node: CommandNode, tree: Tree | None = None) -> Tree:
    """Build a rich Tree mirroring the command tree."""
    branch = Tree(node_label(node)) if tree is None else tree.add(node_label(node))
    for child in node.children:
        build_tree(child, branch)
    return branch


def print_tree(node: CommandNode) -> None:
    """Print a command tree."""
    console.print(build_tree(node))


def print_message(text: str) -> None:
    """Print a normal message."""
    console.print(text)


def print_error(text: str) -> None:
    """Print an error message."""
    console.print(Text(text, style="red"))


def print_success(text: str) -> None:
    """Print a success message."""
    console.print(Text(text, style="green"))


def print_issue(issue: ValidationIssue) -> None:
    """Print a validation issue coloured by severity."""
    style = SEVERITY_STYLES[issue.severity]
    console.print(Text(str(issue), style=style))


def print_title(title: str) -> None:
    """Print a title in a panel."""
    panel = Panel(
        Text(title, justify="center", style="bold"),
        border_style="blue",
    )
    console.print(panel)
