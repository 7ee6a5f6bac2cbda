"""
validator.py

PURPOSE: Check parsed command trees for likely mistakes.
DEPENDENCIES: tree models

ARCHITECTURE NOTES:
The parser accepts anything the grammar allows. The validator flags
trees that parse but are probably wrong:
- Sibling nodes sharing a name (the parser keeps both)
- Numeric argument types whose minimum exceeds their maximum
- Empty node names (only possible with "")
- Greedy string arguments followed by children
- Numeric bounds admitting a single value (info)

Locations are slash-separated node paths, e.g. "tp/there".
"""

from dataclasses import dataclass
from enum import Enum, auto

from command_dsl.models.arguments import BoundedArgumentType, StringArgumentType, StringKind
from command_dsl.models.tree import ArgumentNode, CommandNode


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = auto()  # The tree cannot work as intended
    WARNING = auto()  # May cause unexpected behavior
    INFO = auto()  # Suggestion for improvement


@dataclass
class ValidationIssue:
    """A single validation issue found in a tree."""

    severity: ValidationSeverity
    message: str
    location: str

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.location}: {self.message}"


class TreeValidator:
    """
    Validates command trees for common issues.

    Usage:
        validator = TreeValidator(root)
        issues = validator.validate()
        for issue in issues:
            print(issue)
    """

    def __init__(self, root: CommandNode):
        self.root = root
        self.issues: list[ValidationIssue] = []

    def validate(self) -> list[ValidationIssue]:
        """
        Run all validation checks.

        Returns:
            List of ValidationIssue objects, sorted by severity.
        """
        self.issues = []
        pending: list[tuple[CommandNode, str]] = [(self.root, self.root.name)]
        while pending:
            node, location = pending.pop()
            self._check_node(node, location)
            pending.extend(
                (child, f"{location}/{child.name}") for child in reversed(node.children)
            )
        self.issues.sort(key=lambda i: i.severity.value)
        return self.issues

    def _check_node(self, node: CommandNode, location: str) -> None:
        if not node.name:
            self._add(ValidationSeverity.ERROR, "Node name is empty", location)

        if isinstance(node, ArgumentNode):
            self._validate_argument(node, location)

        seen: set[str] = set()
        reported: set[str] = set()
        for child in node.children:
            if child.name in seen and child.name not in reported:
                self._add(
                    ValidationSeverity.WARNING,
                    f"Duplicate child name '{child.name}'",
                    location,
                )
                reported.add(child.name)
            seen.add(child.name)

    def _validate_argument(self, node: ArgumentNode, location: str) -> None:
        argument_type = node.type
        if (
            isinstance(argument_type, StringArgumentType)
            and argument_type.kind is StringKind.GREEDY_PHRASE
            and node.children
        ):
            self._add(
                ValidationSeverity.WARNING,
                "Greedy string argument consumes the rest of the input, children are unreachable",
                location,
            )
        if isinstance(argument_type, BoundedArgumentType):
            if argument_type.minimum > argument_type.maximum:
                self._add(
                    ValidationSeverity.ERROR,
                    f"{argument_type.key} minimum {argument_type.minimum} "
                    f"exceeds maximum {argument_type.maximum}",
                    location,
                )
            elif argument_type.minimum == argument_type.maximum:
                self._add(
                    ValidationSeverity.INFO,
                    f"{argument_type.key} accepts only the value {argument_type.minimum}",
                    location,
                )

    def _add(self, severity: ValidationSeverity, message: str, location: str) -> None:
        self.issues.append(ValidationIssue(severity, message, location))


def validate_tree(root: CommandNode) -> list[ValidationIssue]:
    """Validate a tree and return its issues, errors first."""
    return TreeValidator(root).validate()
