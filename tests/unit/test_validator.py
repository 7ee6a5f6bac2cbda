"""
TEST DOC: Tree Validator

WHAT: Tests for checks run over parsed command trees
WHY: The grammar accepts trees that cannot work as intended
HOW: Parse small sources and inspect the reported issues

CASES:
- Clean trees report nothing
- Inverted numeric bounds are errors
- Duplicate sibling names are warnings

EDGE CASES:
- Empty names
- Greedy strings with children
- Single-value ranges
- Issue ordering by severity
"""

from command_dsl.validator import (
    TreeValidator,
    ValidationIssue,
    ValidationSeverity,
    validate_tree,
)


def severities(issues: list[ValidationIssue]) -> list[ValidationSeverity]:
    return [i.severity for i in issues]


class TestValidTrees:
    """Tests for trees without problems."""

    def test_fixture_is_clean(self, reader, teleport_path):
        """The sample file has no issues."""
        assert validate_tree(reader.parse(teleport_path)) == []

    def test_validator_rerun(self, reader):
        """Running a validator twice does not duplicate issues."""
        validator = TreeValidator(reader.parse_text("r { a; a; }"))
        assert len(validator.validate()) == 1
        assert len(validator.validate()) == 1


class TestIssues:
    """Tests for each reported problem."""

    def test_inverted_bounds(self, reader, invalid_bounds_path):
        """Minimum above maximum is an error, errors come first."""
        issues = validate_tree(reader.parse(invalid_bounds_path))
        assert severities(issues) == [ValidationSeverity.ERROR, ValidationSeverity.WARNING]
        error = issues[0]
        assert error.location == "give/amount"
        assert error.message == "builtin:integer minimum 64 exceeds maximum 1"
        assert str(error) == "[ERROR] give/amount: builtin:integer minimum 64 exceeds maximum 1"

    def test_duplicate_reported_once(self, reader):
        """A name repeated many times is reported once per parent."""
        issues = validate_tree(reader.parse_text("r { a; b; a; a; }"))
        assert len(issues) == 1
        assert issues[0].severity is ValidationSeverity.WARNING
        assert issues[0].location == "r"
        assert "'a'" in issues[0].message

    def test_empty_name(self, reader):
        """Quoted empty names are errors."""
        issues = validate_tree(reader.parse_text('r { ""; }'))
        assert severities(issues) == [ValidationSeverity.ERROR]
        assert issues[0].location == "r/"

    def test_greedy_with_children(self, reader):
        """Children after a greedy string are unreachable."""
        source = 'say { msg "builtin:string" "greedy_phrase" { loud; } }'
        issues = validate_tree(reader.parse_text(source))
        assert severities(issues) == [ValidationSeverity.WARNING]
        assert issues[0].location == "say/msg"

    def test_greedy_leaf_is_fine(self, reader):
        """A greedy string without children is fine."""
        root = reader.parse_text('say { msg "builtin:string" "greedy_phrase"; }')
        assert validate_tree(root) == []

    def test_single_value_range(self, reader):
        """Equal bounds are reported as info."""
        issues = validate_tree(reader.parse_text('r { n "builtin:double" "2" "2"; }'))
        assert severities(issues) == [ValidationSeverity.INFO]
        assert "2.0" in issues[0].message

    def test_nested_locations(self, reader):
        """Locations name the path from the root."""
        issues = validate_tree(reader.parse_text("r { a { b { c; c; } } }"))
        assert issues[0].location == "r/a/b"

    def test_deep_tree(self, reader):
        """Deeply nested trees are checked without recursion."""
        depth = 1200
        source = "".join(f"n{i} {{ " for i in range(depth)) + "x; x;" + " }" * depth
        issues = validate_tree(reader.parse_text(source))
        assert len(issues) == 1
        assert issues[0].location.endswith("/n1199")
