"""
TEST DOC: Command File Reader

WHAT: Tests for the public reading entry points and the builder
WHY: Callers read files, streams and strings through the reader
HOW: Parse fixture files and in-memory streams

CASES:
- Paths (str and Path), text streams, binary streams, strings
- codecs readers and other objects with a read method
- Builder accumulates resolvers in order
- Custom resolvers alongside the builtin one

EDGE CASES:
- Missing files and failing streams raise the original OSError
- Undecodable bytes
- Caller-owned streams stay open
- Unsupported source types
"""

import codecs
import io

import pytest

from command_dsl.models.tree import ArgumentNode, LiteralNode
from command_dsl.parser.errors import ParseError
from command_dsl.parser.resolver import BuiltinArgumentTypeParser
from command_dsl.reader import CommandFileReader, ReaderBuilder, default_reader


class TestSources:
    """Tests for each supported source kind."""

    def test_path(self, reader, teleport_path):
        """A Path is opened and parsed."""
        root = reader.parse(teleport_path)
        assert root.name == "tp"
        assert [c.name for c in root.children] == ["here", "there", "player", "to spawn"]

    def test_str_path(self, reader, teleport_path):
        """A str is treated as a path."""
        assert reader.parse(str(teleport_path)) == reader.parse(teleport_path)

    def test_text_stream(self, reader):
        """Text streams are read as they are."""
        stream = io.StringIO("root { a; }")
        root = reader.parse(stream)
        assert root == LiteralNode(name="root", children=(LiteralNode(name="a", children=()),))
        assert not stream.closed

    def test_open_file(self, reader, teleport_path):
        """An open text file handle is read and left open."""
        with open(teleport_path, encoding="utf-8") as f:
            root = reader.parse(f)
            assert not f.closed
        assert root.name == "tp"

    def test_binary_stream(self, reader):
        """Binary streams are decoded and left open."""
        stream = io.BytesIO('"café" { a; }'.encode())
        root = reader.parse(stream)
        assert root.name == "café"
        assert not stream.closed

    def test_binary_file(self, reader, teleport_path):
        """A binary file handle is accepted."""
        with open(teleport_path, "rb") as f:
            assert reader.parse(f).name == "tp"

    def test_parse_text(self, reader):
        """parse_text reads source held in a string."""
        root = reader.parse_text('root { n "builtin:bool"; }')
        assert isinstance(root.children[0], ArgumentNode)

    def test_deeply_nested_text(self, reader):
        """Nesting deeper than the recursion limit reads and counts fine."""
        depth = 1200
        source = "".join(f"n{i} {{ " for i in range(depth)) + "leaf;" + " }" * depth
        root = reader.parse_text(source)
        assert sum(1 for _ in root.walk()) == depth + 1

    def test_codecs_stream_reader(self, reader):
        """Character readers outside the io hierarchy are accepted."""
        raw = io.BytesIO('"café" { a; b "builtin:integer" "1"; }'.encode())
        root = reader.parse(codecs.getreader("utf-8")(raw))
        assert root.name == "café"
        assert [c.name for c in root.children] == ["a", "b"]

    def test_duck_typed_text_reader(self, reader):
        """Any object whose read returns str is read as text."""

        class WholeTextReader:
            def __init__(self, text: str):
                self.text = text

            def read(self, size: int = -1) -> str:
                # Ignores size and hands back everything left
                if size == 0:
                    return ""
                text, self.text = self.text, ""
                return text

        root = reader.parse(WholeTextReader("tp { here; there; }"))
        assert [c.name for c in root.children] == ["here", "there"]

    def test_duck_typed_byte_reader(self):
        """Any object whose read returns bytes is decoded."""

        class ByteReader:
            def __init__(self, data: bytes):
                self.stream = io.BytesIO(data)

            def read(self, size: int = -1) -> bytes:
                return self.stream.read(size)

        reader = default_reader(encoding="latin-1")
        root = reader.parse(ByteReader('"café";'.encode("latin-1")))
        assert root.name == "café"

    @pytest.mark.parametrize("source", [42, object(), None])
    def test_unsupported_source(self, reader, source):
        """Objects that are neither paths nor readers are rejected."""
        with pytest.raises(TypeError):
            reader.parse(source)


class TestFailures:
    """Tests for error propagation."""

    def test_missing_file(self, reader, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            reader.parse(tmp_path / "missing.commands")

    def test_parse_error_from_file(self, reader, unterminated_path):
        """Grammar errors in files are ParseErrors with a line."""
        with pytest.raises(ParseError) as exc_info:
            reader.parse(unterminated_path)
        assert exc_info.value.line == 3

    def test_io_error_unwrapped(self, reader):
        """OSErrors raised mid-lexing reach the caller as-is."""
        failure = OSError("connection reset")

        class FlakyStream(io.StringIO):
            def read(self, size: int | None = -1) -> str:
                text = super().read(size)
                if not text:
                    raise failure
                return text

        with pytest.raises(OSError) as exc_info:
            reader.parse(FlakyStream("root {"))
        assert exc_info.value is failure

    def test_undecodable_bytes(self, reader):
        """Invalid UTF-8 is a ParseError carrying the decode error."""
        with pytest.raises(ParseError) as exc_info:
            reader.parse(io.BytesIO(b"root \xff\xfe;"))
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_other_encoding(self):
        """Readers decode with their configured encoding."""
        reader = default_reader(encoding="latin-1")
        root = reader.parse(io.BytesIO('"café";'.encode("latin-1")))
        assert root.name == "café"


class TestBuilder:
    """Tests for ReaderBuilder and default_reader."""

    def test_default_reader(self):
        """The default reader holds the builtin resolver."""
        reader = default_reader()
        assert isinstance(reader, CommandFileReader)
        assert isinstance(reader.registry.parsers[0], BuiltinArgumentTypeParser)
        assert reader.encoding == "utf-8"

    def test_default_reader_is_fresh(self):
        """default_reader builds a new instance each time."""
        assert default_reader() is not default_reader()

    def test_order_preserved(self, color_resolver):
        """Resolvers keep their registration order."""
        builtin = BuiltinArgumentTypeParser()
        reader = (
            ReaderBuilder()
            .with_argument_type_parser(color_resolver)
            .with_argument_type_parser(builtin)
            .build()
        )
        assert reader.registry.parsers == (color_resolver, builtin)

    def test_rejects_none(self):
        """None is not a resolver."""
        with pytest.raises(ValueError):
            ReaderBuilder().with_argument_type_parser(None)

    def test_rejects_non_resolver(self):
        """Objects without can_resolve/resolve are rejected."""
        with pytest.raises(TypeError):
            ReaderBuilder().with_argument_type_parser(object())

    def test_built_reader_unaffected_by_builder(self, color_resolver):
        """Adding resolvers after build() does not change earlier readers."""
        builder = ReaderBuilder().with_argument_type_parser(BuiltinArgumentTypeParser())
        reader = builder.build()
        builder.with_argument_type_parser(color_resolver)
        assert len(reader.registry) == 1
        assert len(builder.build().registry) == 2

    def test_empty_reader(self):
        """A reader without resolvers rejects every argument type."""
        reader = ReaderBuilder().build()
        with pytest.raises(ParseError) as exc_info:
            reader.parse_text('root { a "builtin:bool"; }')
        assert "builtin:bool" in exc_info.value.message

    def test_custom_resolver(self, color_reader):
        """Custom resolvers work next to the builtin one."""
        root = color_reader.parse_text('root { c "demo:color" "hsv"; n "builtin:integer"; }')
        color, number = root.children
        assert color.type.key == "demo:color"
        assert color.type.palette == "hsv"
        assert number.type.key == "builtin:integer"

    def test_reader_reusable(self, reader):
        """One reader can parse many files."""
        assert reader.parse_text("a;").name == "a"
        assert reader.parse_text("b;").name == "b"
