"""
resolver.py

PURPOSE: Resolve "namespace:name" type references to argument type descriptors.
DEPENDENCIES: lexer (TokenStream), argument models

ARCHITECTURE NOTES:
Resolvers are small stateless objects with two methods:
- can_resolve(namespace, name): pure predicate, consumes nothing
- resolve(namespace, name, tokens): builds the descriptor, consuming any
  parameter tokens that follow the type reference

The registry holds an ordered, immutable tuple of resolvers. The first
resolver whose predicate matches wins, so registration order matters when
two resolvers claim the same key.

The built-in resolver handles the primitive types:
    bool                        no parameters
    string  <kind>              single_word | quotable_phrase | greedy_phrase
    integer|long|float|double   [min [max]]   ("min"/"max" = type extremes)
"""

import logging
import re
from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from command_dsl.models.arguments import (
    BUILTIN_NAMESPACE,
    MAX_SENTINEL,
    MIN_SENTINEL,
    ArgumentType,
    BoolArgumentType,
    BoundedArgumentType,
    DoubleArgumentType,
    FloatArgumentType,
    IntegerArgumentType,
    LongArgumentType,
    StringArgumentType,
    StringKind,
    to_float32,
)
from command_dsl.parser.lexer import TokenStream

logger = logging.getLogger(__name__)


@runtime_checkable
class ArgumentTypeParser(Protocol):
    """A pluggable resolver for argument type references."""

    def can_resolve(self, namespace: str, name: str) -> bool: ...

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ArgumentType: ...


# Textual number formats accepted for numeric parameters, ASCII digits only
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _convert_int(text: str) -> int:
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


def _convert_float(text: str) -> float:
    if not DECIMAL_PATTERN.fullmatch(text):
        raise ValueError(f"invalid decimal literal: {text!r}")
    return float(text)


class BuiltinArgumentTypeParser:
    """Resolver for the primitive argument types in the builtin namespace."""

    def __init__(self, namespace: str = BUILTIN_NAMESPACE):
        self.namespace = namespace
        self._resolvers: dict[str, Callable[[TokenStream], ArgumentType]] = {
            "bool": self._resolve_bool,
            "string": self._resolve_string,
            "integer": self._numeric_resolver(IntegerArgumentType, "integer", _convert_int),
            "long": self._numeric_resolver(LongArgumentType, "long", _convert_int),
            "float": self._numeric_resolver(FloatArgumentType, "float", _convert_float),
            "double": self._numeric_resolver(DoubleArgumentType, "double", _convert_float),
        }

    def __repr__(self) -> str:
        return f"BuiltinArgumentTypeParser(namespace={self.namespace!r})"

    def can_resolve(self, namespace: str, name: str) -> bool:
        return namespace == self.namespace and name in self._resolvers

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ArgumentType:
        if not self.can_resolve(namespace, name):
            raise tokens.create_error(f"Unsupported argument type: {namespace}:{name}")
        return self._resolvers[name](tokens)

    @staticmethod
    def _resolve_bool(tokens: TokenStream) -> ArgumentType:
        return BoolArgumentType()

    @staticmethod
    def _resolve_string(tokens: TokenStream) -> ArgumentType:
        token = tokens.next()
        if not token.is_string:
            raise tokens.create_error(f"Expected string token for string type but got {token}")
        try:
            kind = StringKind(token.value)
        except ValueError:
            raise tokens.create_error(f"Unknown string type: {token.value}") from None
        return StringArgumentType(kind=kind)

    @staticmethod
    def _numeric_resolver(
        model: type[BoundedArgumentType],
        label: str,
        convert: Callable[[str], int | float],
    ) -> Callable[[TokenStream], ArgumentType]:
        """Build a resolver reading optional min and max bounds for a numeric type."""

        def read_bound(tokens: TokenStream) -> int | float:
            token = tokens.next()
            if not token.is_string:
                raise tokens.create_error(f"Expected string token for {label} but got {token}")
            if token.value == MIN_SENTINEL:
                return model.lowest
            if token.value == MAX_SENTINEL:
                return model.highest
            try:
                value = convert(token.value)
                if model is FloatArgumentType:
                    value = to_float32(value)
            except (ValueError, OverflowError) as e:
                raise tokens.create_error(f"Expected {label} but got {token.value}", e) from e
            if not model.lowest <= value <= model.highest:
                raise tokens.create_error(f"Value {token.value} is out of range for {label}")
            return value

        def resolve(tokens: TokenStream) -> ArgumentType:
            minimum = model.lowest
            maximum = model.highest
            if tokens.peek().is_string:
                minimum = read_bound(tokens)
                if tokens.peek().is_string:
                    maximum = read_bound(tokens)
            return model(minimum=minimum, maximum=maximum)

        return resolve


class ArgumentTypeRegistry:
    """
    Ordered, immutable collection of argument type resolvers.

    Safe to share between parses: resolution depends only on its inputs.
    """

    def __init__(self, parsers: Iterable[ArgumentTypeParser] = ()):
        self._parsers: tuple[ArgumentTypeParser, ...] = tuple(parsers)

    @property
    def parsers(self) -> tuple[ArgumentTypeParser, ...]:
        return self._parsers

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self) -> str:
        return f"ArgumentTypeRegistry({list(self._parsers)!r})"

    def with_parser(self, parser: ArgumentTypeParser) -> "ArgumentTypeRegistry":
        """Return a new registry with parser appended."""
        return ArgumentTypeRegistry((*self._parsers, parser))

    def can_resolve(self, namespace: str, name: str) -> bool:
        return any(p.can_resolve(namespace, name) for p in self._parsers)

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ArgumentType:
        """
        Resolve a type reference using the first matching resolver.

        Args:
            namespace: Part of the key before the colon
            name: Part of the key after the colon
            tokens: Token stream positioned after the type reference

        Returns:
            The resolved argument type descriptor

        Raises:
            ParseError: If no resolver matches or the parameters are invalid
        """
        for parser in self._parsers:
            if parser.can_resolve(namespace, name):
                logger.debug(f"Resolving {namespace}:{name} with {parser!r}")
                return parser.resolve(namespace, name, tokens)

        raise tokens.create_error(f"Unknown argument type: {namespace}:{name}")


def default_registry() -> ArgumentTypeRegistry:
    """Create a registry with the built-in primitive resolver registered."""
    return ArgumentTypeRegistry([BuiltinArgumentTypeParser()])

