"""
arguments.py

PURPOSE: Pydantic models for resolved argument types.
DEPENDENCIES: pydantic

ARCHITECTURE NOTES:
An argument type descriptor is what a resolver produces for a
"namespace:name" reference plus its parameter tokens. The built-in
descriptors below cover the primitive types; callers plugging in their
own resolvers subclass ArgumentType.

Each descriptor can render itself back to its key and parameter strings,
which is what the serializer writes out.
"""

import struct
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

BUILTIN_NAMESPACE = "builtin"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
FLOAT32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]
FLOAT64_MAX = 1.7976931348623157e308

# Parameter strings standing for a numeric type's extremes
MIN_SENTINEL = "min"
MAX_SENTINEL = "max"


def to_float32(value: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


class ArgumentType(BaseModel):
    """
    Base class for argument type descriptors.

    Subclasses set the namespace and name class variables that make up
    the "namespace:name" key used in command files.
    """

    namespace: ClassVar[str]
    name: ClassVar[str]

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        return f"{self.namespace}:{self.name}"

    def parameters(self) -> list[str]:
        """Parameter tokens that follow the key in a command file."""
        return []


class BoolArgumentType(ArgumentType):
    """A true/false value."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "bool"


class StringKind(str, Enum):
    """How much of the input a string argument consumes."""

    SINGLE_WORD = "single_word"
    QUOTABLE_PHRASE = "quotable_phrase"
    GREEDY_PHRASE = "greedy_phrase"


class StringArgumentType(ArgumentType):
    """A string value of one of the StringKind variants."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "string"

    kind: StringKind = Field(..., description="Which string variant is accepted")

    def parameters(self) -> list[str]:
        return [self.kind.value]


class BoundedArgumentType(ArgumentType):
    """
    Shared behaviour for numeric types with inclusive bounds.

    Subclasses declare minimum/maximum fields and the lowest/highest
    values representable by the numeric type. A bound sitting at the
    type's extreme is written as the "min"/"max" sentinel.
    """

    lowest: ClassVar[int | float]
    highest: ClassVar[int | float]

    minimum: int | float
    maximum: int | float

    def format_bound(self, value: int | float) -> str:
        if value == self.lowest:
            return MIN_SENTINEL
        if value == self.highest:
            return MAX_SENTINEL
        return repr(value)

    def parameters(self) -> list[str]:
        if self.maximum != self.highest:
            return [self.format_bound(self.minimum), self.format_bound(self.maximum)]
        if self.minimum != self.lowest:
            return [self.format_bound(self.minimum)]
        return []

    def contains(self, value: int | float) -> bool:
        """Whether value lies within the bounds."""
        return self.minimum <= value <= self.maximum


class IntegerArgumentType(BoundedArgumentType):
    """A 32-bit signed integer."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "integer"
    lowest: ClassVar[int] = INT32_MIN
    highest: ClassVar[int] = INT32_MAX

    minimum: int = Field(default=INT32_MIN, ge=INT32_MIN, le=INT32_MAX)
    maximum: int = Field(default=INT32_MAX, ge=INT32_MIN, le=INT32_MAX)


class LongArgumentType(BoundedArgumentType):
    """A 64-bit signed integer."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "long"
    lowest: ClassVar[int] = INT64_MIN
    highest: ClassVar[int] = INT64_MAX

    minimum: int = Field(default=INT64_MIN, ge=INT64_MIN, le=INT64_MAX)
    maximum: int = Field(default=INT64_MAX, ge=INT64_MIN, le=INT64_MAX)


class FloatArgumentType(BoundedArgumentType):
    """A single-precision float; bounds are rounded to float32."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "float"
    lowest: ClassVar[float] = -FLOAT32_MAX
    highest: ClassVar[float] = FLOAT32_MAX

    minimum: float = Field(default=-FLOAT32_MAX, ge=-FLOAT32_MAX, le=FLOAT32_MAX)
    maximum: float = Field(default=FLOAT32_MAX, ge=-FLOAT32_MAX, le=FLOAT32_MAX)

    @field_validator("minimum", "maximum")
    @classmethod
    def round_to_float32(cls, v: float) -> float:
        return to_float32(v)


class DoubleArgumentType(BoundedArgumentType):
    """A double-precision float."""

    namespace: ClassVar[str] = BUILTIN_NAMESPACE
    name: ClassVar[str] = "double"
    lowest: ClassVar[float] = -FLOAT64_MAX
    highest: ClassVar[float] = FLOAT64_MAX

    minimum: float = Field(default=-FLOAT64_MAX, ge=-FLOAT64_MAX, le=FLOAT64_MAX)
    maximum: float = Field(default=FLOAT64_MAX, ge=-FLOAT64_MAX, le=FLOAT64_MAX)
