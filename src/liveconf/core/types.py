"""
Variable type classification.

Maps a field's declared Python type onto the closed set of variable kinds a
dashboard knows how to edit.
"""

import collections.abc
import numbers
import typing
from enum import Enum
from typing import Any, Optional, Type


_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


class VariableType(Enum):
    """Enumeration of variable kinds."""

    BOOLEAN = "boolean"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    ENUM = "enum"
    CUSTOM = "custom"
    UNKNOWN = "unknown"

    @classmethod
    def from_type(cls, field_type: Any) -> "VariableType":
        """
        Classify a declared field type.

        Order matters: bool is an int subclass, and IntEnum/StrEnum members
        must classify as enums rather than as their mixin type.

        Args:
            field_type: Declared type of the field

        Returns:
            Variable kind; UNKNOWN when the type cannot be represented
        """
        # typing.Any is a class on newer interpreters
        if not isinstance(field_type, type) or field_type is typing.Any:
            return cls.UNKNOWN

        if issubclass(field_type, bool):
            return cls.BOOLEAN
        if issubclass(field_type, Enum):
            return cls.ENUM
        if issubclass(field_type, int):
            return cls.INT
        if issubclass(field_type, float):
            return cls.DOUBLE
        if issubclass(field_type, str):
            return cls.STRING
        # Registered numeric types (e.g. numpy scalars)
        if issubclass(field_type, numbers.Integral):
            return cls.INT
        if issubclass(field_type, numbers.Real):
            return cls.DOUBLE

        # Containers, complex/Decimal and remaining builtins (NoneType, object, ...)
        if (
            field_type.__module__ == "builtins"
            or issubclass(field_type, collections.abc.Collection)
            or issubclass(field_type, numbers.Number)
        ):
            return cls.UNKNOWN

        return cls.CUSTOM

    @property
    def is_basic(self) -> bool:
        """True for the scalar kinds stored in a single field."""
        return self in _BASIC_TYPES

    def coerce(self, value: Any, enum_class: Optional[Type[Enum]] = None) -> Any:
        """
        Convert an incoming value to this kind.

        Args:
            value: Raw value (typically decoded from a dashboard message)
            enum_class: Enum class for ENUM variables

        Returns:
            Converted value

        Raises:
            ValueError: If the value cannot be converted
        """
        try:
            if self is VariableType.BOOLEAN:
                return _coerce_bool(value)
            if self is VariableType.INT:
                if isinstance(value, float) and not value.is_integer():
                    raise ValueError(f"{value!r} is not an integer")
                return int(value)
            if self is VariableType.DOUBLE:
                return float(value)
            if self is VariableType.STRING:
                return str(value)
            if self is VariableType.ENUM:
                return _coerce_enum(value, enum_class)
        except TypeError as e:
            raise ValueError(f"Cannot convert {value!r} to {self.value}: {e}") from e

        raise ValueError(f"{self.value} variables do not hold a single value")


_BASIC_TYPES = frozenset(
    {
        VariableType.BOOLEAN,
        VariableType.INT,
        VariableType.DOUBLE,
        VariableType.STRING,
        VariableType.ENUM,
    }
)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"{value!r} is not a boolean")
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError(f"{value!r} is not a boolean")


def _coerce_enum(value: Any, enum_class: Optional[Type[Enum]]) -> Enum:
    if enum_class is None:
        raise ValueError("Enum variables need an enum class")
    if isinstance(value, enum_class):
        return value
    if isinstance(value, str) and value in enum_class.__members__:
        return enum_class[value]
    # Fall back to lookup by member value; raises ValueError when absent
    return enum_class(value)
