"""
Variable tree nodes.

A tree is made of CustomVariable containers keyed by name and BasicVariable
leaves bound to a single field through a FieldAccessor.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, ItemsView, Iterator, List, Optional, Tuple, Type

from liveconf.core.fields import FieldAccessor
from liveconf.core.types import VariableType
from liveconf.utils.logging import get_logger

logger = get_logger("variables")


class ConfigVariable(ABC):
    """Base class of all variable tree nodes."""

    @property
    @abstractmethod
    def type(self) -> VariableType:
        """Kind of this variable."""

    @abstractmethod
    def get_value(self) -> Any:
        """Current value (a nested dict for custom variables)."""

    @abstractmethod
    def update_value(self, new_value: Any) -> None:
        """Store a new value."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Describe the variable and its current value as plain data."""


class BasicVariable(ConfigVariable):
    """Leaf variable bound to one scalar field."""

    def __init__(self, var_type: VariableType, accessor: FieldAccessor):
        if not var_type.is_basic:
            raise ValueError(f"{var_type.value} is not a basic variable type")
        self._type = var_type
        self.accessor = accessor

    @property
    def type(self) -> VariableType:
        return self._type

    @property
    def enum_class(self) -> Optional[Type[Enum]]:
        if self._type is VariableType.ENUM:
            return self.accessor.field.field_type
        return None

    def get_value(self) -> Any:
        return self.accessor.get()

    def convert(self, new_value: Any) -> Any:
        """Convert an incoming value to this variable's kind without storing it."""
        return self._type.coerce(new_value, self.enum_class)

    def update_value(self, new_value: Any) -> None:
        self.accessor.set(self.convert(new_value))

    def to_dict(self) -> Dict[str, Any]:
        value = self.get_value()
        result: Dict[str, Any] = {"type": self._type.value}
        if self._type is VariableType.ENUM:
            result["enum_class"] = self.enum_class.__qualname__
            result["enum_values"] = list(self.enum_class.__members__)
            result["value"] = value.name if isinstance(value, Enum) else value
        else:
            result["value"] = value
        return result

    def __repr__(self) -> str:
        return f"BasicVariable({self._type.value}, {self.accessor.field.qualified_name})"


class CustomVariable(ConfigVariable):
    """Container variable holding named children in insertion order."""

    def __init__(self) -> None:
        self._variables: Dict[str, ConfigVariable] = {}

    @property
    def type(self) -> VariableType:
        return VariableType.CUSTOM

    def put_variable(self, name: str, variable: ConfigVariable) -> None:
        """
        Attach a child variable.

        An existing child with the same name is replaced; the name keeps its
        original position.
        """
        self._variables[name] = variable

    def get_variable(self, name: str) -> Optional[ConfigVariable]:
        return self._variables.get(name)

    def remove_variable(self, name: str) -> Optional[ConfigVariable]:
        return self._variables.pop(name, None)

    def find(self, path: str) -> Optional[ConfigVariable]:
        """
        Look up a descendant by dotted path.

        Args:
            path: Dotted path (e.g., "Drive.pid.kP")

        Returns:
            Variable at the path, or None if any segment is missing
        """
        node: Optional[ConfigVariable] = self
        for segment in path.split("."):
            if not isinstance(node, CustomVariable):
                return None
            node = node.get_variable(segment)
        return node

    def items(self) -> ItemsView[str, ConfigVariable]:
        return self._variables.items()

    def keys(self):
        return self._variables.keys()

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def get_value(self) -> Dict[str, Any]:
        return {name: variable.get_value() for name, variable in self._variables.items()}

    def update_value(self, new_value: Any) -> None:
        """
        Apply a nested dictionary of values to the matching children.

        Keys without a matching child are ignored. Every value is converted
        before any field is written, so a value that fails conversion leaves
        the whole subtree unchanged.

        Raises:
            ValueError: If the update is not a dict or a value cannot be converted
        """
        for variable, value in self._collect_updates(new_value):
            variable.accessor.set(value)

    def _collect_updates(self, new_value: Any) -> List[Tuple[BasicVariable, Any]]:
        if not isinstance(new_value, dict):
            raise ValueError(f"Custom variables take a dict of values, got {type(new_value).__name__}")

        pending: List[Tuple[BasicVariable, Any]] = []
        for name, value in new_value.items():
            variable = self._variables.get(name)
            if variable is None:
                logger.warning(f"Ignoring update for unknown variable: {name}")
            elif isinstance(variable, CustomVariable):
                pending.extend(variable._collect_updates(value))
            else:
                pending.append((variable, variable.convert(value)))
        return pending

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": VariableType.CUSTOM.value,
            "value": {name: variable.to_dict() for name, variable in self._variables.items()},
        }

    def __repr__(self) -> str:
        return f"CustomVariable({list(self._variables)})"
