"""
Variable tree construction.

Turns a configuration class into a CustomVariable whose children mirror the
class's tunable fields:
1. Class-scope, non-final fields of the root class become children
2. Scalar fields become BasicVariables bound to a FieldAccessor
3. Structured fields become CustomVariables built from the field's current value
"""

from typing import Any, List

from liveconf.core.errors import FieldAccessError, UnsupportedFieldTypeError
from liveconf.core.fields import FieldAccessor, FieldDescriptor, describe_fields
from liveconf.core.types import VariableType
from liveconf.core.variables import BasicVariable, ConfigVariable, CustomVariable
from liveconf.utils.helpers import qualified_name
from liveconf.utils.logging import get_logger

logger = get_logger("builder")


class VariableTreeBuilder:
    """Builds variable trees from configuration classes."""

    def __init__(self) -> None:
        """Initialize the builder with an empty descent path."""
        self._descent: List[type] = []

    def create_variable_from_class(self, config_class: type) -> CustomVariable:
        """
        Build the variable tree of a configuration root class.

        Only class-scope fields that are not final are exposed; all other
        fields are skipped silently.

        Args:
            config_class: Configuration root class

        Returns:
            CustomVariable holding one child per exposed field

        Raises:
            UnsupportedFieldTypeError: If a field's type cannot be represented
        """
        custom_variable = CustomVariable()

        self._descent.append(config_class)
        try:
            for field in describe_fields(config_class):
                if not field.is_static or field.is_final:
                    continue
                custom_variable.put_variable(
                    field.name, self.create_variable_from_field(field, None)
                )
        finally:
            self._descent.pop()

        return custom_variable

    def create_variable_from_field(
        self, field: FieldDescriptor, parent: Any
    ) -> ConfigVariable:
        """
        Build the variable for a single field.

        Args:
            field: Field to expose
            parent: Object the field is read from (None for class-scope fields)

        Returns:
            BasicVariable for scalar fields, CustomVariable for structured ones

        Raises:
            UnsupportedFieldTypeError: If the field's type cannot be represented
        """
        var_type = VariableType.from_type(field.field_type)

        if var_type.is_basic:
            return BasicVariable(var_type, FieldAccessor(field, parent))
        if var_type is VariableType.CUSTOM:
            return self._create_custom_variable(field, parent)

        raise UnsupportedFieldTypeError(field.qualified_name, field.field_type)

    def _create_custom_variable(
        self, field: FieldDescriptor, parent: Any
    ) -> CustomVariable:
        field_class = field.field_type
        custom_variable = CustomVariable()

        if field_class in self._descent:
            logger.warning(
                f"Truncating cyclic config type {qualified_name(field_class)} "
                f"at field {field.qualified_name}"
            )
            return custom_variable

        nested_fields = describe_fields(field_class)

        # Nested fields are gated on the enclosing field's mutability,
        # not on their own modifiers.
        if field.is_final or not nested_fields:
            return custom_variable

        try:
            value = FieldAccessor(field, parent).get()
        except FieldAccessError as e:
            logger.warning(f"Skipping nested fields of {field.qualified_name}: {e}")
            return custom_variable

        self._descent.append(field_class)
        try:
            for nested_field in nested_fields:
                custom_variable.put_variable(
                    nested_field.name,
                    self.create_variable_from_field(nested_field, value),
                )
        finally:
            self._descent.pop()

        return custom_variable


def create_variable_from_class(config_class: type) -> CustomVariable:
    """Build the variable tree of a configuration root class with a fresh builder."""
    return VariableTreeBuilder().create_variable_from_class(config_class)
