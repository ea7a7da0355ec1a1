"""
Exceptions raised while building and using variable trees.
"""


class FieldAccessError(Exception):
    """Raised when a field's current value cannot be read or written."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"Cannot access field {field_name}: {message}")


class UnsupportedFieldTypeError(TypeError):
    """Raised when a field's declared type cannot be mapped to a variable."""

    def __init__(self, field_name: str, field_type: object):
        self.field_name = field_name
        self.field_type = field_type
        type_name = getattr(field_type, "__qualname__", None) or repr(field_type)
        module = getattr(field_type, "__module__", None)
        if module and module != "builtins" and isinstance(field_type, type):
            type_name = f"{module}.{type_name}"
        super().__init__(f"Unsupported field type: {type_name} (field {field_name})")
