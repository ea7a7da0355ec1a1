"""Live, introspectable trees of tunable configuration variables."""

from .core.builder import VariableTreeBuilder, create_variable_from_class
from .core.discovery import ClassScanner, PackageClassScanner, StaticClassScanner
from .core.errors import FieldAccessError, UnsupportedFieldTypeError
from .core.markers import ConfigMarker, config, disabled
from .core.scanner import scan_for_classes, scan_packages
from .core.types import VariableType
from .core.variables import BasicVariable, ConfigVariable, CustomVariable

__all__ = [
    "BasicVariable",
    "ClassScanner",
    "ConfigMarker",
    "ConfigVariable",
    "CustomVariable",
    "FieldAccessError",
    "PackageClassScanner",
    "StaticClassScanner",
    "UnsupportedFieldTypeError",
    "VariableTreeBuilder",
    "VariableType",
    "config",
    "create_variable_from_class",
    "disabled",
    "scan_for_classes",
    "scan_packages",
]
