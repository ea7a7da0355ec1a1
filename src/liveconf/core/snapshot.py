"""
Value snapshot export.

Writes the current values of a variable tree to a YAML file for inspection.
"""

from enum import Enum
from typing import Any, Dict

from ruamel.yaml import YAML

from liveconf.core.errors import FieldAccessError
from liveconf.core.variables import CustomVariable
from liveconf.utils.helpers import join_path
from liveconf.utils.logging import get_logger

logger = get_logger("snapshot")


class SnapshotWriter:
    """Exports variable tree values using ruamel.yaml."""

    def __init__(self):
        """Initialize ruamel.yaml instance with proper settings."""
        self.yaml = YAML()
        self.yaml.width = 1000
        self.yaml.indent(mapping=2, sequence=4, offset=2)

    def snapshot(self, tree: CustomVariable, path: str = "") -> Dict[str, Any]:
        """
        Collect the current values of a tree as plain data.

        Enum values are stored by member name. Leaves whose value cannot be
        read are logged and left out.

        Args:
            tree: Tree to read
            path: Dotted path of the tree (used in log messages)

        Returns:
            Nested dictionary of values
        """
        result: Dict[str, Any] = {}
        for name, variable in tree.items():
            variable_path = join_path(path, name)
            if isinstance(variable, CustomVariable):
                result[name] = self.snapshot(variable, variable_path)
                continue

            try:
                value = variable.get_value()
            except FieldAccessError as e:
                logger.warning(f"Leaving {variable_path} out of snapshot: {e}")
                continue

            result[name] = value.name if isinstance(value, Enum) else value
        return result

    def save_snapshot(self, tree: CustomVariable, file_path: str) -> Dict[str, Any]:
        """
        Save the current values of a tree to a YAML file.

        Args:
            tree: Tree to read
            file_path: Output file path

        Returns:
            The data that was written
        """
        data = self.snapshot(tree)
        try:
            with open(file_path, "w", encoding="utf-8") as file:
                self.yaml.dump(data, file)
        except OSError as e:
            raise ValueError(f"Error writing to {file_path}: {e}")
        return data
