"""
Tests for variable tree nodes.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import pytest

from liveconf.core.builder import create_variable_from_class
from liveconf.core.errors import FieldAccessError
from liveconf.core.fields import FieldAccessor, describe_fields
from liveconf.core.types import VariableType
from liveconf.core.variables import BasicVariable, CustomVariable


class Mode(Enum):
    SLOW = 1
    FAST = 2


@dataclass
class Pid:
    kP: float = 0.5
    kI: float = 0.0


def _accessor(cls, name, owner=None):
    descriptor = next(f for f in describe_fields(cls) if f.name == name)
    return FieldAccessor(descriptor, owner)


def _make_tuning_class():
    class Tuning:
        speed = 0.5
        mode = Mode.SLOW
        enabled = True
        name = "tuning"
        pid = Pid()

    return Tuning


class TestBasicVariable:
    """Test BasicVariable value routing."""

    def test_get_value_reads_field(self):
        """Test that values are read through the accessor."""
        Tuning = _make_tuning_class()
        variable = BasicVariable(VariableType.DOUBLE, _accessor(Tuning, "speed"))

        assert variable.type is VariableType.DOUBLE
        assert variable.get_value() == 0.5

        Tuning.speed = 0.8
        assert variable.get_value() == 0.8

    def test_update_value_coerces(self):
        """Test that updates are converted to the variable's kind."""
        Tuning = _make_tuning_class()
        variable = BasicVariable(VariableType.DOUBLE, _accessor(Tuning, "speed"))

        variable.update_value("0.75")

        assert Tuning.speed == 0.75

    def test_enum_update_by_name(self):
        """Test updating an enum variable with a member name."""
        Tuning = _make_tuning_class()
        variable = BasicVariable(VariableType.ENUM, _accessor(Tuning, "mode"))

        variable.update_value("FAST")

        assert Tuning.mode is Mode.FAST
        assert variable.enum_class is Mode

    def test_enum_to_dict(self):
        """Test the plain-data description of an enum variable."""
        Tuning = _make_tuning_class()
        variable = BasicVariable(VariableType.ENUM, _accessor(Tuning, "mode"))

        assert variable.to_dict() == {
            "type": "enum",
            "enum_class": "Mode",
            "enum_values": ["SLOW", "FAST"],
            "value": "SLOW",
        }

    def test_invalid_update_leaves_value(self):
        """Test that a failed conversion does not write the field."""
        Tuning = _make_tuning_class()
        variable = BasicVariable(VariableType.BOOLEAN, _accessor(Tuning, "enabled"))

        with pytest.raises(ValueError):
            variable.update_value("sometimes")

        assert Tuning.enabled is True

    def test_non_basic_type_rejected(self):
        """Test that BasicVariable only accepts scalar kinds."""
        Tuning = _make_tuning_class()

        with pytest.raises(ValueError):
            BasicVariable(VariableType.CUSTOM, _accessor(Tuning, "pid"))

    def test_unreadable_value(self):
        """Test that access failures propagate from get_value."""
        variable = BasicVariable(VariableType.DOUBLE, _accessor(Pid, "kP"))

        with pytest.raises(FieldAccessError):
            variable.get_value()


class TestCustomVariable:
    """Test CustomVariable container behaviour."""

    def test_put_and_get(self):
        """Test adding and retrieving children."""
        parent = CustomVariable()
        child = CustomVariable()
        parent.put_variable("child", child)

        assert parent.get_variable("child") is child
        assert parent.get_variable("missing") is None
        assert "child" in parent
        assert len(parent) == 1

    def test_insertion_order(self):
        """Test that children keep insertion order."""
        parent = CustomVariable()
        for name in ["b", "a", "c"]:
            parent.put_variable(name, CustomVariable())

        assert list(parent) == ["b", "a", "c"]

    def test_last_write_wins_keeps_position(self):
        """Test replacing a child with the same name."""
        parent = CustomVariable()
        first, second = CustomVariable(), CustomVariable()
        parent.put_variable("x", first)
        parent.put_variable("y", CustomVariable())
        parent.put_variable("x", second)

        assert parent.get_variable("x") is second
        assert list(parent) == ["x", "y"]

    def test_remove_variable(self):
        """Test removing children."""
        parent = CustomVariable()
        child = CustomVariable()
        parent.put_variable("child", child)

        assert parent.remove_variable("child") is child
        assert parent.remove_variable("child") is None
        assert len(parent) == 0

    def test_find_dotted_path(self):
        """Test dotted path lookup."""
        Tuning = _make_tuning_class()
        tree = CustomVariable()
        tree.put_variable("Tuning", create_variable_from_class(Tuning))

        assert tree.find("Tuning.pid.kP").get_value() == 0.5
        assert tree.find("Tuning.pid.kX") is None
        assert tree.find("Tuning.speed.extra") is None

    def test_get_value_nested(self):
        """Test reading a whole subtree of values."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)

        assert tree.get_value() == {
            "speed": 0.5,
            "mode": Mode.SLOW,
            "enabled": True,
            "name": "tuning",
            "pid": {"kP": 0.5, "kI": 0.0},
        }

    def test_update_value_nested(self):
        """Test applying a nested dictionary of values."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)

        tree.update_value({"speed": 1, "pid": {"kI": "0.02"}, "mode": "FAST"})

        assert Tuning.speed == 1.0
        assert Tuning.pid.kI == 0.02
        assert Tuning.mode is Mode.FAST

    def test_update_value_ignores_unknown(self, caplog):
        """Test that unknown keys are logged and skipped."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)

        with caplog.at_level(logging.WARNING, logger="liveconf"):
            tree.update_value({"unknown": 1, "speed": 0.1})

        assert Tuning.speed == 0.1
        assert "unknown" in caplog.text

    def test_update_value_converts_before_writing(self):
        """Test that a bad value anywhere in the update leaves every field unchanged."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)

        with pytest.raises(ValueError):
            tree.update_value(
                {"speed": 0.9, "pid": {"kP": "0.7", "kI": "lots"}, "mode": "FAST"}
            )

        assert Tuning.speed == 0.5
        assert Tuning.pid.kP == 0.5
        assert Tuning.mode is Mode.SLOW

    def test_update_value_nested_requires_dict(self):
        """Test that a scalar aimed at a nested custom variable is rejected up front."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)

        with pytest.raises(ValueError):
            tree.update_value({"speed": 0.9, "pid": 1.0})

        assert Tuning.speed == 0.5

    def test_update_value_requires_dict(self):
        """Test that custom variables reject scalar updates."""
        with pytest.raises(ValueError):
            CustomVariable().update_value(3)

    def test_to_dict(self):
        """Test the plain-data description of a subtree."""
        Tuning = _make_tuning_class()
        tree = create_variable_from_class(Tuning)
        data = tree.to_dict()

        assert data["type"] == "custom"
        assert data["value"]["speed"] == {"type": "double", "value": 0.5}
        assert data["value"]["pid"]["value"]["kP"] == {"type": "double", "value": 0.5}
