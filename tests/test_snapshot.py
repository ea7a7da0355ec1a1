"""
Tests for value snapshot export.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pytest
import yaml

from liveconf.core.builder import create_variable_from_class
from liveconf.core.snapshot import SnapshotWriter
from liveconf.core.variables import CustomVariable


class Alliance(Enum):
    RED = 1
    BLUE = 2


@dataclass
class Pid:
    kP: float = 0.5
    kI: float = 0.0


def _make_tree():
    class Auto:
        alliance = Alliance.BLUE
        delay = 2
        park = True
        pid = Pid()

    tree = CustomVariable()
    tree.put_variable("Auto", create_variable_from_class(Auto))
    return tree


class TestSnapshotWriter:
    """Test SnapshotWriter export."""

    def test_snapshot_values(self):
        """Test collecting values as plain data."""
        data = SnapshotWriter().snapshot(_make_tree())

        assert data == {
            "Auto": {
                "alliance": "BLUE",
                "delay": 2,
                "park": True,
                "pid": {"kP": 0.5, "kI": 0.0},
            }
        }

    def test_snapshot_skips_unreadable(self, caplog):
        """Test that unreadable leaves are logged and left out."""

        class Root:
            gain = 1.0
            pid: Optional[Pid] = None

        tree = create_variable_from_class(Root)

        with caplog.at_level(logging.WARNING, logger="liveconf"):
            data = SnapshotWriter().snapshot(tree)

        assert data == {"gain": 1.0, "pid": {}}
        assert "pid.kP" in caplog.text

    def test_save_snapshot(self, tmp_path):
        """Test writing the snapshot to a YAML file."""
        output = tmp_path / "snapshot.yaml"

        written = SnapshotWriter().save_snapshot(_make_tree(), str(output))

        with open(output, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        assert loaded == written
        assert loaded["Auto"]["pid"]["kP"] == 0.5

    def test_save_snapshot_bad_path(self, tmp_path):
        """Test that write failures raise ValueError."""
        output = tmp_path / "missing_dir" / "snapshot.yaml"

        with pytest.raises(ValueError):
            SnapshotWriter().save_snapshot(_make_tree(), str(output))
