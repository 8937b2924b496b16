#
# Toolo - Paths Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
from pathlib import Path

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from toolo import paths, tool
from toolo.paths import find_root_caller, get_relative_path

HERE = os.path.dirname(os.path.abspath(__file__))


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFindRootCaller:

    def test_is_this_file(self):
        assert find_root_caller() == os.path.abspath(__file__)

    def test_depth_exhausted(self):
        assert find_root_caller(max_depth=0) == ""


class TestGetRelativePath:

    @pytest.mark.parametrize(
        "target, expected",
        [
            pytest.param(os.path.join(HERE, "data", "x.csv"), os.path.join("data", "x.csv"), id="child"),
            pytest.param(os.path.join(os.path.dirname(HERE), "setup.cfg"), os.path.join("..", "setup.cfg"), id="parent"),
            pytest.param(HERE, ".", id="same-dir"),
        ],
    )
    def test_relative(self, target, expected):
        assert get_relative_path(target) == expected

    def test_path_like(self):
        assert get_relative_path(Path(HERE) / "a.txt") == "a.txt"

    def test_no_caller_raises(self, monkeypatch):
        monkeypatch.setattr(paths, "find_root_caller", lambda: "")
        with pytest.raises(RuntimeError, match=r"could not determine caller path"):
            get_relative_path("/tmp/x")


class TestToolGetRelativePath:

    def test_relative(self):
        assert tool.get_relative_path(os.path.join(HERE, "a.txt")) == "a.txt"

    def test_fallback_to_input(self, monkeypatch):
        monkeypatch.setattr(paths, "find_root_caller", lambda: "")
        assert tool.get_relative_path(Path("/tmp/x")) == os.fspath(Path("/tmp/x"))
