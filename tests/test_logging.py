"""Tests for springpath/logging.py."""
import os
from springpath.logging import Loggable


def test_indented_log():
    loggable = Loggable()
    loggable.log("top")
    loggable.log("first\nsecond", indent_level=1)
    loggable.log("")
    assert loggable.get_log() == "top\n  first\n  second"
    assert loggable.get_log(indent_level=1) == "  top\n    first\n    second"


def test_log_lines_and_clear():
    loggable = Loggable()
    loggable.log_lines(["a", "b"], indent_level=2)
    assert loggable.get_log() == "    a\n    b"
    loggable.clear_log()
    assert loggable.get_log() == ""


def test_write_log_to_dated_file(tmp_path):
    loggable = Loggable()
    loggable.log("Regenerated 1 paths")
    written = loggable.write_log_to_file(str(tmp_path / "springs.log"))
    assert os.path.basename(written).startswith("springs_")
    assert written.endswith(".log")
    with open(written) as f:
        contents = f.read()
    assert contents.startswith("Date: ")
    assert contents.endswith("Regenerated 1 paths")
