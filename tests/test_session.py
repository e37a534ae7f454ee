"""Tests for the calculator session and persistent history."""

import json

import pytest

from calculator_pkg.history import load_history, save_history
from calculator_pkg.session import CalculatorSession
from calculator_pkg.types import AngleMode, HistoryEntry


@pytest.fixture
def history_file(tmp_path):
    return tmp_path / "history" / "history.json"


def test_successful_results_are_recorded_newest_first(history_file):
    session = CalculatorSession(history_file=history_file)
    session.calculate("1 + 1")
    session.calculate("  2 * 3  ")
    assert [e.expression for e in session.history] == ["2 * 3", "1 + 1"]
    assert [e.result for e in session.history] == ["6", "2"]
    assert session.history[0].timestamp


def test_errors_are_not_recorded(history_file):
    session = CalculatorSession(history_file=history_file)
    result = session.calculate("1/0")
    assert result.ok is False
    assert session.history == []


def test_history_survives_a_new_session(history_file):
    CalculatorSession(history_file=history_file).calculate("sqrt(16)")
    reloaded = CalculatorSession(history_file=history_file)
    assert reloaded.history[0].expression == "sqrt(16)"
    assert reloaded.history[0].result == "4"


def test_history_limit(history_file):
    session = CalculatorSession(history_limit=3, history_file=history_file)
    for i in range(5):
        session.calculate(f"{i} + 1")
    assert len(session.history) == 3
    assert session.history[0].expression == "4 + 1"
    assert session.history[-1].expression == "2 + 1"


def test_recall(history_file):
    session = CalculatorSession(history_file=history_file)
    session.calculate("2 + 2")
    session.calculate("3 + 3")
    assert session.recall(1) == "3 + 3"
    assert session.recall(2) == "2 + 2"
    with pytest.raises(IndexError):
        session.recall(3)
    with pytest.raises(IndexError):
        session.recall(0)


def test_clear_history(history_file):
    session = CalculatorSession(history_file=history_file)
    session.calculate("2 + 2")
    session.clear_history()
    assert session.history == []
    assert CalculatorSession(history_file=history_file).history == []


def test_angle_mode_applies_to_calculations(history_file):
    session = CalculatorSession(history_file=history_file)
    assert session.angle_mode is AngleMode.DEGREES
    assert session.calculate("sin(90)").result == "1"
    assert session.toggle_angle_mode() is AngleMode.RADIANS
    assert session.calculate("sin(90)").result == "0.8939966636"
    assert session.toggle_angle_mode() is AngleMode.DEGREES


def test_set_angle_mode(history_file):
    session = CalculatorSession(history_file=history_file)
    assert session.set_angle_mode("Radians") is AngleMode.RADIANS
    with pytest.raises(ValueError):
        session.set_angle_mode("grad")


def test_persist_false_writes_nothing(history_file):
    session = CalculatorSession(history_file=history_file, persist=False)
    session.calculate("2 + 2")
    assert len(session.history) == 1
    assert not history_file.exists()


class TestHistoryFile:
    def test_missing_file(self, history_file):
        assert load_history(history_file) == []

    def test_corrupt_file(self, history_file):
        history_file.parent.mkdir(parents=True)
        history_file.write_text("{not json", encoding="utf-8")
        assert load_history(history_file) == []

    def test_not_utf8(self, history_file):
        history_file.parent.mkdir(parents=True)
        history_file.write_bytes(b'{"version": 1, "entries": ["\xff\xfe"]}')
        assert load_history(history_file) == []

    @pytest.mark.parametrize("entries", [5, None, "1+1", {"expression": "1"}])
    def test_entries_not_a_list(self, history_file, entries):
        history_file.parent.mkdir(parents=True)
        history_file.write_text(
            json.dumps({"version": 1, "entries": entries}), encoding="utf-8"
        )
        assert load_history(history_file) == []
        assert CalculatorSession(history_file=history_file).history == []

    def test_version_mismatch(self, history_file):
        history_file.parent.mkdir(parents=True)
        history_file.write_text(
            json.dumps({"version": 999, "entries": [{"expression": "1", "result": "1"}]}),
            encoding="utf-8",
        )
        assert load_history(history_file) == []

    def test_malformed_entries_are_skipped(self, history_file):
        history_file.parent.mkdir(parents=True)
        history_file.write_text(
            json.dumps(
                {
                    "version": 1,
                    "entries": [
                        {"expression": "1+1", "result": "2", "timestamp": "t"},
                        {"result": "3"},
                    ],
                }
            ),
            encoding="utf-8",
        )
        entries = load_history(history_file)
        assert [e.expression for e in entries] == ["1+1"]

    def test_save_and_load(self, history_file):
        entries = [HistoryEntry("2 × 3", "6", "2024-01-01T00:00:00")]
        assert save_history(entries, history_file) is True
        assert not history_file.with_suffix(".tmp").exists()
        assert load_history(history_file) == entries
