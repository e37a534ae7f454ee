"""Calculator session: angle mode and history owned by one interactive user.

``api.calculate`` never reads this state; the session passes its angle mode
into each call and records the successful results.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from .api import calculate
from .config import DEFAULT_ANGLE_MODE, HISTORY_LIMIT
from .history import load_history, save_history
from .logging_config import get_logger
from .types import AngleMode, CalculationResult, HistoryEntry

logger = get_logger("session")


class CalculatorSession:
    """Holds the angle mode and the bounded, newest-first history."""

    def __init__(
        self,
        angle_mode: AngleMode | str = DEFAULT_ANGLE_MODE,
        history_limit: int = HISTORY_LIMIT,
        history_file: Path | None = None,
        persist: bool = True,
    ):
        self.angle_mode = AngleMode.coerce(angle_mode)
        self.history_limit = history_limit
        self.history_file = history_file
        self.persist = persist
        self.history: list[HistoryEntry] = []
        if persist:
            self.history = load_history(history_file)[:history_limit]

    def calculate(self, expression: str) -> CalculationResult:
        """Calculate with the session's angle mode and record a success."""
        result = calculate(expression, self.angle_mode)
        if result.ok and result.result:
            self.record(expression.strip(), result.result)
        return result

    def record(self, expression: str, result: str) -> HistoryEntry:
        entry = HistoryEntry(
            expression=expression,
            result=result,
            timestamp=datetime.now().isoformat(timespec="seconds"),
        )
        self.history.insert(0, entry)
        del self.history[self.history_limit:]
        self._save()
        return entry

    def clear_history(self) -> None:
        self.history = []
        self._save()

    def recall(self, index: int) -> str:
        """Return the expression of history entry ``index`` (1 = newest).

        Raises:
            IndexError: If there is no such entry
        """
        if index < 1 or index > len(self.history):
            raise IndexError(f"No history entry {index}")
        return self.history[index - 1].expression

    def set_angle_mode(self, angle_mode: AngleMode | str) -> AngleMode:
        self.angle_mode = AngleMode.coerce(angle_mode)
        logger.debug("Angle mode set to %s", self.angle_mode.value)
        return self.angle_mode

    def toggle_angle_mode(self) -> AngleMode:
        if self.angle_mode is AngleMode.DEGREES:
            return self.set_angle_mode(AngleMode.RADIANS)
        return self.set_angle_mode(AngleMode.DEGREES)

    def _save(self) -> None:
        if self.persist:
            save_history(self.history, self.history_file)
