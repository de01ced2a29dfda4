"""Injectable observers for inspecting a preparation run."""

from __future__ import annotations

import logging
from typing import List

from cutlist_prep.contracts import PrepRunResult

logger = logging.getLogger(__name__)


class PrepObserver:
    """No-op base; subclass and override what you need."""

    def on_parts_prepared(self, result: PrepRunResult) -> None:
        pass


class LoggingObserver(PrepObserver):
    """Logs the prepared parts as a plain-text table."""

    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def on_parts_prepared(self, result: PrepRunResult) -> None:
        if not logger.isEnabledFor(self.level):
            return
        logger.log(self.level, "Prepared %d parts, role counters %s",
                   len(result.parts), result.role_counts)
        for line in format_parts_table(result):
            logger.log(self.level, "%s", line)


class RecordingObserver(PrepObserver):
    """Keeps every result it sees; handy in tests and notebooks."""

    def __init__(self):
        self.results: List[PrepRunResult] = []

    def on_parts_prepared(self, result: PrepRunResult) -> None:
        self.results.append(result)


def format_parts_table(result: PrepRunResult) -> List[str]:
    header = f"{'id':<28} {'role':<7} {'size':>15} {'rotate':<7} {'laminate':<14} grain"
    lines = [header, "-" * len(header)]
    for part in result.parts:
        size = f"{part.nominal_width:g}x{part.nominal_height:g}mm"
        lines.append(
            f"{part.id:<28} {part.role.value:<7} {size:>15} "
            f"{'yes' if part.rotation_allowed else 'LOCKED':<7} "
            f"{part.laminate_code:<14} {'yes' if part.grain_locked else 'no'}"
        )
    return lines
