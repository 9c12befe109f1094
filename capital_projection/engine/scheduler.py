from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ScheduledAdjustment(Generic[T]):
    effective_month: int
    adjustment: T


def effective_month_index(year: int, month: int) -> int:
    """Month offset from simulation start; year is relative, month is 1-12."""
    return year * 12 + (month - 1)


def schedule_adjustments(adjustments: Iterable[T] | None) -> List[ScheduledAdjustment[T]]:
    """Attach the effective month index and sort ascending.

    sorted() is stable, so adjustments due the same month keep their input order.
    """
    scheduled = [
        ScheduledAdjustment(effective_month_index(item.year, item.month), item) for item in adjustments or []
    ]
    return sorted(scheduled, key=lambda entry: entry.effective_month)


class AdjustmentCursor(Generic[T]):
    """Walks a scheduled sequence forward, one simulated month at a time."""

    def __init__(self, scheduled: Sequence[ScheduledAdjustment[T]]) -> None:
        self._scheduled = scheduled
        self._position = 0

    def due(self, month: int) -> List[T]:
        due: List[T] = []
        while self._position < len(self._scheduled) and self._scheduled[self._position].effective_month == month:
            due.append(self._scheduled[self._position].adjustment)
            self._position += 1
        return due
