"""Recurrence calculator: nominal due-dates of a chore inside a query window."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, List


class Recurrence:
    """
    Nominal due-dates ``start_date + k * frequency_days`` (k >= 0) within a window.

    The object is a restartable iterable: each ``iter()`` call starts a fresh,
    lazily evaluated sequence. Dates before ``start_date`` or after ``end_date``
    (when given) are never produced.
    """
    
    def __init__(
        self,
        start_date: date,
        frequency_days: int,
        window_start: date,
        window_end: date,
        end_date: date | None = None,
    ):
        if frequency_days is None or frequency_days < 1:
            raise ValueError(f"frequency_days must be >= 1, got {frequency_days}")
        self.start_date = start_date
        self.frequency_days = frequency_days
        self.window_start = window_start
        self.window_end = window_end if end_date is None else min(window_end, end_date)
    
    def first_index(self) -> int:
        """Smallest k whose due-date is on or after the window start."""
        offset = (self.window_start - self.start_date).days
        if offset <= 0:
            return 0
        return -(-offset // self.frequency_days)  # ceil
    
    def __iter__(self) -> Iterator[date]:
        step = timedelta(days=self.frequency_days)
        current = self.start_date + self.first_index() * step
        while current <= self.window_end:
            yield current
            current += step
    
    def __repr__(self) -> str:
        return (
            f"<Recurrence(start={self.start_date}, every={self.frequency_days}d, "
            f"window=[{self.window_start}, {self.window_end}])>"
        )


def due_dates(
    start_date: date,
    frequency_days: int,
    window_start: date,
    window_end: date,
    end_date: date | None = None,
) -> List[date]:
    """Materialize the nominal due-dates within [window_start, window_end]."""
    return list(Recurrence(start_date, frequency_days, window_start, window_end, end_date))


def is_nominal_date(
    day: date,
    start_date: date,
    frequency_days: int,
    end_date: date | None = None,
) -> bool:
    """True if ``day`` is one of the chore's nominal due-dates."""
    if day < start_date:
        return False
    if end_date is not None and day > end_date:
        return False
    return (day - start_date).days % frequency_days == 0
