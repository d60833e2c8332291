"""Views over a household schedule: current week, audit and summaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from choreplan.config import ChoreConfig
from choreplan.engine.occurrences import Occurrence, ScheduleResult
from choreplan.engine.reconcile import STATUS_DONE, STATUSES
from choreplan.errors import ChoreConfigurationError

from .schedule import build_household_schedule


@dataclass
class WeekItem:
    occurrence: Occurrence
    chore_title: str
    zone_name: str
    description: str | None = None


@dataclass
class ZoneStatus:
    zone_name: str
    has_pending: bool = False
    has_done: bool = False


@dataclass
class WeekView:
    week_start: date
    week_end: date
    pending: List[WeekItem] = field(default_factory=list)
    done: List[WeekItem] = field(default_factory=list)
    zones: List[ZoneStatus] = field(default_factory=list)
    errors: Dict[str, ChoreConfigurationError] = field(default_factory=dict)


@dataclass
class MatrixCell:
    date: date
    status: str
    assignee_id: Optional[str]
    completion_id: Optional[str] = None


@dataclass
class ZoneMatrix:
    """Chores of one zone by week of the year; cells are keyed by 1-based week number."""

    zone_name: str
    year: int
    weeks: List[Tuple[date, date]]
    chores: List[object] = field(default_factory=list)
    cells: Dict[str, Dict[int, MatrixCell]] = field(default_factory=dict)
    errors: Dict[str, ChoreConfigurationError] = field(default_factory=dict)


def week_bounds(today: date, week_start: int = 0) -> Tuple[date, date]:
    """First and last day of the week containing ``today`` (week_start: 0=Monday)."""
    offset = (today.weekday() - week_start) % 7
    start = today - timedelta(days=offset)
    return start, start + timedelta(days=6)


def _item(result: ScheduleResult, occurrence: Occurrence) -> WeekItem:
    chore = result.chores[occurrence.chore_id]
    return WeekItem(occurrence, chore.title, chore.zone_name, chore.description)


def _zone_sort_key(item: WeekItem):
    return (item.zone_name, item.occurrence.date, item.chore_title)


def current_week_view(
    session: Session,
    household_id: str,
    member_id: str,
    today: date | None = None,
    cfg: ChoreConfig | None = None,
) -> WeekView:
    """
    Build the "this week" board.

    Pending holds every occurrence still due from ``overdue_lookback_days`` ago
    through the end of this week, so overdue work from earlier weeks stays
    visible. Done holds occurrences of this week only. Both lists are sorted by
    zone name, then date.
    """
    cfg = cfg or ChoreConfig()
    today = today or date.today()
    week_start, week_end = week_bounds(today, cfg.week_start)
    lookback_start = min(week_start, today - timedelta(days=cfg.overdue_lookback_days))

    result = build_household_schedule(session, household_id, member_id, lookback_start, week_end, today, cfg)
    view = WeekView(week_start=week_start, week_end=week_end, errors=result.errors)

    for occurrence in result.occurrences:
        if occurrence.status == STATUS_DONE:
            if week_start <= occurrence.date <= week_end:
                view.done.append(_item(result, occurrence))
        elif occurrence.is_due:
            view.pending.append(_item(result, occurrence))

    view.pending.sort(key=_zone_sort_key)
    view.done.sort(key=_zone_sort_key)

    zones: Dict[str, ZoneStatus] = {}
    for item in view.done:
        zones.setdefault(item.zone_name, ZoneStatus(item.zone_name)).has_done = True
    for item in view.pending:
        zones.setdefault(item.zone_name, ZoneStatus(item.zone_name)).has_pending = True
    view.zones = sorted(zones.values(), key=lambda z: z.zone_name)
    return view


def audit_view(
    session: Session,
    household_id: str,
    member_id: str,
    window_start: date,
    window_end: date,
    today: date | None = None,
    cfg: ChoreConfig | None = None,
) -> List[Occurrence]:
    """All occurrences in the window, skipped ones included."""
    result = build_household_schedule(session, household_id, member_id, window_start, window_end, today, cfg)
    return result.occurrences


def year_weeks(year: int, week_start: int = 0) -> List[Tuple[date, date]]:
    """The 53 weeks starting with the one that contains January 1st."""
    first, _ = week_bounds(date(year, 1, 1), week_start)
    return [(first + timedelta(weeks=i), first + timedelta(weeks=i, days=6)) for i in range(53)]


def zone_matrix_view(
    session: Session,
    household_id: str,
    member_id: str,
    zone: str,
    year: int,
    today: date | None = None,
    cfg: ChoreConfig | None = None,
) -> ZoneMatrix:
    """
    Yearly chores-by-week grid for one zone.

    Each cell shows the first occurrence of that chore in the week, unless a
    later one in the same week is done, in which case the done one is shown.
    """
    cfg = cfg or ChoreConfig()
    weeks = year_weeks(year, cfg.week_start)
    first_day = weeks[0][0]

    result = build_household_schedule(session, household_id, member_id, first_day, weeks[-1][1], today, cfg)
    matrix = ZoneMatrix(zone_name=zone, year=year, weeks=weeks)
    matrix.chores = sorted((c for c in result.chores.values() if c.zone_name == zone), key=lambda c: c.title)
    matrix.cells = {c.id: {} for c in matrix.chores}
    matrix.errors = {cid: e for cid, e in result.errors.items() if cid in matrix.cells}

    for occurrence in result.occurrences:
        row = matrix.cells.get(occurrence.chore_id)
        if row is None:
            continue
        week = (occurrence.date - first_day).days // 7 + 1
        existing = row.get(week)
        if existing is not None and (existing.status == STATUS_DONE or occurrence.status != STATUS_DONE):
            continue
        row[week] = MatrixCell(
            date=occurrence.date,
            status=occurrence.status,
            assignee_id=occurrence.assignee_id,
            completion_id=getattr(occurrence.completion, "id", None),
        )
    return matrix


def due_occurrences(occurrences: List[Occurrence]) -> List[Occurrence]:
    """Pending and overdue occurrences only."""
    return [o for o in occurrences if o.is_due]


def occurrences_frame(occurrences: List[Occurrence], chores: Dict[str, object] | None = None) -> pd.DataFrame:
    """Flatten occurrences into a DataFrame (one row per occurrence)."""
    columns = ["chore_id", "title", "zone", "original_date", "date", "assignee_id", "status", "completion_id", "completed_at"]
    rows = []
    for o in occurrences:
        chore = (chores or {}).get(o.chore_id)
        rows.append(
            {
                "chore_id": o.chore_id,
                "title": chore.title if chore is not None else None,
                "zone": chore.zone_name if chore is not None else None,
                "original_date": o.original_date.isoformat(),
                "date": o.date.isoformat(),
                "assignee_id": o.assignee_id,
                "status": o.status,
                "completion_id": getattr(o.completion, "id", None),
                "completed_at": o.completion.completed_at.isoformat() if o.completion is not None else None,
            }
        )
    return pd.DataFrame(rows, columns=columns)


def summarize_occurrences(occurrences: List[Occurrence]) -> str:
    """Text table of occurrence counts per assignee and status."""
    if not occurrences:
        return "No occurrences."
    df = occurrences_frame(occurrences)
    df["assignee_id"] = df["assignee_id"].fillna("(unassigned)")

    counts = df.groupby(["assignee_id", "status"]).size().unstack(fill_value=0)
    counts = counts.reindex(columns=list(STATUSES), fill_value=0)
    per_day = df.groupby(["date", "status"]).size().unstack(fill_value=0)

    lines = ["Occurrences per assignee per status:"]
    lines.append(counts.to_string())
    lines.append("")
    lines.append("Occurrences per day per status:")
    lines.append(per_day.to_string())
    return "\n".join(lines)
