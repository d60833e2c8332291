"""Tests for the occurrence pipeline and the multi-chore builder."""

from datetime import date, datetime

import pytest

from choreplan.config import ChoreConfig
from choreplan.domain.models import Chore, ChoreCompletion, ChoreOverride
from choreplan.engine.occurrences import ScheduleBuilder, calculate_chore_occurrences
from choreplan.engine.overrides import Skip
from choreplan.engine.reconcile import STATUS_DONE, STATUS_OVERDUE, STATUS_PENDING, STATUS_SKIPPED

JAN_1 = date(2024, 1, 1)
JAN_31 = date(2024, 1, 31)


@pytest.fixture
def rotation_chore():
    return Chore(
        id="bathroom",
        household_id="home",
        title="Clean bathroom",
        frequency_days=7,
        start_date=JAN_1,
        assignment_strategy="rotation",
        rotation_sequence=["A", "B", "C"],
        rotation_interval_days=7,
    )


def test_nominal_schedule(rotation_chore):
    occurrences = calculate_chore_occurrences(rotation_chore, [], [], JAN_1, JAN_31, today=JAN_1)
    assert [(o.date, o.assignee_id) for o in occurrences] == [
        (date(2024, 1, 1), "A"),
        (date(2024, 1, 8), "B"),
        (date(2024, 1, 15), "C"),
        (date(2024, 1, 22), "A"),
        (date(2024, 1, 29), "B"),
    ]
    assert all(o.status == STATUS_PENDING for o in occurrences)


def test_skip_removed_from_due_but_kept_in_audit(rotation_chore):
    skip = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 8), is_skipped=True)
    occurrences = calculate_chore_occurrences(rotation_chore, [skip], [], JAN_1, JAN_31, today=date(2024, 1, 20))

    by_date = {o.original_date: o for o in occurrences}
    assert by_date[date(2024, 1, 8)].status == STATUS_SKIPPED
    assert by_date[date(2024, 1, 8)].override == Skip(date(2024, 1, 8))
    assert not by_date[date(2024, 1, 8)].is_due

    due = [o.date for o in occurrences if o.is_due]
    assert date(2024, 1, 8) not in due
    assert date(2024, 1, 15) in due
    assert by_date[date(2024, 1, 15)].status == STATUS_OVERDUE


def test_completion_flips_status_to_done(rotation_chore):
    completion = ChoreCompletion(chore_id="bathroom", completed_at=datetime(2024, 1, 15, 12))
    before = calculate_chore_occurrences(rotation_chore, [], [], JAN_1, JAN_31, today=date(2024, 1, 16))
    after = calculate_chore_occurrences(rotation_chore, [], [completion], JAN_1, JAN_31, today=date(2024, 1, 16))

    assert {o.date: o.status for o in before}[date(2024, 1, 15)] == STATUS_OVERDUE
    assert {o.date: o.status for o in after}[date(2024, 1, 15)] == STATUS_DONE
    assert [o.status for o in after].count(STATUS_DONE) == 1


def test_reassignment_replaces_rotation(rotation_chore):
    swap = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 8), new_assignee_id="C")
    occurrences = calculate_chore_occurrences(rotation_chore, [swap], [], JAN_1, JAN_31, today=JAN_1)
    assert {o.date: o.assignee_id for o in occurrences}[date(2024, 1, 8)] == "C"


def test_reschedule_keeps_rotation_of_original_slot(rotation_chore):
    move = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 8), new_date=date(2024, 1, 17))
    occurrences = calculate_chore_occurrences(rotation_chore, [move], [], JAN_1, JAN_31, today=JAN_1)
    moved = [o for o in occurrences if o.original_date == date(2024, 1, 8)]
    assert len(moved) == 1
    assert moved[0].date == date(2024, 1, 17)
    assert moved[0].assignee_id == "B"
    assert [o.date for o in occurrences] == sorted(o.date for o in occurrences)


def test_reschedule_out_of_and_into_window(rotation_chore):
    move = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 29), new_date=date(2024, 2, 2))

    january = calculate_chore_occurrences(rotation_chore, [move], [], JAN_1, JAN_31, today=JAN_1)
    assert date(2024, 1, 29) not in [o.original_date for o in january]

    february = calculate_chore_occurrences(
        rotation_chore, [move], [], date(2024, 2, 1), date(2024, 2, 29), today=JAN_1
    )
    assert (february[0].original_date, february[0].date) == (date(2024, 1, 29), date(2024, 2, 2))


def test_override_for_unscheduled_date_is_ignored(rotation_chore):
    stray = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 9), new_date=date(2024, 2, 3))
    february = calculate_chore_occurrences(
        rotation_chore, [stray], [], date(2024, 2, 1), date(2024, 2, 29), today=JAN_1
    )
    assert date(2024, 2, 3) not in [o.date for o in february]


def test_inverted_window_rejected(rotation_chore):
    with pytest.raises(ValueError):
        calculate_chore_occurrences(rotation_chore, [], [], JAN_31, JAN_1, today=JAN_1)


def test_builder_isolates_misconfigured_chores(rotation_chore):
    broken = Chore(
        id="broken",
        household_id="home",
        title="Broken rotation",
        frequency_days=7,
        start_date=JAN_1,
        assignment_strategy="rotation",
        rotation_sequence=["A"],
        rotation_interval_days=0,
    )
    result = ScheduleBuilder(today=JAN_1).build([broken, rotation_chore], [], [], JAN_1, JAN_31)

    assert set(result.errors) == {"broken"}
    assert {o.chore_id for o in result.occurrences} == {"bathroom"}
    assert len(result.occurrences) == 5


def test_builder_routes_rows_by_chore(rotation_chore):
    other = Chore(
        id="trash",
        household_id="home",
        title="Trash",
        frequency_days=7,
        start_date=JAN_1,
        assignment_strategy="fixed",
        fixed_assignee_id="B",
    )
    skip = ChoreOverride(chore_id="trash", original_date=date(2024, 1, 8), is_skipped=True)
    done = ChoreCompletion(chore_id="bathroom", completed_at=datetime(2024, 1, 8, 9))

    result = ScheduleBuilder(today=date(2024, 1, 9)).build(
        [rotation_chore, other], [skip], [done], date(2024, 1, 8), date(2024, 1, 8)
    )
    statuses = {o.chore_id: o.status for o in result.occurrences}
    assert statuses == {"bathroom": STATUS_DONE, "trash": STATUS_SKIPPED}


def test_builder_rejects_oversized_window(rotation_chore):
    builder = ScheduleBuilder(today=JAN_1, cfg=ChoreConfig(max_window_days=10))
    with pytest.raises(ValueError):
        builder.build([rotation_chore], [], [], JAN_1, JAN_31)


def test_configured_completion_window(rotation_chore):
    late = ChoreCompletion(chore_id="bathroom", completed_at=datetime(2024, 1, 5, 9))
    strict = ScheduleBuilder(today=date(2024, 1, 9), cfg=ChoreConfig(completion_early_days=0, completion_late_days=1))
    result = strict.build([rotation_chore], [], [late], JAN_1, date(2024, 1, 8))
    assert [o.status for o in result.occurrences] == [STATUS_OVERDUE, STATUS_OVERDUE]


def test_double_record_after_reschedule_marks_one_occurrence(rotation_chore):
    """01-08 moved to 01-14 sits next to 01-15; two records of one visit count once."""
    moved = ChoreOverride(chore_id="bathroom", original_date=date(2024, 1, 8), new_date=date(2024, 1, 14))
    first = ChoreCompletion(id="first", chore_id="bathroom", completed_at=datetime(2024, 1, 14, 10))
    again = ChoreCompletion(id="again", chore_id="bathroom", completed_at=datetime(2024, 1, 14, 10, 1))

    occurrences = calculate_chore_occurrences(
        rotation_chore, [moved], [first, again], JAN_1, JAN_31, today=date(2024, 1, 16)
    )
    done = [o for o in occurrences if o.status == STATUS_DONE]
    assert [(o.original_date, o.date) for o in done] == [(date(2024, 1, 8), date(2024, 1, 14))]
    assert done[0].completion.id == "first"
    by_original = {o.original_date: o.status for o in occurrences}
    assert by_original[date(2024, 1, 15)] == STATUS_OVERDUE
