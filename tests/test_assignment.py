"""Tests for the assignment resolver."""

from datetime import date, timedelta

import pytest

from choreplan.domain.models import Chore
from choreplan.engine.assignment import resolve_assignee, validate_chore_rules
from choreplan.errors import ChoreConfigurationError


def _chore(**kwargs):
    defaults = dict(
        id="chore-1",
        household_id="home",
        title="Bathroom",
        frequency_days=7,
        start_date=date(2024, 1, 1),
        assignment_strategy="none",
    )
    defaults.update(kwargs)
    return Chore(**defaults)


def test_strategy_none_has_no_assignee():
    assert resolve_assignee(_chore(), date(2024, 1, 8)) is None


def test_strategy_fixed_returns_fixed_assignee():
    chore = _chore(assignment_strategy="fixed", fixed_assignee_id="alice")
    assert resolve_assignee(chore, date(2024, 1, 1)) == "alice"
    assert resolve_assignee(chore, date(2024, 6, 3)) == "alice"


def test_rotation_wraps_cyclically():
    """Sequence [A, B, C] with interval 7 from 2024-01-01."""
    chore = _chore(assignment_strategy="rotation", rotation_sequence=["A", "B", "C"], rotation_interval_days=7)
    assert resolve_assignee(chore, date(2024, 1, 1)) == "A"
    assert resolve_assignee(chore, date(2024, 1, 8)) == "B"
    assert resolve_assignee(chore, date(2024, 1, 15)) == "C"
    assert resolve_assignee(chore, date(2024, 1, 22)) == "A"


@pytest.mark.parametrize("interval", [1, 3, 7, 14])
def test_rotation_is_periodic(interval):
    sequence = ["A", "B", "C", "D"]
    chore = _chore(
        frequency_days=1,
        assignment_strategy="rotation",
        rotation_sequence=sequence,
        rotation_interval_days=interval,
    )
    period = timedelta(days=len(sequence) * interval)
    for offset in range(0, 200):
        day = chore.start_date + timedelta(days=offset)
        assert resolve_assignee(chore, day) == resolve_assignee(chore, day + period)


def test_rotation_slower_than_frequency():
    """Daily chore rotating weekly: same person all week."""
    chore = _chore(
        frequency_days=1,
        assignment_strategy="rotation",
        rotation_sequence=["A", "B"],
        rotation_interval_days=7,
    )
    week_one = {resolve_assignee(chore, date(2024, 1, d)) for d in range(1, 8)}
    week_two = {resolve_assignee(chore, date(2024, 1, d)) for d in range(8, 15)}
    assert week_one == {"A"}
    assert week_two == {"B"}


def test_rotation_interval_defaults_to_frequency():
    chore = _chore(
        frequency_days=3,
        assignment_strategy="rotation",
        rotation_sequence=["A", "B"],
        rotation_interval_days=None,
    )
    assert resolve_assignee(chore, date(2024, 1, 1)) == "A"
    assert resolve_assignee(chore, date(2024, 1, 4)) == "B"
    assert resolve_assignee(chore, date(2024, 1, 7)) == "A"


def test_zero_rotation_interval_is_configuration_error():
    chore = _chore(assignment_strategy="rotation", rotation_sequence=["A"], rotation_interval_days=0)
    with pytest.raises(ChoreConfigurationError) as exc:
        resolve_assignee(chore, date(2024, 1, 8))
    assert exc.value.chore_id == "chore-1"


def test_empty_rotation_sequence_is_configuration_error():
    chore = _chore(assignment_strategy="rotation", rotation_sequence=[], rotation_interval_days=7)
    with pytest.raises(ChoreConfigurationError):
        validate_chore_rules(chore)


def test_invalid_frequency_is_configuration_error():
    with pytest.raises(ChoreConfigurationError):
        validate_chore_rules(_chore(frequency_days=0))


def test_unknown_strategy_is_configuration_error():
    with pytest.raises(ChoreConfigurationError):
        validate_chore_rules(_chore(assignment_strategy="lottery"))


def test_fixed_without_assignee_is_configuration_error():
    with pytest.raises(ChoreConfigurationError):
        validate_chore_rules(_chore(assignment_strategy="fixed", fixed_assignee_id=None))
