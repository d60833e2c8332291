"""Tests for engine and session helpers."""

import pytest

from choreplan.domain.db import dispose_engines, get_engine, get_session, init_database, reset_database
from choreplan.domain.models import Household
from choreplan.domain.repositories import HouseholdRepository


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'choreplan.db'}"
    init_database(url)
    yield url
    dispose_engines()


def test_engine_is_shared_per_url(db_url, tmp_path):
    assert get_engine(db_url) is get_engine(db_url)
    assert get_engine(db_url) is not get_engine(f"sqlite:///{tmp_path / 'other.db'}")
    session = get_session(db_url)
    assert session.get_bind() is get_engine(db_url)
    session.close()


def test_reset_database_drops_data(db_url, capsys):
    session = get_session(db_url)
    HouseholdRepository.create(session, Household(id="home", name="Home"))
    session.close()

    reset_database(db_url)
    assert "[WARN] Database reset" in capsys.readouterr().out

    session = get_session(db_url)
    assert HouseholdRepository.get_by_id(session, "home") is None
    session.close()


def test_dispose_engines_forgets_engines(db_url):
    engine = get_engine(db_url)
    dispose_engines()
    assert get_engine(db_url) is not engine
