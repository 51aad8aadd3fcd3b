"""Pytest configuration and fixtures."""

import os

import pytest

from tzroundtrip import clock
from tzroundtrip.bootstrap import create_db_engine, init_tzroundtrip
from tzroundtrip.config import reset_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Pin the configuration the tests assume."""
    os.environ["TZROUNDTRIP_DEFAULT_TIMEZONE"] = "Europe/London"
    os.environ["TZROUNDTRIP_SESSION_TIMEZONE"] = "Europe/London"
    os.environ.setdefault("TZROUNDTRIP_LOG_LEVEL", "WARNING")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def london_default_zone():
    """Every test starts (and ends) with the ambient zone at Europe/London."""
    clock.reset_default_zone()
    clock.set_default_zone("Europe/London")
    yield
    clock.reset_default_zone()


@pytest.fixture
def engine(tmp_path):
    eng = create_db_engine(f"sqlite:///{tmp_path / 'tzroundtrip.db'}")
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    return init_tzroundtrip(engine)
