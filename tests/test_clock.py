"""Tests for the ambient time zone."""

from zoneinfo import ZoneInfo

import pytest

from tzroundtrip import clock
from tzroundtrip.errors import UnknownZoneError


def test_default_comes_from_settings():
    clock.reset_default_zone()

    assert clock.get_default_zone() == ZoneInfo("Europe/London")


def test_set_returns_previous():
    previous = clock.set_default_zone("Asia/Tokyo")

    assert previous.key == "Europe/London"
    assert clock.get_default_zone().key == "Asia/Tokyo"


def test_context_manager_restores():
    with clock.default_zone("Europe/Paris") as tz:
        assert tz.key == "Europe/Paris"
        assert clock.get_default_zone().key == "Europe/Paris"

    assert clock.get_default_zone().key == "Europe/London"


def test_context_manager_restores_on_error():
    with pytest.raises(RuntimeError):
        with clock.default_zone("Asia/Tokyo"):
            raise RuntimeError("boom")

    assert clock.get_default_zone().key == "Europe/London"


def test_unknown_zone_leaves_default_alone():
    with pytest.raises(UnknownZoneError):
        clock.set_default_zone("Europe/Atlantis")

    assert clock.get_default_zone().key == "Europe/London"


def test_now_is_rendered_in_ambient_zone():
    assert clock.now().tzinfo.key == "Europe/London"
    assert clock.now("Asia/Tokyo").tzinfo.key == "Asia/Tokyo"
