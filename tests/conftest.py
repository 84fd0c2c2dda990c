"""Shared test fixtures and utilities for periodalgebra tests."""

import pytest

from periodalgebra.period.periodconfig import DEFAULT_TZ_ENV, TIMESPEC_ENV
from periodalgebra.period.periodcalendar import period_from_month


@pytest.fixture(autouse=True)
def clean_period_env(monkeypatch):
    """Run every test with the default configuration (UTC, auto timespec).

    Tests that need another zone set PERIODALGEBRA_DEFAULT_TZ themselves
    through monkeypatch; it is restored afterwards.
    """
    monkeypatch.delenv(DEFAULT_TZ_ENV, raising=False)
    monkeypatch.delenv(TIMESPEC_ENV, raising=False)


@pytest.fixture
def march_2014():
    """Fixture providing [2014-03-01, 2014-04-01)."""
    return period_from_month(2014, 3)


@pytest.fixture
def april_2014():
    """Fixture providing [2014-04-01, 2014-05-01)."""
    return period_from_month(2014, 4)
