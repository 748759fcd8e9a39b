"""Shared fixtures for the tracking test suite."""

from __future__ import annotations

from datetime import date

import pytest

from healthjournal.tracking.config_loader import TrackingConfig, load_tracking_config
from healthjournal.tracking.records import Appointment, Bmi, Period
from healthjournal.tracking.store import HealthStore

# Fixed "today" so future-date checks do not drift with the calendar
TEST_DATE = date(2024, 6, 15)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracking_config() -> TrackingConfig:
    """Load the real bundled tracking config for tests."""
    return load_tracking_config()


@pytest.fixture
def today() -> date:
    return TEST_DATE


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store(tracking_config: TrackingConfig) -> HealthStore:
    """A fresh, empty store per test."""
    return HealthStore(tracking_config)


@pytest.fixture
def bmi() -> Bmi:
    return Bmi.from_strings("1.75", "70.00", "10-06-2024")


@pytest.fixture
def period() -> Period:
    return Period.from_strings("01-01-2024", "05-01-2024")


@pytest.fixture
def appointment() -> Appointment:
    return Appointment.from_strings("20-06-2024", "09:30", "Dentist check-up")
