"""Tests for session bootstrap: logging setup and store creation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from healthjournal.config import Settings
from healthjournal.main import configure_logging, create_store
from healthjournal.tracking.config_loader import get_tracking_config, reload_tracking_config
from healthjournal.tracking.errors import InvalidInput
from healthjournal.tracking.records import Bmi, Period
from healthjournal.tracking.store import HealthStore
from healthjournal.tracking.validation import validate_appointment_details


@pytest.fixture(autouse=True)
def reset_journal_logger() -> Iterator[None]:
    yield
    journal_logger = logging.getLogger("healthjournal")
    for handler in list(journal_logger.handlers):
        journal_logger.removeHandler(handler)
        handler.close()
    journal_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def restore_bundled_tracking_config() -> Iterator[None]:
    yield
    reload_tracking_config()


def test_create_store_returns_empty_store() -> None:
    store = create_store(Settings(_env_file=None))
    assert isinstance(store, HealthStore)
    assert store.get_bmis_size() == 0
    assert store.get_periods_size() == 0
    assert store.get_appointments_size() == 0


def test_each_session_gets_its_own_store() -> None:
    settings = Settings(_env_file=None)
    first = create_store(settings)
    second = create_store(settings)
    first.add_bmi(Bmi.from_strings("1.75", "70", "01-06-2024"))
    assert second.get_bmis_size() == 0


def test_mutations_appended_to_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "journal.log"
    log_file.parent.mkdir()
    log_file.write_text("previous session\n")

    store = create_store(Settings(_env_file=None, log_file=str(log_file)))
    store.add_bmi(Bmi.from_strings("1.75", "70", "01-06-2024"))
    store.delete_bmi(0)

    contents = log_file.read_text().splitlines()
    assert contents[0] == "previous session"
    assert any(line.endswith("Added BMI 22.86 on 01-06-2024") for line in contents)
    assert any(line.endswith("Removed BMI 22.86 from 01-06-2024 (index 0)") for line in contents)


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    settings = Settings(_env_file=None, log_file=str(tmp_path / "journal.log"))
    configure_logging(settings)
    configure_logging(settings)
    assert len(logging.getLogger("healthjournal").handlers) == 2


def test_log_level_from_settings() -> None:
    configure_logging(Settings(_env_file=None, log_level="warning"))
    assert logging.getLogger("healthjournal").level == logging.WARNING


def test_tracking_config_path_override(tmp_path: Path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text(
        "cycle:\n  default_length_days: 30\n"
        "bmi:\n  categories:\n    - name: Normal\n      below: 25\n"
    )
    store = create_store(Settings(_env_file=None, tracking_config_path=str(path)))
    store.add_period(Period.from_strings("01-01-2024", "05-01-2024"))
    assert (store.predict_next_period_start_date() - store.show_latest_period().start_date).days == 30


def test_tracking_config_override_reaches_validators(tmp_path: Path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text(
        "appointment:\n  max_description_length: 5\n"
        "bmi:\n  categories:\n    - name: Normal\n      below: 25\n"
    )
    create_store(Settings(_env_file=None, tracking_config_path=str(path)))

    assert get_tracking_config().appointment.max_description_length == 5
    validate_appointment_details(["20-06-2024", "10:30", "GP"])
    with pytest.raises(InvalidInput):
        validate_appointment_details(["20-06-2024", "10:30", "Long description"])
