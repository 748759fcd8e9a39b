"""In-memory journal store for BMI readings, periods and appointments.

One ``HealthStore`` is created per session and passed to whatever needs it.
It owns three independent ordered collections:

- BMI history — insertion order; deleted by zero-based index.
- Period history — insertion order; deleted by zero-based index.  Adding a
  period back-fills the cycle length of the period before it.
- Appointments — kept sorted by (date, time); deleted by **one-based** index,
  matching the numbering shown by ``show_appointment_list``.

Every successful add or delete writes one INFO line to the
``healthjournal.tracking.store`` logger.  Each collection is guarded by its
own lock.
"""

from __future__ import annotations

import logging
import threading
from datetime import date

from healthjournal.tracking.config_loader import CycleConfig, TrackingConfig, get_tracking_config
from healthjournal.tracking.errors import OutOfBounds, ensure
from healthjournal.tracking.records import Appointment, Bmi, Period, format_date
from healthjournal.tracking.validation import TIME_FORMAT, validate_index_within_bounds

logger = logging.getLogger("healthjournal.tracking.store")

INVALID_INDEX_DELETE_ERROR = "Invalid index to delete!"
BMI_CANNOT_BE_NULL = "Bmi object cannot be None."
PERIOD_CANNOT_BE_NULL = "Period object cannot be None."
APPOINTMENT_CANNOT_BE_NULL = "Appointment object cannot be None."
BMI_LIST_EMPTY = "BMI history is empty."
PERIOD_LIST_EMPTY = "Period history is empty."
APPOINTMENT_LIST_EMPTY = "Appointment list is empty."
BMI_LIST_UNCLEARED_ERROR = "BMI history was not cleared."
PERIOD_LIST_UNCLEARED_ERROR = "Period history was not cleared."
APPOINTMENT_LIST_UNCLEARED_ERROR = "Appointment list was not cleared."


class HealthStore:
    """Owner of all journal records for one session.

    Usage::

        store = HealthStore()
        validate_period_input([start, end])
        store.add_period(Period.from_strings(start, end))
        store.predict_next_period_start_date()
    """

    def __init__(self, config: TrackingConfig | None = None) -> None:
        self._config = config or get_tracking_config()
        self._bmis: list[Bmi] = []
        self._periods: list[Period] = []
        self._appointments: list[Appointment] = []
        self._bmi_lock = threading.RLock()
        self._period_lock = threading.RLock()
        self._appointment_lock = threading.RLock()

    @property
    def _cycle_config(self) -> CycleConfig:
        return self._config.cycle

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def bmis(self) -> tuple[Bmi, ...]:
        return tuple(self._bmis)

    @property
    def periods(self) -> tuple[Period, ...]:
        return tuple(self._periods)

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return tuple(self._appointments)

    # ------------------------------------------------------------------
    # BMI
    # ------------------------------------------------------------------

    def add_bmi(self, bmi: Bmi) -> None:
        """Append a validated BMI reading to the history."""
        ensure(bmi is not None, BMI_CANNOT_BE_NULL)
        with self._bmi_lock:
            self._bmis.append(bmi)
        logger.info("Added BMI %.2f on %s", bmi.bmi_value, format_date(bmi.date))

    def show_current_bmi(self) -> Bmi:
        """Return the most recently added BMI reading."""
        with self._bmi_lock:
            ensure(bool(self._bmis), BMI_LIST_EMPTY)
            return self._bmis[-1]

    def bmi_category(self, bmi: Bmi) -> str:
        """Return the configured category name for a reading, e.g. 'Normal'."""
        return self._config.bmi.category_for(bmi.bmi_value)

    def show_bmi_history(self) -> list[str]:
        """Return every BMI reading, oldest first, as display text."""
        with self._bmi_lock:
            ensure(bool(self._bmis), BMI_LIST_EMPTY)
            return [f"{bmi} ({self.bmi_category(bmi)})" for bmi in self._bmis]

    def get_bmis_size(self) -> int:
        return len(self._bmis)

    def delete_bmi(self, index: int) -> Bmi:
        """Remove the BMI reading at zero-based ``index``.

        Raises:
            OutOfBounds: If ``index`` is outside [0, size), including when empty.
        """
        with self._bmi_lock:
            if not validate_index_within_bounds(index, 0, len(self._bmis)):
                raise OutOfBounds(INVALID_INDEX_DELETE_ERROR)
            deleted = self._bmis.pop(index)
        logger.info(
            "Removed BMI %.2f from %s (index %d)",
            deleted.bmi_value,
            format_date(deleted.date),
            index,
        )
        return deleted

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------

    def add_period(self, period: Period) -> None:
        """Append a period, back-filling the previous period's cycle length.

        The previous last period's cycle length is overwritten unconditionally
        with the day count between its start and ``period.start_date``.
        """
        ensure(period is not None, PERIOD_CANNOT_BE_NULL)
        with self._period_lock:
            if self._periods:
                self._periods[-1]._record_cycle_length(period.start_date)
            self._periods.append(period)
        logger.info(
            "Added period %s to %s",
            format_date(period.start_date),
            format_date(period.end_date),
        )

    def show_latest_period(self) -> Period:
        """Return the most recently added period."""
        with self._period_lock:
            ensure(bool(self._periods), PERIOD_LIST_EMPTY)
            return self._periods[-1]

    def show_period_history(self) -> list[str]:
        """Return every period, oldest first, as display text.

        Recorded cycle lengths are labelled short/normal/long against the
        configured bounds.
        """
        cc = self._cycle_config
        with self._period_lock:
            ensure(bool(self._periods), PERIOD_LIST_EMPTY)
            lines = []
            for period in self._periods:
                label = period.classify_cycle(cc.min_cycle_days, cc.max_cycle_days)
                lines.append(f"{period} ({label})" if label else str(period))
            return lines

    def get_latest_cycle(self) -> Period | None:
        with self._period_lock:
            return self._periods[-1] if self._periods else None

    def get_periods_size(self) -> int:
        return len(self._periods)

    def get_period(self, index: int) -> Period | None:
        """Return the period at zero-based ``index``, or None when out of range."""
        with self._period_lock:
            if not validate_index_within_bounds(index, 0, len(self._periods)):
                return None
            return self._periods[index]

    def delete_period(self, index: int) -> Period:
        """Remove the period at zero-based ``index``.

        Cycle lengths of the remaining periods are left as recorded.

        Raises:
            OutOfBounds: If ``index`` is outside [0, size), including when empty.
        """
        with self._period_lock:
            if not validate_index_within_bounds(index, 0, len(self._periods)):
                raise OutOfBounds(INVALID_INDEX_DELETE_ERROR)
            deleted = self._periods.pop(index)
        logger.info(
            "Removed period %s to %s (index %d)",
            format_date(deleted.start_date),
            format_date(deleted.end_date),
            index,
        )
        return deleted

    def predict_next_period_start_date(self) -> date | None:
        """Predict when the next period starts.

        Averages (floored) the cycle lengths recorded on the most recent
        ``prediction_window`` periods that have one, and adds that to the
        latest period's start date.  Falls back to ``default_length_days``
        when no cycle length has been recorded yet.

        Returns:
            The predicted start date, or None if no periods are recorded.
        """
        cc = self._cycle_config
        with self._period_lock:
            if not self._periods:
                return None
            recorded = [p.cycle_length for p in self._periods if p.cycle_length is not None]
            recent = recorded[-cc.prediction_window:]
            return self._periods[-1].next_cycle_prediction(recent, cc.default_length_days)

    def days_until_next_period(self, today: date | None = None) -> int | None:
        """Days from ``today`` to the predicted start; negative means overdue."""
        predicted = self.predict_next_period_start_date()
        if predicted is None:
            return None
        return (predicted - (today or date.today())).days

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------

    def add_appointment(self, appointment: Appointment) -> None:
        """Append an appointment and re-sort the list by (date, time).

        The sort is stable, so appointments sharing a date and time keep
        the order they were added in.
        """
        ensure(appointment is not None, APPOINTMENT_CANNOT_BE_NULL)
        with self._appointment_lock:
            self._appointments.append(appointment)
            self._appointments.sort(key=lambda a: a.sort_key)
        logger.info(
            "Added appointment on %s at %s: %s",
            format_date(appointment.date),
            appointment.time.strftime(TIME_FORMAT),
            appointment.description,
        )

    def _appointment_lines(self) -> list[str]:
        return [f"{i}. {appt}" for i, appt in enumerate(self._appointments, start=1)]

    def show_appointment_list(self) -> list[str]:
        """Return the appointments in (date, time) order, numbered from 1."""
        with self._appointment_lock:
            ensure(bool(self._appointments), APPOINTMENT_LIST_EMPTY)
            return self._appointment_lines()

    def get_appointments_size(self) -> int:
        return len(self._appointments)

    def delete_appointment(self, index: int) -> list[str]:
        """Remove the appointment at **one-based** ``index``.

        Returns:
            The remaining appointments as display text, renumbered.

        Raises:
            OutOfBounds: If ``index`` is outside [1, size].
        """
        with self._appointment_lock:
            if not validate_index_within_bounds(index, 1, len(self._appointments) + 1):
                raise OutOfBounds(INVALID_INDEX_DELETE_ERROR)
            deleted = self._appointments.pop(index - 1)
            remaining = self._appointment_lines()
        logger.info(
            "Removed appointment on %s at %s: %s (index %d)",
            format_date(deleted.date),
            deleted.time.strftime(TIME_FORMAT),
            deleted.description,
            index,
        )
        return remaining

    # ------------------------------------------------------------------
    # Clearing
    # ------------------------------------------------------------------

    def clear_bmis_and_periods(self) -> None:
        with self._bmi_lock, self._period_lock:
            self._periods.clear()
            self._bmis.clear()
            ensure(not self._bmis, BMI_LIST_UNCLEARED_ERROR)
            ensure(not self._periods, PERIOD_LIST_UNCLEARED_ERROR)

    def clear_appointments(self) -> None:
        with self._appointment_lock:
            self._appointments.clear()
            ensure(not self._appointments, APPOINTMENT_LIST_UNCLEARED_ERROR)
