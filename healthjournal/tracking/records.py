"""Journal record types: BMI readings, menstrual periods and appointments.

Constructors trust their input.  Callers run the matching validator from
``healthjournal.tracking.validation`` first; ``from_strings`` only parses the
already-checked strings and computes derived fields.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, time, timedelta

from healthjournal.tracking.validation import DATE_FORMAT, TIME_FORMAT, parse_date, parse_time


def format_date(value: date) -> str:
    """Render a date in the journal's ``DD-MM-YYYY`` form."""
    return value.strftime(DATE_FORMAT)


def _days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


@dataclass(frozen=True)
class Bmi:
    """A single BMI reading.

    Attributes:
        height:    Height in metres.
        weight:    Weight in kilograms.
        date:      Date the measurement was taken.
        bmi_value: weight / height², rounded to two decimal places.
    """

    height: float
    weight: float
    date: date
    bmi_value: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bmi_value", round(self.weight / self.height**2, 2))

    @classmethod
    def from_strings(cls, height: str, weight: str, date_text: str) -> Bmi:
        return cls(height=float(height), weight=float(weight), date=parse_date(date_text))

    def __str__(self) -> str:
        return f"{format_date(self.date)}\nYour BMI is {self.bmi_value:.2f}"


@dataclass
class Period:
    """A menstrual period and, once the next one is logged, its cycle length.

    ``cycle_length`` is derived state owned by the store: it stays ``None``
    until ``HealthStore.add_period`` records the following period, which sets
    it to the day count between the two start dates.

    Attributes:
        start_date:   First day of the period.
        end_date:     Last day of the period (inclusive).
        cycle_length: Days from this start to the next period's start.
    """

    start_date: date
    end_date: date
    cycle_length: int | None = field(default=None, init=False)

    @classmethod
    def from_strings(cls, start_text: str, end_text: str) -> Period:
        return cls(start_date=parse_date(start_text), end_date=parse_date(end_text))

    @property
    def period_length(self) -> int:
        """Number of days of the period, counting both ends."""
        return (self.end_date - self.start_date).days + 1

    def _record_cycle_length(self, next_start: date) -> None:
        # Only HealthStore.add_period calls this.
        self.cycle_length = (next_start - self.start_date).days

    def next_cycle_prediction(
        self, cycle_lengths: list[int], default_cycle_length: int
    ) -> date:
        """Project the next period start from this period's start date.

        Args:
            cycle_lengths:        Recent recorded cycle lengths to average.
            default_cycle_length: Used when no cycle lengths are available.

        Returns:
            start_date plus the floored mean of ``cycle_lengths``, or plus
            ``default_cycle_length`` when the list is empty.
        """
        if cycle_lengths:
            average = math.floor(sum(cycle_lengths) / len(cycle_lengths))
        else:
            average = default_cycle_length
        return self.start_date + timedelta(days=average)

    def classify_cycle(self, min_cycle_days: int, max_cycle_days: int) -> str | None:
        """Label the recorded cycle length 'short', 'normal' or 'long'.

        Returns None while the cycle length is unset.
        """
        if self.cycle_length is None:
            return None
        if self.cycle_length < min_cycle_days:
            return "short"
        if self.cycle_length > max_cycle_days:
            return "long"
        return "normal"

    def __str__(self) -> str:
        lines = [
            f"Period Start: {format_date(self.start_date)} "
            f"Period End: {format_date(self.end_date)}",
            f"Period Length: {_days(self.period_length)}",
        ]
        if self.cycle_length is not None:
            lines.append(f"Cycle Length: {_days(self.cycle_length)}")
        return "\n".join(lines)


@dataclass(frozen=True)
class Appointment:
    """A scheduled medical appointment."""

    date: date
    time: time
    description: str

    @classmethod
    def from_strings(cls, date_text: str, time_text: str, description: str) -> Appointment:
        return cls(date=parse_date(date_text), time=parse_time(time_text), description=description)

    @property
    def sort_key(self) -> tuple[date, time]:
        return (self.date, self.time)

    def __str__(self) -> str:
        return (
            f"On {format_date(self.date)} at {self.time.strftime(TIME_FORMAT)}: "
            f"{self.description}"
        )
