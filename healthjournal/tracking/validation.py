"""Stateless validation of raw journal input.

Every validator takes the field strings produced by the front-end, raises
exactly one error on the first rule that fails, and never touches shared
state.  Records are only constructed from strings that passed here.

Date format is ``DD-MM-YYYY``.  The date check is intentionally permissive:
it bounds day to 1–31 and month to 1–12 but does not cross-check the day
against the month, so ``31-02-2024`` passes ``validate_date``.  Impossible
dates are rejected later, when ``parse_date`` turns the string into a
``datetime.date``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime, time

from healthjournal.tracking.config_loader import get_tracking_config
from healthjournal.tracking.errors import InsufficientInput, InvalidInput

DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII)
_TIME_RE = re.compile(r"\d{2}:\d{2}", re.ASCII)
_TIME_WITH_HOURS_RE = re.compile(r"\d{2}:\d{2}:\d{2}", re.ASCII)
_TWO_DP_NUMBER_RE = re.compile(r"\d+(\.\d{1,2})?", re.ASCII)
_POSITIVE_INTEGER_RE = re.compile(r"[1-9]\d*", re.ASCII)

MIN_DAY, MAX_DAY = 1, 31
MIN_MONTH, MAX_MONTH = 1, 12
MIN_HOURS, MAX_HOURS = 0, 23
MIN_MINUTES, MAX_MINUTES = 0, 59
# Run durations count minutes/seconds from 1 to 60 inclusive
MIN_RUN_UNIT, MAX_RUN_UNIT = 1, 60
NO_HOURS_PRESENT = -1

RUN = "run"
GYM = "gym"
BMI = "bmi"
PERIOD = "period"
APPOINTMENT = "appointment"
ALL = "all"
VALID_FILTERS = frozenset({RUN, GYM, BMI, PERIOD, APPOINTMENT, ALL})

# ── Messages ──
INVALID_DATE_ERROR = "Invalid date format. Format is DD-MM-YYYY with integers."
INVALID_DAY_ERROR = "Day must be an integer between 01 and 31."
INVALID_MONTH_ERROR = "Month must be an integer between 01 and 12."
NONEXISTENT_DATE_ERROR = "Date does not exist in the calendar."
INVALID_TIME_ERROR = "Invalid time format. Format is HH:MM with integers."
INVALID_HOURS_ERROR = "Hours must be an integer between 00 and 23."
INVALID_MINUTES_ERROR = "Minutes must be an integer between 00 and 59."
INVALID_RUN_TIME_ERROR = "Invalid time format. Format is HH:MM:SS or MM:SS with integers."
INVALID_RUN_MINUTES_ERROR = "Minutes must be a positive integer between 01 and 60."
INVALID_RUN_SECONDS_ERROR = "Seconds must be a positive integer between 01 and 60."
ZERO_RUN_HOURS_ERROR = "Hours cannot be 0. Use MM:SS instead."
INSUFFICIENT_BMI_PARAMETERS_ERROR = "Insufficient parameters for bmi. Height, weight and date are required."
HEIGHT_WEIGHT_INPUT_ERROR = "Height and weight must be positive numbers with at most 2 decimal places."
DATE_IN_FUTURE_ERROR = "Date specified cannot be later than today."
INSUFFICIENT_PERIOD_PARAMETERS_ERROR = "Insufficient parameters for period. Start and end dates are required."
INVALID_START_DATE_ERROR = "Invalid start date!"
INVALID_END_DATE_ERROR = "Invalid end date!"
START_DATE_IN_FUTURE_ERROR = "Start date of period cannot be later than today."
PERIOD_END_BEFORE_START_ERROR = "Start date of period must be before or equal to end date."
INSUFFICIENT_APPOINTMENT_PARAMETERS_ERROR = (
    "Insufficient parameters for appointment. Date, time and description are required."
)
DESCRIPTION_LENGTH_ERROR = "Description cannot be longer than {max_length} characters."
INVALID_ITEM_ERROR = "Invalid item specified."
CORRECT_FILTER_ITEM_FORMAT = "Item must be one of: run, gym, bmi, period, appointment, all."
INSUFFICIENT_DELETE_PARAMETERS_ERROR = "Insufficient parameters for delete. Item and index are required."
INVALID_INDEX_ERROR = "Index must be a positive integer."


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def parse_date(text: str) -> date:
    """Parse a ``DD-MM-YYYY`` string that already passed ``validate_date``.

    Raises:
        InvalidInput: If the day does not exist in that month (e.g. 30-02).
    """
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidInput(NONEXISTENT_DATE_ERROR) from exc


def parse_time(text: str) -> time:
    """Parse an ``HH:MM`` string that already passed ``validate_time_input``."""
    return datetime.strptime(text, TIME_FORMAT).time()


def _field(details: Sequence[str], i: int) -> str:
    return details[i] if i < len(details) and details[i] is not None else ""


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def validate_date(text: str) -> None:
    """Check that ``text`` is a ``DD-MM-YYYY`` date with plausible day/month.

    Raises:
        InvalidInput: On a format, day, or month violation.
    """
    if not _DATE_RE.fullmatch(text):
        raise InvalidInput(INVALID_DATE_ERROR)
    day, month, _ = (int(part) for part in text.split("-"))

    if not MIN_DAY <= day <= MAX_DAY:
        raise InvalidInput(INVALID_DAY_ERROR)
    if not MIN_MONTH <= month <= MAX_MONTH:
        raise InvalidInput(INVALID_MONTH_ERROR)


def validate_time_input(text: str) -> None:
    """Check that ``text`` is a 24-hour ``HH:MM`` time.

    Raises:
        InvalidInput: On a format, hours, or minutes violation.
    """
    if not _TIME_RE.fullmatch(text):
        raise InvalidInput(INVALID_TIME_ERROR)
    hours, minutes = (int(part) for part in text.split(":"))

    if not MIN_HOURS <= hours <= MAX_HOURS:
        raise InvalidInput(INVALID_HOURS_ERROR)
    if not MIN_MINUTES <= minutes <= MAX_MINUTES:
        raise InvalidInput(INVALID_MINUTES_ERROR)


def validate_run_time_input(text: str) -> None:
    """Check a run duration given as ``MM:SS`` or ``HH:MM:SS``.

    Minutes and seconds must lie in 1–60 inclusive.  An explicit ``00`` hours
    field is rejected rather than normalised; use ``MM:SS`` instead.

    Raises:
        InvalidInput: On the first violated rule.
    """
    if not (_TIME_RE.fullmatch(text) or _TIME_WITH_HOURS_RE.fullmatch(text)):
        raise InvalidInput(INVALID_RUN_TIME_ERROR)

    parts = [int(part) for part in text.split(":")]
    hours = NO_HOURS_PRESENT
    if len(parts) == 2:
        minutes, seconds = parts
    else:
        hours, minutes, seconds = parts

    if not MIN_RUN_UNIT <= minutes <= MAX_RUN_UNIT:
        raise InvalidInput(INVALID_RUN_MINUTES_ERROR)
    if not MIN_RUN_UNIT <= seconds <= MAX_RUN_UNIT:
        raise InvalidInput(INVALID_RUN_SECONDS_ERROR)
    if hours == 0:
        raise InvalidInput(ZERO_RUN_HOURS_ERROR)


def validate_filter(token: str) -> None:
    """Check that ``token`` names a known journal category.

    Raises:
        InvalidInput: If ``token`` is not one of ``VALID_FILTERS``.
    """
    if token in VALID_FILTERS:
        return
    raise InvalidInput(f"{INVALID_ITEM_ERROR}\n{CORRECT_FILTER_ITEM_FORMAT}")


def validate_index_within_bounds(index: int, lower: int, upper: int) -> bool:
    """Return True when ``lower <= index < upper``."""
    return lower <= index < upper


# ---------------------------------------------------------------------------
# Command validators
# ---------------------------------------------------------------------------


def validate_bmi_input(details: Sequence[str], today: date | None = None) -> None:
    """Validate ``[height, weight, date]`` for a BMI entry.

    Args:
        details: Height (m), weight (kg) and date strings.
        today:   Reference date for the future-date check (defaults to today).

    Raises:
        InsufficientInput: If any field is empty.
        InvalidInput:      On a malformed number or date, or a future date.
    """
    height, weight, date_text = _field(details, 0), _field(details, 1), _field(details, 2)
    if not height or not weight or not date_text:
        raise InsufficientInput(INSUFFICIENT_BMI_PARAMETERS_ERROR)

    for number in (height, weight):
        if not _TWO_DP_NUMBER_RE.fullmatch(number) or float(number) <= 0:
            raise InvalidInput(HEIGHT_WEIGHT_INPUT_ERROR)

    validate_date(date_text)
    if parse_date(date_text) > (today or date.today()):
        raise InvalidInput(DATE_IN_FUTURE_ERROR)


def validate_period_input(details: Sequence[str], today: date | None = None) -> None:
    """Validate ``[start_date, end_date]`` for a period entry.

    A date failure is re-raised with a start/end prefix so the user knows
    which of the two was wrong.

    Raises:
        InsufficientInput: If either date is empty.
        InvalidInput:      On a malformed date, a future start, or start after end.
    """
    start_text, end_text = _field(details, 0), _field(details, 1)
    if not start_text or not end_text:
        raise InsufficientInput(INSUFFICIENT_PERIOD_PARAMETERS_ERROR)

    parsed = []
    for text, prefix in ((start_text, INVALID_START_DATE_ERROR), (end_text, INVALID_END_DATE_ERROR)):
        try:
            validate_date(text)
            parsed.append(parse_date(text))
        except InvalidInput as exc:
            raise InvalidInput(f"{prefix}\n{exc}") from exc
    start, end = parsed

    if start > (today or date.today()):
        raise InvalidInput(START_DATE_IN_FUTURE_ERROR)
    if start > end:
        raise InvalidInput(PERIOD_END_BEFORE_START_ERROR)


def validate_appointment_details(
    details: Sequence[str], max_description_length: int | None = None
) -> None:
    """Validate ``[date, time, description]`` for an appointment.

    Args:
        details:                Date, time and free-text description.
        max_description_length: Override for the configured description limit.

    Raises:
        InsufficientInput: If any field is empty.
        InvalidInput:      On a malformed date/time or an oversized description.
    """
    date_text, time_text, description = _field(details, 0), _field(details, 1), _field(details, 2)
    if not date_text or not time_text or not description:
        raise InsufficientInput(INSUFFICIENT_APPOINTMENT_PARAMETERS_ERROR)

    validate_date(date_text)
    validate_time_input(time_text)

    limit = max_description_length
    if limit is None:
        limit = get_tracking_config().appointment.max_description_length
    if len(description) > limit:
        raise InvalidInput(DESCRIPTION_LENGTH_ERROR.format(max_length=limit))


def validate_delete_input(details: Sequence[str]) -> None:
    """Validate ``[item, index]`` for a delete command.

    The item is matched case-insensitively against the known categories.

    Raises:
        InsufficientInput: If either field is empty.
        InvalidInput:      On an unknown item or a non-positive index.
    """
    item, index = _field(details, 0), _field(details, 1)
    if not item or not index:
        raise InsufficientInput(INSUFFICIENT_DELETE_PARAMETERS_ERROR)

    validate_filter(item.lower())

    if not _POSITIVE_INTEGER_RE.fullmatch(index):
        raise InvalidInput(INVALID_INDEX_ERROR)
