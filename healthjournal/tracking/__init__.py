"""Record tracking for HealthJournal.

Validation, record types and the in-memory store for BMI readings,
menstrual periods and medical appointments.

Modules:
    validation    — Stateless input checks that gate every mutation
    records       — Bmi, Period and Appointment record types
    store         — HealthStore: the three collections + next-period prediction
    config_loader — tracking_config.yaml loader
    errors        — InsufficientInput / InvalidInput / OutOfBounds / PreconditionViolation
"""

from healthjournal.tracking.errors import (
    InsufficientInput,
    InvalidInput,
    OutOfBounds,
    PreconditionViolation,
    TrackingError,
)
from healthjournal.tracking.records import Appointment, Bmi, Period
from healthjournal.tracking.store import HealthStore

__all__ = [
    "Appointment",
    "Bmi",
    "HealthStore",
    "InsufficientInput",
    "InvalidInput",
    "OutOfBounds",
    "Period",
    "PreconditionViolation",
    "TrackingError",
]
