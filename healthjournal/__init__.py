"""HealthJournal: a personal BMI, menstrual cycle and appointment journal."""

__version__ = "0.1.0"
