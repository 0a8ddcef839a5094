"""gym-tracker: attendance, workout and supplement tracking."""

__version__ = "0.1.0"
