"""fittrack: workout logging and body-metric progress tracking."""

__version__ = "0.1.0"
