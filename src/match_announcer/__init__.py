"""Match announcer — audio notifications for timed in-match events."""

__version__ = "0.1.0"
