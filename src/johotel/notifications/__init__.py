"""Outbound notification collaborators (interface + logging default)."""

from .notifier import BookingNotifier, LoggingNotifier

__all__ = ["BookingNotifier", "LoggingNotifier"]
