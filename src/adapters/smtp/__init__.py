"""Notifier adapters - Email delivery implementations."""

from .background import BackgroundNotifier, NotifierQueueFull
from .console import ConsoleNotifier
from .smtp import SmtpNotifier

__all__ = ["BackgroundNotifier", "ConsoleNotifier", "NotifierQueueFull", "SmtpNotifier"]
