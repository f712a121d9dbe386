"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging messages instead of sending them. For local
development, where the verification code has to be read from the logs.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def send(self, to_address: str, subject: str, body: str) -> None:
        """
        Log the message at INFO level (simulates email delivery).

        Args:
            to_address: Recipient email address
            subject: Message subject
            body: Plain-text body, carrying the verification code
        """
        logger.info("[EMAIL] To: %s Subject: %s\n%s", to_address, subject, body)
