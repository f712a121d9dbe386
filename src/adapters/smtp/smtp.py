"""
SMTP notifier adapter - Implements Notifier protocol.

Sends plain-text mail through an SMTP relay. Each send opens its own
connection with a bounded timeout; failures raise to the caller, which
decides whether delivery is best-effort.
"""

import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class SmtpNotifier:
    """
    Implements Notifier protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_ssl: bool = True,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self._username = username
        self._password = password
        self.use_ssl = use_ssl
        self.timeout_seconds = timeout_seconds

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout_seconds)
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds)

    def send(self, to_address: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to_address
        msg["Subject"] = subject
        msg.set_content(body)

        with self._connect() as server:
            # A failed STARTTLS must still close the connection.
            if not self.use_ssl:
                server.starttls()
            if self._username:
                server.login(self._username, self._password)
            server.send_message(msg)

        logger.info("Email %r sent to %s", subject, to_address)
