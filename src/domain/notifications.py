"""
Verification code delivery.

Delivery is best-effort: state is already staged when the message goes
out, and a failed send must not undo it. The user can request a new code.
"""

import logging

from .ports import Notifier

logger = logging.getLogger(__name__)

REGISTRATION_SUBJECT = "Registration code"
RESET_SUBJECT = "Password reset code"


def code_body(code: str, ttl_seconds: int) -> str:
    minutes = max(ttl_seconds // 60, 1)
    return (
        f"Your verification code: {code}\n\n"
        f"The code is valid for {minutes} minutes. "
        "If you did not request it, ignore this message."
    )


def dispatch_code(notifier: Notifier, email: str, subject: str, code: str, ttl_seconds: int) -> bool:
    """
    Send a verification code, logging rather than raising on failure.

    Returns:
        True if the notifier accepted the message
    """
    try:
        notifier.send(email, subject, code_body(code, ttl_seconds))
    except Exception:
        logger.exception("Failed to dispatch %r to %s", subject, email)
        return False
    return True
