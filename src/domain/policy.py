"""
Flow policy - TTLs, expiries and signing secrets used by the flows.

Built once at startup from application settings and passed into each flow,
so no flow reads the environment.
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class FlowSettings:
    session_secret: str
    reset_secret: str
    session_token_expiry: timedelta = timedelta(hours=36)
    reset_token_expiry: timedelta = timedelta(minutes=15)
    registration_code_ttl_seconds: int = 300
    reset_code_ttl_seconds: int = 600
    reset_token_ttl_seconds: int = 900
