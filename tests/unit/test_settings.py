"""
Unit tests for application settings.
"""

from datetime import timedelta

import pytest

from src.config.settings import Settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults_match_verification_windows(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.registration_code_ttl_seconds == 300
        assert settings.reset_code_ttl_seconds == 600
        assert settings.reset_token_ttl_seconds == 900
        assert settings.bcrypt_cost >= 10

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SECRET_KEY", "env-session-secret")
        monkeypatch.setenv("JWT_RESET_PASSWORD_SECRET", "env-reset-secret")
        monkeypatch.setenv("EPHEMERAL_BACKEND", "memory")

        settings = Settings(_env_file=None)

        assert settings.secret_key == "env-session-secret"
        assert settings.jwt_reset_password_secret == "env-reset-secret"
        assert settings.ephemeral_backend == "memory"

    def test_flow_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            secret_key="s",
            jwt_reset_password_secret="r",
            session_token_expire_hours=36,
            reset_token_expire_minutes=15,
        )

        flow = settings.flow_settings()

        assert flow.session_secret == "s"
        assert flow.reset_secret == "r"
        assert flow.session_token_expiry == timedelta(hours=36)
        assert flow.reset_token_expiry == timedelta(minutes=15)
        assert flow.registration_code_ttl_seconds == 300

    def test_secrets_are_distinct_by_default(self) -> None:
        """Session and reset tokens must never share a signing key."""
        settings = Settings(_env_file=None)
        assert settings.secret_key != settings.jwt_reset_password_secret
