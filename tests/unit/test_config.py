"""Unit tests for settings loading."""

import os
from unittest.mock import patch

from energy_accounts.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.service_name == "energy-accounts-api"
        assert settings.port == 3001
        assert settings.data_source_latency_ms == 300
        assert settings.payment_processing_delay_ms == 1000
        assert settings.payment_history_delay_ms == 500
        assert settings.legacy_history_account_id == "A-0001"
        assert settings.cors_allow_origins == ["*"]

    def test_environment_overrides(self):
        env = {
            "ENVIRONMENT": "production",
            "PORT": "8080",
            "PAYMENT_PROCESSING_DELAY_MS": "0",
            "LEGACY_HISTORY_ACCOUNT_ID": "A-0004",
        }

        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert settings.port == 8080
        assert settings.payment_processing_delay_ms == 0
        assert settings.legacy_history_account_id == "A-0004"

    def test_environment_names_are_case_insensitive(self):
        with patch.dict(os.environ, {"log_level": "DEBUG"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
