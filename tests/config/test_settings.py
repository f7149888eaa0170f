"""Tests for application settings."""

import logging

import pytest
from pydantic import ValidationError

from src.config.settings import Settings
from src.shared.validators.bounds import LengthBounds


class TestSettings:
    def test_validation_bounds_from_settings(self):
        config = Settings(secret_key="k", password_min_length=8, password_max_length=64, phone_min_length=11)
        bounds = config.get_validation_bounds()

        assert bounds.password == LengthBounds(8, 64)
        assert bounds.phone == LengthBounds(11, 15)
        assert bounds.name == LengthBounds(2, 100)

    def test_inconsistent_bounds_are_logged_not_rejected(self, caplog):
        config = Settings(secret_key="k", name_min_length=10, name_max_length=3)

        with caplog.at_level(logging.WARNING, logger="src.config.settings"):
            bounds = config.get_validation_bounds()

        assert bounds.name == LengthBounds(10, 3)
        assert "'name'" in caplog.text

    def test_environment_is_validated(self):
        with pytest.raises(ValidationError, match="Environment must be one of"):
            Settings(secret_key="k", environment="qa")

    def test_environment_is_case_insensitive(self):
        assert Settings(secret_key="k", environment="PRODUCTION").environment == "production"
