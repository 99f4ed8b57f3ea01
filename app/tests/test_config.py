"""
Tests for configuration validation
"""
from datetime import time

import pytest
from pydantic import ValidationError
from app.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    """Production settings reject wildcard origins"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="a" * 32,
        APP_ENV="prod",
        ALLOWED_ORIGINS="*"
    )

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_prod_settings_rejects_short_jwt_secret():
    """Production settings reject a short JWT secret"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="short",
        APP_ENV="prod",
        ALLOWED_ORIGINS="https://example.com"
    )

    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        APP_ENV="local",
        ALLOWED_ORIGINS="*"
    )

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_get_allowed_origins_list():
    """Test parsing of ALLOWED_ORIGINS"""
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        ALLOWED_ORIGINS="https://example.com, https://app.example.com,"
    )
    assert settings.get_allowed_origins_list() == ["https://example.com", "https://app.example.com"]


def test_late_cutoff_defaults_to_nine_and_is_configurable():
    settings = Settings(DATABASE_URL="sqlite://", JWT_SECRET_KEY="test-key")
    assert settings.LATE_CHECKIN_CUTOFF == time(9, 0)

    settings = Settings(DATABASE_URL="sqlite://", JWT_SECRET_KEY="test-key", LATE_CHECKIN_CUTOFF="09:30")
    assert settings.LATE_CHECKIN_CUTOFF == time(9, 30)


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError, match="TIMEZONE"):
        Settings(DATABASE_URL="sqlite://", JWT_SECRET_KEY="test-key", TIMEZONE="Mars/Olympus_Mons")


def test_invalid_app_env_rejected():
    with pytest.raises(ValidationError, match="APP_ENV"):
        Settings(DATABASE_URL="sqlite://", JWT_SECRET_KEY="test-key", APP_ENV="production")
