"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError

from shiftpay.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    settings = Settings(DATABASE_URL="postgresql://test", APP_ENV="prod", ALLOWED_ORIGINS="*")

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    settings = Settings(DATABASE_URL="postgresql://test", APP_ENV="local", ALLOWED_ORIGINS="*")

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_get_allowed_origins_list():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        ALLOWED_ORIGINS="https://a.example.com, https://b.example.com,",
    )
    assert settings.get_allowed_origins_list() == ["https://a.example.com", "https://b.example.com"]


def test_pay_rule_defaults():
    settings = Settings(DATABASE_URL="postgresql://test")
    assert settings.DAILY_OVERTIME_THRESHOLD_HOURS == 8
    assert settings.OVERTIME_MULTIPLIER == 1.5
    assert settings.DEFAULT_DEDUCTION_PERCENT == pytest.approx(0.10)


def test_overnight_policy_normalized():
    assert Settings(DATABASE_URL="postgresql://test", OVERNIGHT_POLICY="CLAMP").OVERNIGHT_POLICY == "clamp"


@pytest.mark.parametrize("field,value", [
    ("OVERNIGHT_POLICY", "split"),
    ("APP_ENV", "qa"),
    ("DEFAULT_DEDUCTION_PERCENT", 1.5),
    ("DAILY_OVERTIME_THRESHOLD_HOURS", 0),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="postgresql://test", **{field: value})
