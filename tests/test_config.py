import pytest
from pydantic import ValidationError

from coolshot.core.config import Settings, validate_settings


def test_primary_admin_id_from_number():
    config = Settings(_env_file=None, PRIMARY_ADMIN_NUMBER="+234 800 000 0001")

    assert config.PRIMARY_ADMIN_NUMBER == "2348000000001"
    assert config.PRIMARY_ADMIN_ID == "2348000000001@s.whatsapp.net"


def test_phone_numbers_must_be_digits():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, PHONE_NUMBER="not-a-number")


def test_defaults_are_valid():
    config = Settings(_env_file=None)

    assert validate_settings(config)
    assert len(config.AI_PRIMARY_APIS) == 5
    assert not config.fallback_configured


def test_production_requires_twilio():
    config = Settings(_env_file=None, ENVIRONMENT="production")

    with pytest.raises(ValueError, match="TWILIO_ACCOUNT_SID"):
        validate_settings(config)


def test_at_least_one_ai_provider():
    config = Settings(_env_file=None, AI_PRIMARY_APIS=[], GOOGLE_API_KEY=None)

    with pytest.raises(ValueError, match="AI_PRIMARY_APIS"):
        validate_settings(config)


def test_fallback_alone_is_enough():
    config = Settings(_env_file=None, AI_PRIMARY_APIS=[], GOOGLE_API_KEY="key")

    assert config.fallback_configured
    assert validate_settings(config)
