"""Settings and test environment tests."""

import pytest
from conftest import to_test_database_url
from pydantic import ValidationError

from bluestar.config import Settings


def test_test_database_url_keeps_credentials():
    url = "postgresql://bluestar_user:bluestar_password@db:5432/bluestar"
    assert to_test_database_url(url) == (
        "postgresql://bluestar_user:bluestar_password@db:5432/bluestar_test"
    )


def test_production_requires_jwt_secret():
    with pytest.raises(ValidationError):
        Settings(
            environment="production",
            jwt_secret=None,
            database_url="postgresql://u:p@db.internal:5432/bluestar",
        )


def test_production_rejects_localhost_database():
    with pytest.raises(ValidationError):
        Settings(
            environment="production",
            jwt_secret="secret",
            database_url="postgresql://u:p@localhost:5432/bluestar",
        )


def test_development_defaults():
    settings = Settings(environment="development")
    assert settings.is_development
    assert not settings.is_production
    assert settings.otp_expiration_minutes == 10
