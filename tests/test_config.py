import pytest

from mongo_session.config import (
    Config,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
)


@pytest.mark.parametrize("env,expected", [
    ("development", DevelopmentConfig),
    ("production", ProductionConfig),
    ("testing", TestingConfig),
    ("TESTING", TestingConfig),
    ("staging", DevelopmentConfig),
])
def test_get_config(env, expected):
    assert get_config(env) is expected


def test_get_config_from_environment(monkeypatch):
    monkeypatch.setenv("SESSION_ENV", "production")

    assert get_config() is ProductionConfig


def test_testing_config_uses_separate_database():
    assert TestingConfig.TESTING is True
    assert TestingConfig.MONGO_DATABASE == "session_test"


def test_validate_defaults():
    TestingConfig.validate()


def test_validate_missing_collection():
    class Broken(Config):
        MONGO_COLLECTION = ""

    with pytest.raises(ValueError, match="MONGO_COLLECTION"):
        Broken.validate()


def test_validate_expiry():
    class Broken(Config):
        SESSION_EXPIRY = 0

    with pytest.raises(ValueError, match="SESSION_EXPIRY"):
        Broken.validate()
