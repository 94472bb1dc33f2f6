import logging

import pytest

from scripts.logging_config import FieldsLogger

SETTINGS_ENV_VARS = ["ACCOUNTS_TABLE", "AWS_REGION", "DEBUG", "STRICT"]


@pytest.fixture
def logger():
    """Plain adapter over a test logger; records propagate to caplog."""
    test_logger = logging.getLogger("tests.accounts")
    test_logger.setLevel(logging.DEBUG)
    return FieldsLogger(test_logger)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
