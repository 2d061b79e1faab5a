"""Unit tests for configuration management."""

import logging
import os
from unittest.mock import MagicMock, patch

import pydantic
import pytest

from core.config import _reset_config, configure_logging, get_config


@pytest.fixture(autouse=True)
def _clear_config_cache():
    _reset_config()
    yield
    _reset_config()


def test_get_config_defaults():
    """Test that get_config provides sensible defaults."""
    with patch.dict(os.environ, {}, clear=True):
        config = get_config()
        assert config.aws_region == "us-east-1"
        assert config.supabase_url == ""
        assert config.store_backend == "supabase"
        assert config.stripe_webhook_secret == ""
        assert config.environment == "local"
        assert config.log_level == "INFO"


def test_get_config_reads_environment():
    env = {
        "SUPABASE_URL": "https://abc.supabase.co",
        "SUPABASE_SERVICE_ROLE_KEY": "service-role",
        "STRIPE_SECRET_KEY": "sk_test_123",
        "STRIPE_WEBHOOK_SECRET": "whsec_123",
        "STORE_BACKEND": "Postgres",
        "LOG_LEVEL": "debug",
    }
    with patch.dict(os.environ, env, clear=True):
        config = get_config()
        assert config.supabase_url == "https://abc.supabase.co"
        assert config.supabase_service_role_key == "service-role"
        assert config.stripe_secret_key == "sk_test_123"
        assert config.stripe_webhook_secret == "whsec_123"
        assert config.store_backend == "postgres"
        assert config.log_level == "DEBUG"


def test_webhook_secret_from_secrets_manager():
    env = {"STRIPE_WEBHOOK_SECRET_ARN": "arn:aws:secretsmanager:us-east-1:123:secret:whsec"}
    with patch.dict(os.environ, env, clear=True), patch("core.config.boto3") as mock_boto3:
        mock_client = MagicMock()
        mock_client.get_secret_value.return_value = {"SecretString": "whsec_from_sm"}
        mock_boto3.client.return_value = mock_client

        config = get_config()

        assert config.stripe_webhook_secret == "whsec_from_sm"
        mock_client.get_secret_value.assert_called_once_with(SecretId=env["STRIPE_WEBHOOK_SECRET_ARN"])


def test_direct_secret_wins_over_arn():
    env = {"STRIPE_WEBHOOK_SECRET": "whsec_direct", "STRIPE_WEBHOOK_SECRET_ARN": "arn:whatever"}
    with patch.dict(os.environ, env, clear=True), patch("core.config.boto3") as mock_boto3:
        config = get_config()
        assert config.stripe_webhook_secret == "whsec_direct"
        mock_boto3.client.assert_not_called()


def test_get_config_is_cached():
    with patch.dict(os.environ, {}, clear=True):
        assert get_config() is get_config()


def test_config_is_immutable():
    with patch.dict(os.environ, {}, clear=True):
        config = get_config()
        with pytest.raises(pydantic.ValidationError):
            config.stripe_webhook_secret = "whsec_other"  # type: ignore[misc]


def test_configure_logging_sets_package_levels():
    with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True):
        configure_logging(get_config())
        assert logging.getLogger("core").level == logging.WARNING
        assert logging.getLogger("handlers").level == logging.WARNING
