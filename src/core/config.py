import logging
from os import environ

import boto3
from pydantic import BaseModel, ConfigDict

_cached_secrets: dict[str, str] = {}


def _resolve_secret(env_name: str, arn_env_name: str) -> str:
    """Fetch a secret from the environment or Secrets Manager, with caching."""
    if env_name in _cached_secrets:
        return _cached_secrets[env_name]

    # Local dev: use env var directly
    direct = environ.get(env_name, "")
    if direct:
        _cached_secrets[env_name] = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get(arn_env_name, "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager", region_name=environ.get("AWS_REGION", "us-east-1"))
    _cached_secrets[env_name] = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_secrets[env_name]


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    supabase_url: str
    supabase_service_role_key: str
    store_backend: str = "supabase"
    database_url: str = ""
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    environment: str
    log_level: str = "INFO"


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config. For testing only."""
    global _cached_config
    _cached_config = None
    _cached_secrets.clear()


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        supabase_url=environ.get("SUPABASE_URL", ""),
        supabase_service_role_key=environ.get("SUPABASE_SERVICE_ROLE_KEY", ""),
        store_backend=environ.get("STORE_BACKEND", "supabase").lower(),
        database_url=environ.get("DATABASE_URL", ""),
        stripe_secret_key=_resolve_secret("STRIPE_SECRET_KEY", "STRIPE_SECRET_ARN"),
        stripe_webhook_secret=_resolve_secret("STRIPE_WEBHOOK_SECRET", "STRIPE_WEBHOOK_SECRET_ARN"),
        environment=environ.get("ENVIRONMENT", "local"),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
    return _cached_config


def configure_logging(config: Config) -> None:
    """Apply LOG_LEVEL to this project's loggers; the Lambda runtime owns the handlers."""
    for name in ("core", "handlers"):
        logging.getLogger(name).setLevel(config.log_level)
