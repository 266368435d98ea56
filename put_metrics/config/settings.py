from os import getenv
from pathlib import Path
from typing import Literal, TypeGuard, get_args

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv("")

_ENVS = Literal["development", "testing", "staging", "production"]


def _is_valid_env(env: str | None) -> TypeGuard[_ENVS]:
    return env in get_args(_ENVS)


_ENV = getenv("DEPLOYMENT_ENV")
_DEPLOYMENT_ENV = _ENV if _is_valid_env(_ENV) else "development"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # `.env.local` takes priority over `.env`
        env_file=(".env", f".env.{_DEPLOYMENT_ENV}", ".env.local"),
        extra="ignore",
    )

    APP_NAME: str = "AWS CloudWatch Put Metrics"
    DEPLOYMENT_ENV: _ENVS = _DEPLOYMENT_ENV
    LOG_LEVEL: str = "INFO"

    # Credentials are resolved by the default boto3 chain, never here.
    AWS_REGION: str | None = None
    AWS_ENDPOINT_URL: str | None = None
    AWS_CONNECT_TIMEOUT: float = 10.0
    AWS_READ_TIMEOUT: float = 30.0

    SENTRY_DSN: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0

    GITHUB_OUTPUT: Path | None = None


settings = Settings()
