import asyncio
import os
import sys

import sentry_sdk
from loguru import logger

from put_metrics.config.settings import settings
from put_metrics.core.exceptions import AppError, AppErrorCode
from put_metrics.infrastructure.aws import get_cloudwatch_boto_client
from put_metrics.infrastructure.logging import configure_logging
from put_metrics.services.publish import put_metrics


def get_input(name: str, required: bool = True) -> str:
    """
    Read a workflow input the way the runner exposes it (`INPUT_<NAME>`).

    Hyphenated names are also looked up with underscores, since composite
    actions cannot always export hyphenated variables.
    """
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = os.environ.get(key)
    if value is None:
        value = os.environ.get(key.replace("-", "_"), "")

    if required and not value.strip():
        raise AppError(
            message=f"Input required and not supplied: {name}",
            error_code=AppErrorCode.MISSING_INPUT,
        )

    return value.strip()


def set_output(name: str, value: str) -> None:
    if settings.GITHUB_OUTPUT:
        with open(settings.GITHUB_OUTPUT, "a", encoding="utf-8") as output:
            output.write(f"{name}={value}\n")
        return

    print(f"::set-output name={name}::{value}", flush=True)


def set_failed(message: str) -> None:
    print(f"::error::{_escape_command_data(message)}", flush=True)


def _escape_command_data(data: str) -> str:
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def run() -> int:
    """Run the action step. Returns the process exit code."""
    configure_logging(settings.LOG_LEVEL)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            environment=settings.DEPLOYMENT_ENV,
        )

    try:
        namespace = get_input("namespace")
        metric_data = get_input("metric-data")

        logger.info(settings.APP_NAME)
        logger.info(f"Namespace: {namespace}")

        client = get_cloudwatch_boto_client()
        result = asyncio.run(put_metrics(client, namespace, metric_data))

        if not result.success:
            set_failed(result.error or "Failed to put metrics")
            return 1

        set_output("metrics-count", str(result.metrics_count or 0))

        logger.info("")
        logger.info("=" * 50)
        logger.info(f"Successfully published {result.metrics_count} metric(s)")
        logger.info(f"Namespace: {namespace}")
        logger.info("=" * 50)
        return 0
    except AppError as ex:
        set_failed(ex.message)
        return 1
    except Exception as ex:
        sentry_sdk.capture_exception(ex)
        logger.exception(f"Unexpected error: {ex}")
        set_failed(str(ex))
        return 1


def run_cli() -> None:
    sys.exit(run())
