import boto3
from botocore.config import Config
from mypy_boto3_cloudwatch import CloudWatchClient

from put_metrics.config.settings import settings


def get_boto3_config() -> Config:
    """
    One attempt per request; a failed PutMetricData fails the step.
    """
    return Config(
        region_name=settings.AWS_REGION,
        connect_timeout=settings.AWS_CONNECT_TIMEOUT,
        read_timeout=settings.AWS_READ_TIMEOUT,
        retries=dict(
            total_max_attempts=1,
            mode="standard",
        ),
    )


def get_cloudwatch_boto_client() -> CloudWatchClient:
    """
    Returns boto3 client for Cloudwatch service

    Credentials come from the default provider chain (environment, profile,
    web identity, instance metadata).
    """
    client_kwargs = {}
    if settings.AWS_ENDPOINT_URL:
        client_kwargs["endpoint_url"] = settings.AWS_ENDPOINT_URL

    return boto3.client("cloudwatch", config=get_boto3_config(), **client_kwargs)
