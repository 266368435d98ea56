from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from mypy_boto3_cloudwatch import CloudWatchClient

from put_metrics.constants import STATISTIC_SET_MARKER
from put_metrics.core.exceptions import AppError, BackendError
from put_metrics.core.metric_data import parse_metric_data
from put_metrics.core.namespace import validate_namespace
from put_metrics.domains.metric import MetricDatum, PublishResult
from put_metrics.utils.asyncio import run_async


def describe_metric(metric: MetricDatum) -> str:
    dims = (
        f" [{', '.join(f'{d.name}={d.value}' for d in metric.dimensions)}]"
        if metric.dimensions
        else ""
    )
    value = _format_value(metric.value) if metric.value is not None else STATISTIC_SET_MARKER
    unit = f" {metric.unit}" if metric.unit else ""
    return f"  - {metric.metric_name}{dims}: {value}{unit}"


def _format_value(value: float) -> str:
    # 1.0 -> "1"
    return str(int(value)) if float(value).is_integer() else str(value)


async def put_metrics(
    client: CloudWatchClient,
    namespace: str,
    metric_data: str,
) -> PublishResult:
    """
    Validate the inputs and publish them to CloudWatch in a single PutMetricData call.

    The request is all-or-nothing: either every metric is accepted or the
    result carries the reason for the failure. Nothing is retried.
    """
    try:
        validate_namespace(namespace)

        logger.info("Parsing metric data...")
        metrics = parse_metric_data(metric_data)

        logger.info(f'Publishing {len(metrics)} metric(s) to namespace "{namespace}"')
        request = [metric.to_request() for metric in metrics]
        try:
            await run_async(
                lambda: client.put_metric_data(Namespace=namespace, MetricData=request)
            )
        except (ClientError, BotoCoreError) as ex:
            raise BackendError(f"CloudWatch PutMetricData failed: {ex}") from ex

        logger.info("✓ Metrics published successfully")
        _log_published(metrics)

        return PublishResult(success=True, metrics_count=len(metrics))
    except AppError as ex:
        logger.error(f"Failed to put metrics: {ex.message}")
        return PublishResult(success=False, error=ex.message, error_code=ex.error_code)


def _log_published(metrics: list[MetricDatum]) -> None:
    try:
        for metric in metrics:
            logger.info(describe_metric(metric))
    except Exception as ex:
        logger.warning(f"Could not log published metrics: {ex}")
