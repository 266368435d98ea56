import json
from typing import Any, List

from pydantic import ValidationError as PydanticValidationError

from put_metrics.constants import (
    MAX_DIMENSIONS_PER_METRIC,
    MAX_METRICS_PER_REQUEST,
    MAX_VALUES_PER_METRIC,
)
from put_metrics.core.exceptions import ParseError, ValidationError
from put_metrics.domains.metric import MetricDatum

# Optional fields that are dropped, not validated, when given a falsy value.
_SKIP_IF_EMPTY = ("Unit", "Timestamp")


def parse_metric_data(metric_data: str) -> List[MetricDatum]:
    """
    Parse the `metric-data` JSON text into CloudWatch metric data.

    The result keeps the input order; records are neither merged nor deduplicated.

    Raises:
        ParseError: the text is not valid JSON.
        ValidationError: the JSON breaks a PutMetricData constraint.
    """
    try:
        parsed = json.loads(metric_data)
    except (json.JSONDecodeError, RecursionError) as ex:
        raise ParseError(f"Failed to parse metric-data JSON: {ex}") from ex

    if not isinstance(parsed, list):
        raise ValidationError("metric-data must be a JSON array")

    if len(parsed) == 0:
        raise ValidationError("metric-data array cannot be empty")

    if len(parsed) > MAX_METRICS_PER_REQUEST:
        raise ValidationError(
            f"metric-data array exceeds maximum size of {MAX_METRICS_PER_REQUEST} metrics "
            f"(got {len(parsed)})"
        )

    return [_parse_metric(index, data) for index, data in enumerate(parsed)]


def _parse_metric(index: int, data: Any) -> MetricDatum:
    if not isinstance(data, dict):
        raise ValidationError(f"Metric at index {index} must be a JSON object")

    metric_name = data.get("MetricName")
    if not metric_name:
        raise ValidationError(f"Metric at index {index} is missing required field 'MetricName'")

    dimensions = data.get("Dimensions")
    if isinstance(dimensions, list) and len(dimensions) > MAX_DIMENSIONS_PER_METRIC:
        raise ValidationError(
            f'Metric "{metric_name}" has too many dimensions '
            f"(max {MAX_DIMENSIONS_PER_METRIC}, got {len(dimensions)})"
        )

    fields = {
        key: value for key, value in data.items() if key not in _SKIP_IF_EMPTY or value
    }
    try:
        metric = MetricDatum.model_validate(fields)
    except PydanticValidationError as ex:
        raise ValidationError(
            f'Metric "{metric_name}" at index {index} is invalid: {_describe_errors(ex)}',
            details=str(ex),
        ) from ex

    _check_values_and_counts(metric)

    if not metric.has_data:
        raise ValidationError(
            f'Metric "{metric_name}" must have at least one of: Value, Values, or StatisticValues'
        )

    return metric


def _check_values_and_counts(metric: MetricDatum) -> None:
    if metric.values is not None and len(metric.values) > MAX_VALUES_PER_METRIC:
        raise ValidationError(
            f'Metric "{metric.metric_name}" has too many values '
            f"(max {MAX_VALUES_PER_METRIC}, got {len(metric.values)})"
        )

    if metric.counts is None:
        return

    if metric.values is None:
        raise ValidationError(f'Metric "{metric.metric_name}" has Counts without Values')

    if len(metric.counts) != len(metric.values):
        raise ValidationError(
            f'Metric "{metric.metric_name}" has {len(metric.values)} Values '
            f"but {len(metric.counts)} Counts"
        )


def _describe_errors(ex: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in ex.errors()
    )
