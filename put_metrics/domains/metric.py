from datetime import datetime
from enum import StrEnum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, field_validator

from put_metrics.core.exceptions import AppErrorCode
from put_metrics.utils.datetime import parse_iso_timestamp


class MetricUnit(StrEnum):
    """CloudWatch standard units."""

    SECONDS = "Seconds"
    MICROSECONDS = "Microseconds"
    MILLISECONDS = "Milliseconds"
    BYTES = "Bytes"
    KILOBYTES = "Kilobytes"
    MEGABYTES = "Megabytes"
    GIGABYTES = "Gigabytes"
    TERABYTES = "Terabytes"
    BITS = "Bits"
    KILOBITS = "Kilobits"
    MEGABITS = "Megabits"
    GIGABITS = "Gigabits"
    TERABITS = "Terabits"
    PERCENT = "Percent"
    COUNT = "Count"
    BYTES_PER_SECOND = "Bytes/Second"
    KILOBYTES_PER_SECOND = "Kilobytes/Second"
    MEGABYTES_PER_SECOND = "Megabytes/Second"
    GIGABYTES_PER_SECOND = "Gigabytes/Second"
    TERABYTES_PER_SECOND = "Terabytes/Second"
    BITS_PER_SECOND = "Bits/Second"
    KILOBITS_PER_SECOND = "Kilobits/Second"
    MEGABITS_PER_SECOND = "Megabits/Second"
    GIGABITS_PER_SECOND = "Gigabits/Second"
    TERABITS_PER_SECOND = "Terabits/Second"
    COUNT_PER_SECOND = "Count/Second"
    NONE = "None"


class _CloudWatchModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        allow_inf_nan=False,
        use_enum_values=True,
        extra="ignore",
    )


class Dimension(_CloudWatchModel):
    name: str = Field(alias="Name", description="Dimension name")
    value: str = Field(alias="Value", description="Dimension value")


class StatisticSet(_CloudWatchModel):
    sample_count: StrictFloat = Field(alias="SampleCount")
    sum: StrictFloat = Field(alias="Sum")
    minimum: StrictFloat = Field(alias="Minimum")
    maximum: StrictFloat = Field(alias="Maximum")


class MetricDatum(_CloudWatchModel):
    metric_name: str = Field(alias="MetricName", min_length=1)
    value: Optional[StrictFloat] = Field(alias="Value", default=None)
    unit: Optional[MetricUnit] = Field(alias="Unit", default=None)
    timestamp: Optional[datetime] = Field(
        alias="Timestamp",
        default=None,
        description="Observation time; CloudWatch uses the receive time when unset",
    )
    dimensions: Optional[List[Dimension]] = Field(alias="Dimensions", default=None)
    values: Optional[List[StrictFloat]] = Field(alias="Values", default=None)
    counts: Optional[List[StrictFloat]] = Field(alias="Counts", default=None)
    statistic_values: Optional[StatisticSet] = Field(alias="StatisticValues", default=None)

    @field_validator("timestamp", mode="before")
    @classmethod
    def convert_timestamp(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_iso_timestamp(value)
        return value

    @property
    def has_data(self) -> bool:
        return (
            self.value is not None
            or self.values is not None
            or self.statistic_values is not None
        )

    def to_request(self) -> dict[str, Any]:
        """Shape the datum as a `MetricData` entry of `PutMetricData`."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PublishResult(BaseModel):
    success: bool
    metrics_count: int | None = None
    error: str | None = None
    error_code: AppErrorCode | None = None
