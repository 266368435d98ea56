from enum import StrEnum


class AppErrorCode(StrEnum):
    """
    Error codes of the put metrics action
    """

    MISSING_INPUT = "MISSING_INPUT"
    INVALID_NAMESPACE = "INVALID_NAMESPACE"
    METRIC_DATA_PARSE_ERROR = "METRIC_DATA_PARSE_ERROR"
    METRIC_DATA_VALIDATION_ERROR = "METRIC_DATA_VALIDATION_ERROR"
    CLOUDWATCH_ERROR = "CLOUDWATCH_ERROR"


class AppError(Exception):
    """Base class for put metrics exceptions."""

    message: str
    error_code: AppErrorCode | None
    details: str | None

    def __init__(
        self,
        *,
        message: str,
        error_code: AppErrorCode | None,
        details: str | None = None,
    ):
        super().__init__(message, error_code)
        self.message = message
        self.error_code = error_code
        self.details = details

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        return f'{class_name}(message="{self.message}", error_code={self.error_code}, details={self.details})'


class ParseError(AppError):
    """metric-data is not valid JSON."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(
            message=message,
            error_code=AppErrorCode.METRIC_DATA_PARSE_ERROR,
            details=details,
        )


class ValidationError(AppError):
    """Input is well-formed but violates a CloudWatch constraint."""

    def __init__(
        self,
        message: str,
        error_code: AppErrorCode = AppErrorCode.METRIC_DATA_VALIDATION_ERROR,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class BackendError(AppError):
    """CloudWatch rejected the request."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(
            message=message,
            error_code=AppErrorCode.CLOUDWATCH_ERROR,
            details=details,
        )
