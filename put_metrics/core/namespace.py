import re

from put_metrics.constants import MAX_NAMESPACE_LENGTH, NAMESPACE_PATTERN
from put_metrics.core.exceptions import AppErrorCode, ValidationError

_NAMESPACE_RE = re.compile(NAMESPACE_PATTERN)


def validate_namespace(namespace: str) -> None:
    """
    Check a CloudWatch namespace.

    Raises:
        ValidationError: when the namespace is blank, longer than 255 characters
            or contains characters other than alphanumerics, hyphens, underscores,
            periods and forward slashes.
    """
    if not namespace or not namespace.strip():
        raise ValidationError("Namespace cannot be empty", AppErrorCode.INVALID_NAMESPACE)

    if len(namespace) > MAX_NAMESPACE_LENGTH:
        raise ValidationError(
            f"Namespace exceeds maximum length of {MAX_NAMESPACE_LENGTH} characters "
            f"(got {len(namespace)})",
            AppErrorCode.INVALID_NAMESPACE,
        )

    if not _NAMESPACE_RE.fullmatch(namespace):
        raise ValidationError(
            f'Namespace "{namespace}" contains invalid characters. '
            "Only alphanumeric characters, hyphens, underscores, periods, "
            "and forward slashes are allowed.",
            AppErrorCode.INVALID_NAMESPACE,
        )
