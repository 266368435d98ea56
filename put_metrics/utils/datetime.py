from datetime import datetime, timezone


def parse_iso_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 string into an aware datetime, assuming UTC when no offset is given."""
    parsed = datetime.fromisoformat(text.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
