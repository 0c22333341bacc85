"""ISO 8601 interval helpers for analytics and usage queries."""

from __future__ import annotations

from datetime import datetime, timezone

from genesys_mcp.core.exceptions import ValidationError


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None when it is malformed.

    A trailing ``Z`` is accepted and naive values are taken as UTC.
    """
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_interval(start_date: str, end_date: str, item_index: int | None = None) -> str:
    """Validate a date range and return it as a ``start/end`` interval string."""
    start = parse_iso_datetime(start_date)
    if start is None:
        raise ValidationError(
            f'Invalid start date format: "{start_date}". Please provide a valid ISO 8601 '
            "date string (e.g., 2024-01-01T00:00:00Z).",
            field="startDate",
            expected="ISO 8601",
            received=start_date,
            item_index=item_index,
        )

    end = parse_iso_datetime(end_date)
    if end is None:
        raise ValidationError(
            f'Invalid end date format: "{end_date}". Please provide a valid ISO 8601 '
            "date string (e.g., 2024-01-31T23:59:59Z).",
            field="endDate",
            expected="ISO 8601",
            received=end_date,
            item_index=item_index,
        )

    if start >= end:
        raise ValidationError(
            f"Start date ({start_date}) must be before end date ({end_date}).",
            field="startDate",
            item_index=item_index,
        )

    return f"{start_date}/{end_date}"
