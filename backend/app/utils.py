from datetime import datetime
from typing import Any, Dict, Optional

from analytics import (
    CUSTOM_PERIOD,
    DISPLAY_STATUSES,
    DateRange,
    date_input_string,
    get_custom_range,
    get_preset_range,
)

INVALID_CUSTOM_RANGE_MESSAGE = (
    "Invalid custom range. Ensure both dates are valid and the start date is before the end date."
)


def status_label(status: str) -> str:
    """Display label for an order status; unknown statuses are shown as stored."""
    if status in DISPLAY_STATUSES:
        return status.capitalize()
    return status


def round_money(value: float) -> float:
    return round(float(value or 0.0), 2)


def resolve_analytics_range(
    period: Optional[str],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    default_period: str = "3m",
    now: Optional[datetime] = None,
) -> DateRange:
    """
    Turn the period selector into a DateRange.

    Raises ValueError for unknown periods and invalid custom ranges.
    """
    period_key = (period or default_period).strip().lower()
    if period_key == CUSTOM_PERIOD:
        date_range = get_custom_range(date_from, date_to)
        if date_range is None:
            raise ValueError(INVALID_CUSTOM_RANGE_MESSAGE)
        return date_range
    return get_preset_range(period_key, now)


def serialize_range(period: str, date_range: DateRange) -> Dict[str, Any]:
    data = date_range.to_dict()
    data.update({
        "period": period,
        "from_date": date_input_string(date_range.from_),
        "to_date": date_input_string(date_range.to),
    })
    return data


def build_export_filename(date_range: DateRange) -> str:
    start_part = date_range.from_.strftime("%Y%m%d")
    end_part = date_range.to.strftime("%Y%m%d")
    timestamp_part = datetime.now().strftime("%Y%m%dT%H%M%S")
    return f"analytics_{start_part}-{end_part}_{timestamp_part}.xlsx"


__all__ = [
    "INVALID_CUSTOM_RANGE_MESSAGE",
    "status_label",
    "round_money",
    "resolve_analytics_range",
    "serialize_range",
    "build_export_filename",
]
