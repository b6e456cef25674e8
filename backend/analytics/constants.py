"""Fixed business constants for order profit analytics."""

from types import MappingProxyType
from typing import Mapping, Tuple

DELIVERY_BASE_FEE = 1000
DELIVERY_PER_ITEM_FEE = 130

# legacy rows were written with this misspelling of "failed"
FAILED_LEGACY_ALIAS = "faield"

DISPLAY_STATUSES: Tuple[str, ...] = (
    "unpaid",
    "paid",
    "failed",
    "preparing",
    "done",
    "cancelled",
)
PROFIT_STATUSES: Tuple[str, ...] = ("paid", "done", "preparing")

PRESET_PERIOD_MONTHS: Mapping[str, int] = MappingProxyType({
    "1m": 1,
    "3m": 3,
    "6m": 6,
    "12m": 12,
})
CUSTOM_PERIOD = "custom"
DEFAULT_PERIOD = "3m"

__all__ = [
    "DELIVERY_BASE_FEE",
    "DELIVERY_PER_ITEM_FEE",
    "FAILED_LEGACY_ALIAS",
    "DISPLAY_STATUSES",
    "PROFIT_STATUSES",
    "PRESET_PERIOD_MONTHS",
    "CUSTOM_PERIOD",
    "DEFAULT_PERIOD",
]
