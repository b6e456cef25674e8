"""
Profit analytics over raw order and order-item rows.

Every function here is pure: inputs are read, never mutated, and a fresh
result is returned on each call. Malformed numbers coerce to 0 and
unparseable timestamps simply fall outside any date range.
"""

import logging
import math
import re
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import (
    DELIVERY_BASE_FEE,
    DELIVERY_PER_ITEM_FEE,
    DISPLAY_STATUSES,
    FAILED_LEGACY_ALIAS,
    PRESET_PERIOD_MONTHS,
    PROFIT_STATUSES,
)

logger = logging.getLogger("analytics")

# extended ISO-8601 only: YYYY-MM-DD, optionally followed by HH:MM...
_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}|$)")

Order = Mapping[str, Any]
OrderItem = Mapping[str, Any]


@dataclass(frozen=True)
class DateRange:
    from_: datetime
    to: datetime

    def to_dict(self) -> Dict[str, str]:
        return {
            "from": self.from_.isoformat(timespec="milliseconds"),
            "to": self.to.isoformat(timespec="milliseconds"),
        }


@dataclass
class ProfitMetrics:
    gross_profit: float = 0.0
    net_profit: float = 0.0
    discount_total: float = 0.0
    order_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyEntry:
    month_key: str
    label: str
    gross: float = 0.0
    net: float = 0.0
    orders: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def to_number(value: Any) -> float:
    """Coerce a stored number or numeric string, falling back to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        parsed = float(value)
    else:
        text = str(value).strip()
        if not text or "_" in text:
            return 0.0
        if text[:2].lower() in ("0x", "0o", "0b"):
            try:
                return float(int(text, 0))
            except ValueError:
                return 0.0
        try:
            parsed = float(text)
        except ValueError:
            return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into a naive local datetime.

    Offset-aware values are converted to local wall-clock time so they
    compare with the naive day boundaries of a DateRange. Precision is
    truncated to milliseconds.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if not _ISO_DATE_PREFIX.match(text):
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999000)


def shift_months(value: datetime, months: int) -> datetime:
    """
    Move a datetime by whole calendar months.

    A day that does not exist in the target month overflows into the next
    one (31 March minus one month is 3 March in a non-leap year).
    """
    total = value.year * 12 + (value.month - 1) + months
    year, month_index = divmod(total, 12)
    first = value.replace(year=year, month=month_index + 1, day=1)
    return first + timedelta(days=value.day - 1)


def normalize_order_status(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    clean = str(value).strip().lower()
    if not clean:
        return None
    if clean == FAILED_LEGACY_ALIAS:
        return "failed"
    return clean


def is_profit_status(status: Optional[str]) -> bool:
    return bool(status) and status in PROFIT_STATUSES


def build_order_item_gross_map(items: Iterable[OrderItem]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for item in items:
        order_id = item.get("order_id")
        line_total = to_number(item.get("price")) * to_number(item.get("quantity"))
        totals[order_id] = totals.get(order_id, 0.0) + line_total
    return totals


def build_order_item_quantity_map(items: Iterable[OrderItem]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for item in items:
        order_id = item.get("order_id")
        totals[order_id] = totals.get(order_id, 0.0) + to_number(item.get("quantity"))
    return totals


def delivery_for_order(item_quantity: Any) -> float:
    """Base delivery fee plus a per-item fee for every unit in the order."""
    quantity = max(0.0, to_number(item_quantity))
    return DELIVERY_BASE_FEE + quantity * DELIVERY_PER_ITEM_FEE


def discount_for_order(order: Order, item_subtotal: Optional[float]) -> float:
    """
    Discount actually applied to an order, never more than its item subtotal.

    ``item_subtotal=None`` (or ``float("inf")``) means the subtotal is
    unknown and the stored discount is taken as-is.
    """
    raw_discount = max(0.0, to_number(order.get("discount_amount")))
    if item_subtotal is None:
        return raw_discount
    return min(raw_discount, max(0.0, item_subtotal))


def _has_total_amount(order: Order) -> bool:
    total = order.get("total_amount")
    return total is not None and str(total).strip() != ""


def gross_for_order(
    order: Order,
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
) -> float:
    # total_amount already includes items + delivery
    if _has_total_amount(order):
        return to_number(order.get("total_amount"))

    item_subtotal = item_subtotal_map.get(order.get("id"))
    item_quantity = item_quantity_map.get(order.get("id"))
    if item_subtotal is not None and item_quantity is not None:
        return item_subtotal + delivery_for_order(item_quantity)
    return 0.0


def net_for_order(
    order: Order,
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
) -> float:
    """
    Order revenue without the delivery pass-through.

    With known item quantity the stored total (already discounted) minus
    delivery is used. Without quantity but with a known subtotal, the
    clamped discount is subtracted from the subtotal. Otherwise the stored
    total is returned unchanged.
    """
    order_id = order.get("id")
    item_quantity = item_quantity_map.get(order_id)
    if item_quantity is not None:
        return to_number(order.get("total_amount")) - delivery_for_order(item_quantity)

    item_subtotal = item_subtotal_map.get(order_id)
    if item_subtotal is not None:
        return item_subtotal - discount_for_order(order, item_subtotal)

    return to_number(order.get("total_amount"))


def format_money(value: float) -> str:
    return f"{value:.2f}"


def format_month_key(value: datetime) -> str:
    return f"{value.year}-{value.month:02d}"


def month_label_from_key(key: str) -> str:
    year, month = (int(part) for part in key.split("-"))
    return datetime(year, month, 1).strftime("%b %Y")


def date_input_string(value: datetime) -> str:
    return f"{value.year}-{value.month:02d}-{value.day:02d}"


def get_preset_range(period: str, now: Optional[datetime] = None) -> DateRange:
    months = PRESET_PERIOD_MONTHS.get(period)
    if months is None:
        raise ValueError(f"Unknown analytics period: {period!r}")
    now = now or datetime.now()
    start = shift_months(now, -months)
    return DateRange(from_=start_of_day(start), to=end_of_day(now))


def get_custom_range(from_value: Any, to_value: Any) -> Optional[DateRange]:
    start = parse_timestamp(from_value)
    end = parse_timestamp(to_value)
    if start is None or end is None:
        return None
    if start > end:
        return None
    return DateRange(from_=start_of_day(start), to=end_of_day(end))


def in_date_range(value: Any, date_range: DateRange) -> bool:
    moment = parse_timestamp(value)
    if moment is None:
        return False
    return date_range.from_ <= moment <= date_range.to


def order_in_scope(order: Order, allowed_statuses: Sequence[str], date_range: Optional[DateRange]) -> bool:
    """Status filter first, then the optional date filter."""
    status = normalize_order_status(order.get("status"))
    if not status or status not in allowed_statuses:
        return False
    if date_range is not None and not in_date_range(order.get("created_at"), date_range):
        return False
    return True


def summarize_profit(
    orders: Iterable[Order],
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
    allowed_statuses: Sequence[str],
    date_range: DateRange,
) -> ProfitMetrics:
    metrics = ProfitMetrics()
    for order in orders:
        if not order_in_scope(order, allowed_statuses, date_range):
            continue
        metrics.gross_profit += gross_for_order(order, item_subtotal_map, item_quantity_map)
        metrics.net_profit += net_for_order(order, item_subtotal_map, item_quantity_map)
        metrics.discount_total += discount_for_order(order, item_subtotal_map.get(order.get("id")))
        metrics.order_count += 1
    return metrics


def build_status_count(
    orders: Iterable[Order],
    allowed_statuses: Sequence[str] = DISPLAY_STATUSES,
    date_range: Optional[DateRange] = None,
) -> Dict[str, int]:
    counts: Dict[str, int] = {status: 0 for status in allowed_statuses}
    for order in orders:
        if not order_in_scope(order, allowed_statuses, date_range):
            continue
        status = normalize_order_status(order.get("status"))
        counts[status] = counts.get(status, 0) + 1
    return counts


def build_monthly_profit_series(
    orders: Iterable[Order],
    item_subtotal_map: Mapping[str, float],
    item_quantity_map: Mapping[str, float],
    date_range: DateRange,
    allowed_statuses: Sequence[str],
) -> List[MonthlyEntry]:
    buckets: Dict[str, MonthlyEntry] = {}

    cursor = date_range.from_.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    last = date_range.to.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    while cursor <= last:
        key = format_month_key(cursor)
        buckets[key] = MonthlyEntry(month_key=key, label=month_label_from_key(key))
        cursor = shift_months(cursor, 1)

    for order in orders:
        if not order_in_scope(order, allowed_statuses, date_range):
            continue
        created_at = parse_timestamp(order.get("created_at"))
        if created_at is None:
            continue
        bucket = buckets.get(format_month_key(created_at))
        if bucket is None:
            logger.debug("order %s outside pre-built month buckets", order.get("id"))
            continue
        bucket.gross += gross_for_order(order, item_subtotal_map, item_quantity_map)
        bucket.net += net_for_order(order, item_subtotal_map, item_quantity_map)
        bucket.orders += 1

    return list(buckets.values())


__all__ = [
    "DateRange",
    "ProfitMetrics",
    "MonthlyEntry",
    "to_number",
    "parse_timestamp",
    "start_of_day",
    "end_of_day",
    "shift_months",
    "normalize_order_status",
    "is_profit_status",
    "build_order_item_gross_map",
    "build_order_item_quantity_map",
    "delivery_for_order",
    "discount_for_order",
    "gross_for_order",
    "net_for_order",
    "format_money",
    "format_month_key",
    "month_label_from_key",
    "date_input_string",
    "get_preset_range",
    "get_custom_range",
    "in_date_range",
    "order_in_scope",
    "summarize_profit",
    "build_status_count",
    "build_monthly_profit_series",
]
