from .constants import (
    CUSTOM_PERIOD,
    DEFAULT_PERIOD,
    DELIVERY_BASE_FEE,
    DELIVERY_PER_ITEM_FEE,
    DISPLAY_STATUSES,
    FAILED_LEGACY_ALIAS,
    PRESET_PERIOD_MONTHS,
    PROFIT_STATUSES,
)
from .order_analytics import (
    DateRange,
    MonthlyEntry,
    ProfitMetrics,
    build_monthly_profit_series,
    build_order_item_gross_map,
    build_order_item_quantity_map,
    build_status_count,
    date_input_string,
    delivery_for_order,
    discount_for_order,
    format_money,
    format_month_key,
    get_custom_range,
    get_preset_range,
    gross_for_order,
    in_date_range,
    is_profit_status,
    month_label_from_key,
    net_for_order,
    normalize_order_status,
    order_in_scope,
    parse_timestamp,
    shift_months,
    summarize_profit,
    to_number,
)
from .breakdowns import (
    build_scoped_order_map,
    build_status_metrics,
    build_variant_label_map,
    max_monthly_value,
    rank_active_clients,
    rank_top_variants,
)

__all__ = [
    "CUSTOM_PERIOD",
    "DEFAULT_PERIOD",
    "DELIVERY_BASE_FEE",
    "DELIVERY_PER_ITEM_FEE",
    "DISPLAY_STATUSES",
    "FAILED_LEGACY_ALIAS",
    "PRESET_PERIOD_MONTHS",
    "PROFIT_STATUSES",
    "DateRange",
    "MonthlyEntry",
    "ProfitMetrics",
    "build_monthly_profit_series",
    "build_order_item_gross_map",
    "build_order_item_quantity_map",
    "build_status_count",
    "date_input_string",
    "delivery_for_order",
    "discount_for_order",
    "format_money",
    "format_month_key",
    "get_custom_range",
    "get_preset_range",
    "gross_for_order",
    "in_date_range",
    "is_profit_status",
    "month_label_from_key",
    "net_for_order",
    "normalize_order_status",
    "order_in_scope",
    "parse_timestamp",
    "shift_months",
    "summarize_profit",
    "to_number",
    "build_scoped_order_map",
    "build_status_metrics",
    "build_variant_label_map",
    "max_monthly_value",
    "rank_active_clients",
    "rank_top_variants",
]
