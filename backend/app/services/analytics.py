from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from analytics import (
    DISPLAY_STATUSES,
    PROFIT_STATUSES,
    DateRange,
    build_monthly_profit_series,
    build_order_item_gross_map,
    build_order_item_quantity_map,
    build_scoped_order_map,
    build_status_count,
    build_status_metrics,
    build_variant_label_map,
    get_preset_range,
    max_monthly_value,
    rank_active_clients,
    rank_top_variants,
    summarize_profit,
)
from database import CatalogDB, OrderDB
from ..context import logger
from ..utils import round_money, status_label


@dataclass
class AnalyticsDataset:
    """Raw rows fetched for one analytics load; derived maps are built once per load."""

    orders: List[Dict[str, Any]]
    items: List[Dict[str, Any]]
    variants: List[Dict[str, Any]] = field(default_factory=list)
    products: List[Dict[str, Any]] = field(default_factory=list)
    sizes: List[Dict[str, Any]] = field(default_factory=list)
    colors: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        self.item_subtotal_map = build_order_item_gross_map(self.items)
        self.item_quantity_map = build_order_item_quantity_map(self.items)


def load_analytics_dataset(include_catalog: bool = True) -> AnalyticsDataset:
    orders = OrderDB.get_analytics_orders()
    items = OrderDB.get_analytics_order_items()
    if not include_catalog:
        return AnalyticsDataset(orders=orders, items=items)

    dataset = AnalyticsDataset(
        orders=orders,
        items=items,
        variants=CatalogDB.list_variant_meta(),
        products=CatalogDB.list_products(),
        sizes=CatalogDB.list_sizes(),
        colors=CatalogDB.list_colors(),
    )
    logger.debug("Loaded analytics dataset: %s orders, %s items", len(orders), len(items))
    return dataset


def _serialize_metrics(metrics) -> Dict[str, Any]:
    return {
        "order_count": metrics.order_count,
        "gross_profit": round_money(metrics.gross_profit),
        "discount_total": round_money(metrics.discount_total),
        "net_profit": round_money(metrics.net_profit),
    }


def _serialize_series(series) -> List[Dict[str, Any]]:
    return [
        {
            "month_key": entry.month_key,
            "label": entry.label,
            "gross": round_money(entry.gross),
            "net": round_money(entry.net),
            "orders": entry.orders,
        }
        for entry in series
    ]


def build_overview_payload(dataset: AnalyticsDataset, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Dashboard scorecards: last 30 days, status mix, six-month net trend."""
    now = now or datetime.now()
    last_month = get_preset_range("1m", now)
    last_six_months = get_preset_range("6m", now)

    profit = summarize_profit(
        dataset.orders,
        dataset.item_subtotal_map,
        dataset.item_quantity_map,
        PROFIT_STATUSES,
        last_month,
    )
    status_counts = build_status_count(dataset.orders, DISPLAY_STATUSES, last_month)
    monthly = build_monthly_profit_series(
        dataset.orders,
        dataset.item_subtotal_map,
        dataset.item_quantity_map,
        last_six_months,
        PROFIT_STATUSES,
    )

    status_rows = [
        {"status": status, "label": status_label(status), "count": status_counts.get(status, 0)}
        for status in DISPLAY_STATUSES
    ]
    return {
        "profit_30_days": _serialize_metrics(profit),
        "status_counts_30_days": status_rows,
        "max_status_count": max([1] + [row["count"] for row in status_rows]),
        "monthly_net": _serialize_series(monthly),
        "max_monthly_net": round_money(max_monthly_value(monthly, fields=("net",))),
    }


def build_analytics_payload(dataset: AnalyticsDataset, date_range: DateRange) -> Dict[str, Any]:
    subtotal_map = dataset.item_subtotal_map
    quantity_map = dataset.item_quantity_map

    summary = summarize_profit(dataset.orders, subtotal_map, quantity_map, PROFIT_STATUSES, date_range)
    monthly = build_monthly_profit_series(dataset.orders, subtotal_map, quantity_map, date_range, PROFIT_STATUSES)
    status_metrics = build_status_metrics(dataset.orders, subtotal_map, quantity_map, date_range)

    scoped_orders = build_scoped_order_map(dataset.orders, date_range)
    variant_labels = build_variant_label_map(dataset.variants, dataset.products, dataset.sizes, dataset.colors)
    top_variants = rank_top_variants(dataset.items, scoped_orders, variant_labels)
    active_clients = rank_active_clients(scoped_orders, subtotal_map, quantity_map)

    return {
        "summary": _serialize_metrics(summary),
        "monthly": _serialize_series(monthly),
        "max_monthly_value": round_money(max_monthly_value(monthly)),
        "status_metrics": [
            {
                "status": row["status"],
                "label": status_label(row["status"]),
                "orders": row["orders"],
                "gross": round_money(row["gross"]),
                "discount": round_money(row["discount"]),
                "net": round_money(row["net"]),
            }
            for row in status_metrics
        ],
        "top_variants": [
            {**row, "revenue": round_money(row["revenue"])}
            for row in top_variants
        ],
        "active_clients": [
            {**row, "gross": round_money(row["gross"]), "net": round_money(row["net"])}
            for row in active_clients
        ],
    }


def _autosize_columns(ws) -> None:
    for col_idx, column_cells in enumerate(ws.columns, start=1):
        try:
            max_len = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column_cells)
        except ValueError:
            max_len = 0
        adjusted_width = min(max(max_len + 4, 12), 50)
        ws.column_dimensions[get_column_letter(col_idx)].width = adjusted_width


def write_analytics_workbook(payload: Dict[str, Any], range_info: Dict[str, Any], file_path: str) -> None:
    wb = Workbook()

    ws = wb.active
    ws.title = "Summary"
    summary = payload["summary"]
    ws.append(["From", range_info.get("from_date")])
    ws.append(["To", range_info.get("to_date")])
    ws.append(["Orders", summary["order_count"]])
    ws.append(["Gross Profit", summary["gross_profit"]])
    ws.append(["Discounts", summary["discount_total"]])
    ws.append(["Net Profit", summary["net_profit"]])

    sheets = (
        ("Monthly", ["Month", "Gross", "Net", "Orders"],
         [[row["label"], row["gross"], row["net"], row["orders"]] for row in payload["monthly"]]),
        ("Statuses", ["Status", "Orders", "Gross", "Discount", "Net"],
         [[row["label"], row["orders"], row["gross"], row["discount"], row["net"]] for row in payload["status_metrics"]]),
        ("Top Variants", ["Variant", "Quantity", "Orders", "Revenue"],
         [[row["label"], row["quantity"], row["orders"], row["revenue"]] for row in payload["top_variants"]]),
        ("Clients", ["Client", "Email", "Orders", "Items", "Gross", "Net"],
         [[row["name"], row["email"], row["orders"], row["item_qty"], row["gross"], row["net"]]
          for row in payload["active_clients"]]),
    )
    for title, header, rows in sheets:
        sheet = wb.create_sheet(title)
        sheet.append(header)
        for row in rows:
            sheet.append(row)

    for sheet in wb.worksheets:
        _autosize_columns(sheet)

    wb.save(file_path)


__all__ = [
    "AnalyticsDataset",
    "load_analytics_dataset",
    "build_overview_payload",
    "build_analytics_payload",
    "write_analytics_workbook",
]
