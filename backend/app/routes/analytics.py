import os
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from starlette.responses import FileResponse

from auth import error_response, get_current_admin_required_from_cookie, success_response
from config import get_settings
from ..context import EXPORTS_DIR, logger
from ..schemas import AnalyticsExportRequest
from ..services.analytics import build_analytics_payload, load_analytics_dataset, write_analytics_workbook
from ..utils import build_export_filename, resolve_analytics_range, serialize_range


router = APIRouter()
settings = get_settings()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/admin/analytics")
async def get_profit_analytics(
    request: Request,
    period: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
):
    """Profit analytics for paid, done and preparing orders over a period."""
    get_current_admin_required_from_cookie(request)
    period_key = (period or settings.analytics_default_period).strip().lower()
    try:
        date_range = resolve_analytics_range(period_key, date_from, date_to, settings.analytics_default_period)
    except ValueError as exc:
        return error_response(str(exc), 400)

    try:
        dataset = load_analytics_dataset()
        payload = build_analytics_payload(dataset, date_range)
        payload["range"] = serialize_range(period_key, date_range)
        return success_response("Analytics loaded", payload)
    except Exception as exc:
        logger.error(f"Failed to compute analytics: {exc}")
        return error_response("Failed to load analytics", 500)


@router.post("/admin/analytics/export")
async def export_profit_analytics(payload: AnalyticsExportRequest, request: Request):
    """Write the current analytics view to an xlsx workbook."""
    get_current_admin_required_from_cookie(request)
    period_key = (payload.period or settings.analytics_default_period).strip().lower()
    try:
        date_range = resolve_analytics_range(
            period_key, payload.date_from, payload.date_to, settings.analytics_default_period
        )
    except ValueError as exc:
        return error_response(str(exc), 400)

    try:
        analytics_payload = build_analytics_payload(load_analytics_dataset(), date_range)
        range_info = serialize_range(period_key, date_range)
        filename = build_export_filename(date_range)
        write_analytics_workbook(analytics_payload, range_info, os.path.join(EXPORTS_DIR, filename))
        logger.info("Analytics export written: %s", filename)
        return success_response("Export ready", {
            "filename": filename,
            "download_url": f"/admin/analytics/export/{filename}",
            "range": range_info,
        })
    except Exception as exc:
        logger.error(f"Analytics export failed: {exc}")
        return error_response("Export failed", 500)


@router.get("/admin/analytics/export/{filename}")
async def download_profit_analytics(filename: str, request: Request):
    get_current_admin_required_from_cookie(request)
    if ".." in filename or "/" in filename or "\\" in filename or not filename.endswith(".xlsx"):
        raise HTTPException(status_code=400, detail="Invalid filename")

    file_path = os.path.join(EXPORTS_DIR, filename)
    if not os.path.isfile(file_path):
        raise HTTPException(status_code=404, detail="Export not found or expired")
    return FileResponse(file_path, media_type=XLSX_MEDIA_TYPE, filename=filename)
