from fastapi import APIRouter, Request

from auth import error_response, get_current_admin_required_from_cookie, success_response
from ..context import logger
from ..services.analytics import build_overview_payload, load_analytics_dataset


router = APIRouter()


@router.get("/admin/dashboard/overview")
async def get_dashboard_overview(request: Request):
    """Scorecards for the dashboard landing page."""
    get_current_admin_required_from_cookie(request)
    try:
        dataset = load_analytics_dataset(include_catalog=False)
        return success_response("Overview loaded", build_overview_payload(dataset))
    except Exception as exc:
        logger.error(f"Failed to build dashboard overview: {exc}")
        return error_response("Failed to load overview", 500)
