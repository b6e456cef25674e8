from fastapi import APIRouter, Request, Response

from auth import (
    AuthError,
    AuthManager,
    clear_auth_cookie,
    error_response,
    get_current_admin_from_cookie,
    set_auth_cookie,
    success_response,
)
from ..context import logger
from ..schemas import AdminLoginRequest


router = APIRouter()


@router.post("/auth/admin-login")
async def admin_login(request: AdminLoginRequest, response: Response):
    """Sign in to the dashboard; only profiles with the admin role are accepted."""
    try:
        try:
            result = AuthManager.login_admin(request.email, request.password)
        except AuthError as exc:
            return error_response(exc.message, exc.status_code)
        if not result:
            return error_response("Invalid email or password", 401)

        set_auth_cookie(response, result["access_token"])
        return success_response("Signed in", result)

    except Exception as exc:
        logger.error(f"Admin login failed: {exc}")
        return error_response("Login failed, please try again later", 500)


@router.post("/auth/logout")
async def logout(response: Response):
    clear_auth_cookie(response)
    return success_response("Signed out")


@router.get("/auth/me")
async def get_current_admin_info(request: Request):
    admin = get_current_admin_from_cookie(request)
    if admin:
        return success_response("Session active", admin)
    return error_response("Not signed in", 401)
