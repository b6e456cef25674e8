# /backend/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import HTTPException, Request, Response

from config import get_settings
from database import ProfileDB

settings = get_settings()

AUTH_COOKIE_NAME = "auth_token"

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Login failure carrying a user-facing message and HTTP status."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthManager:
    """Admin session tokens."""

    @staticmethod
    def create_access_token(data: Dict[str, Any]) -> str:
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + timedelta(days=settings.access_token_expire_days)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            return None

    @staticmethod
    def login_admin(email: str, password: str) -> Optional[Dict[str, Any]]:
        """Check credentials and the admin role; return the token payload for the session."""
        profile = ProfileDB.verify_credentials(email, password)
        if not profile:
            return None

        if (profile.get("role") or "").lower() != "admin":
            logger.warning("Non-admin account attempted dashboard login: %s", profile.get("id"))
            raise AuthError("Access denied. This account is not an admin.", 403)

        token = AuthManager.create_access_token({
            "sub": profile["id"],
            "type": "admin",
            "name": profile.get("first_name") or profile.get("email"),
            "email": profile.get("email"),
        })
        return {
            "access_token": token,
            "token_type": "bearer",
            "admin": {
                "id": profile["id"],
                "email": profile.get("email"),
                "name": profile.get("first_name") or profile.get("email"),
                "role": profile.get("role"),
            },
        }


def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.access_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=not settings.is_development,
        samesite="lax"
    )


def clear_auth_cookie(response: Response):
    response.delete_cookie(key=AUTH_COOKIE_NAME)


def get_token_from_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(AUTH_COOKIE_NAME)


def get_current_admin_from_cookie(request: Request) -> Optional[Dict[str, Any]]:
    token = get_token_from_cookie(request)
    if not token:
        return None

    payload = AuthManager.verify_token(token)
    if not payload or payload.get("type") != "admin":
        return None

    return {
        "id": payload.get("sub"),
        "name": payload.get("name"),
        "email": payload.get("email"),
        "type": "admin"
    }


def get_current_admin_required_from_cookie(request: Request) -> Dict[str, Any]:
    """Session gate for every dashboard route."""
    admin = get_current_admin_from_cookie(request)
    if not admin:
        raise HTTPException(status_code=401, detail="Admin session required")
    return admin


def success_response(message: str = "OK", data: Any = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data or {},
        "code": 200
    }


def error_response(message: str, code: int = 400, details: Any = None) -> Dict[str, Any]:
    response = {
        "success": False,
        "message": message,
        "code": code,
        "data": {}
    }
    if details:
        response["details"] = details
    return response
