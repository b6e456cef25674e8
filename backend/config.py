"""Centralised environment-driven settings for the backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

from analytics.constants import DEFAULT_PERIOD, PRESET_PERIOD_MONTHS


BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

# Ensure variables from .env are loaded before anything else reads from os.environ
_env_candidates: Iterable[Path] = (
    PROJECT_ROOT / ".env",
    BASE_DIR / ".env",
)
for candidate in _env_candidates:
    if candidate.exists():
        load_dotenv(dotenv_path=candidate, override=False)
load_dotenv(override=False)


def _split_csv(value: str | None) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _as_int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _normalize_env(value: str | None) -> str:
    if not value:
        return "production"
    cleaned = value.strip().lower()
    if cleaned == "devlopment":  # tolerate typo from configuration guidance
        cleaned = "development"
    return cleaned


def _resolve_path(value: str, default: str) -> Path:
    path = Path((value or default).strip() or default)
    if not path.is_absolute():
        path = BASE_DIR / path
    return path


@dataclass(frozen=True)
class AdminAccount:
    email: str
    password: str
    name: str


@dataclass(frozen=True)
class Settings:
    env: str
    is_development: bool
    backend_host: str
    backend_port: int
    log_level: str
    db_path: Path
    db_reset: bool
    shop_name: str
    jwt_secret_key: str
    jwt_algorithm: str
    access_token_expire_days: int
    admin_accounts: List[AdminAccount]
    allowed_origins: List[str]
    exports_dir: Path
    export_ttl_hours: int
    analytics_default_period: str


@lru_cache()
def get_settings() -> Settings:
    env_value = _normalize_env(os.getenv("ENV"))
    is_development = env_value == "development"

    backend_host = os.getenv("DEV_BACKEND_HOST") if is_development else os.getenv("BACKEND_HOST")
    backend_host = (backend_host or "0.0.0.0").strip()

    backend_port = _as_int(os.getenv("BACKEND_PORT"), 9099)
    dev_port = _as_int(os.getenv("DEV_BACKEND_PORT"), backend_port)
    port = dev_port if is_development else backend_port

    log_level_key = "DEV_LOG_LEVEL" if is_development else "LOG_LEVEL"
    log_level = (os.getenv(log_level_key) or os.getenv("LOG_LEVEL") or "INFO").upper()

    db_path = _resolve_path(os.getenv("DB_PATH", ""), "storefront_admin.db")
    db_path.parent.mkdir(parents=True, exist_ok=True)

    db_reset = _as_bool(os.getenv("DB_RESET"), False)

    jwt_secret = os.getenv("JWT_SECRET_KEY")
    if not jwt_secret:
        import secrets

        jwt_secret = secrets.token_hex(32)

    jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256").strip() or "HS256"
    access_days = _as_int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS"), 7)

    emails = _split_csv(os.getenv("ADMIN_EMAIL"))
    passwords = _split_csv(os.getenv("ADMIN_PASSWORD"))
    display_names = _split_csv(os.getenv("ADMIN_NAME"))

    if len(emails) != len(passwords):
        raise RuntimeError("ADMIN_EMAIL and ADMIN_PASSWORD must have the same number of entries")

    admin_accounts: List[AdminAccount] = []
    for index, email in enumerate(emails):
        name = display_names[index] if index < len(display_names) else email.split("@")[0]
        admin_accounts.append(AdminAccount(email=email.lower(), password=passwords[index], name=name))

    allowed_origins = _split_csv(os.getenv("ALLOWED_ORIGINS"))
    if not allowed_origins:
        allowed_origins = ["*"]

    shop_name = (os.getenv("SHOP_NAME") or "").strip() or "Storefront"

    exports_dir = _resolve_path(os.getenv("EXPORTS_DIR", ""), "exports")
    export_ttl_hours = max(1, _as_int(os.getenv("EXPORT_TTL_HOURS"), 24))

    default_period = (os.getenv("ANALYTICS_DEFAULT_PERIOD") or DEFAULT_PERIOD).strip().lower()
    if default_period not in PRESET_PERIOD_MONTHS:
        raise RuntimeError(
            f"ANALYTICS_DEFAULT_PERIOD must be one of {', '.join(PRESET_PERIOD_MONTHS)}"
        )

    return Settings(
        env=env_value,
        is_development=is_development,
        backend_host=backend_host,
        backend_port=port,
        log_level=log_level,
        db_path=db_path,
        db_reset=db_reset,
        shop_name=shop_name,
        jwt_secret_key=jwt_secret,
        jwt_algorithm=jwt_algorithm,
        access_token_expire_days=access_days,
        admin_accounts=admin_accounts,
        allowed_origins=allowed_origins,
        exports_dir=exports_dir,
        export_ttl_hours=export_ttl_hours,
        analytics_default_period=default_period,
    )


__all__ = ["AdminAccount", "Settings", "get_settings"]
