import logging
from typing import List, Tuple

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings


settings = get_settings()

# Logging configuration
log_level = settings.log_level.upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

auth_logger = logging.getLogger("auth")
auth_logger.setLevel(getattr(logging, log_level, logging.INFO))

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = settings.allowed_origins
ALLOW_ALL_ORIGINS = "*" in ALLOWED_ORIGINS

EXPORTS_DIR = str(settings.exports_dir)
settings.exports_dir.mkdir(parents=True, exist_ok=True)


def _cors_config() -> Tuple[List[str], bool]:
    allow_origins = ["*"] if ALLOW_ALL_ORIGINS else ALLOWED_ORIGINS
    allow_credentials = not ALLOW_ALL_ORIGINS
    if ALLOW_ALL_ORIGINS and not allow_credentials:
        logger.warning("Wildcard CORS origin configured; credential sharing disabled.")
    return allow_origins, allow_credentials


def apply_cors(app: FastAPI) -> Tuple[List[str], bool]:
    allow_origins, allow_credentials = _cors_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "Content-Length", "Content-Type"],
    )
    return allow_origins, allow_credentials


def create_app(*, lifespan=None) -> FastAPI:
    app = FastAPI(
        title=f"{settings.shop_name} Admin API",
        description="Back-office API for the storefront admin dashboard and profit analytics",
        version="1.0.0",
        lifespan=lifespan,
    )
    apply_cors(app)
    return app
