import asyncio
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI

from config import get_settings
from database import init_database
from scheduler import daily_cleanup_task
from .context import logger


settings = get_settings()


async def run_startup_tasks() -> List[asyncio.Task]:
    init_database()
    if not settings.admin_accounts:
        logger.warning("No ADMIN_EMAIL configured; only existing admin profiles can sign in")

    tasks = [asyncio.create_task(daily_cleanup_task())]
    logger.info("%s admin backend started", settings.shop_name)
    return tasks


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    background_tasks: List[asyncio.Task] = []
    try:
        background_tasks = await run_startup_tasks()
        yield
    finally:
        for task in background_tasks:
            task.cancel()
        if background_tasks:
            await asyncio.gather(*background_tasks, return_exceptions=True)
