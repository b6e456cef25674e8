# /backend/scheduler.py
import asyncio
import logging
import os
import time as time_module
from datetime import datetime, time, timedelta
from typing import Optional

from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

EXPORTS_DIR = str(settings.exports_dir)


def cleanup_expired_exports(base_dir: str = EXPORTS_DIR, ttl_hours: Optional[int] = None, now: Optional[float] = None) -> int:
    """Delete analytics workbooks older than the export TTL; returns how many were removed."""
    if not os.path.isdir(base_dir):
        return 0
    ttl_seconds = (ttl_hours if ttl_hours is not None else settings.export_ttl_hours) * 3600
    cutoff = (now if now is not None else time_module.time()) - ttl_seconds

    removed = 0
    for entry in os.scandir(base_dir):
        if not entry.is_file() or not entry.name.endswith(".xlsx"):
            continue
        try:
            if entry.stat().st_mtime <= cutoff:
                os.remove(entry.path)
                removed += 1
        except OSError as exc:
            logger.warning("Failed to remove expired export %s: %s", entry.name, exc)
    return removed


async def daily_cleanup_task():
    """Run export cleanup every day at 03:00."""
    while True:
        try:
            now = datetime.now()
            target_time = time(3, 0, 0)
            target_datetime = datetime.combine(now.date(), target_time)
            if now.time() > target_time:
                target_datetime += timedelta(days=1)

            wait_seconds = (target_datetime - now).total_seconds()
            logger.info(f"Next cleanup at {target_datetime}, waiting {wait_seconds:.0f}s")
            await asyncio.sleep(wait_seconds)

            removed_exports = cleanup_expired_exports()
            if removed_exports:
                logger.info(f"Removed {removed_exports} expired export files")
            else:
                logger.info("No expired export files to remove")

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Cleanup task failed: {e}")
            await asyncio.sleep(3600)


if __name__ == "__main__":
    asyncio.run(daily_cleanup_task())
