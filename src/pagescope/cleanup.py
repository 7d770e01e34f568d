"""Cleanup stale scratch directories left behind by interrupted runs."""

import logging
import shutil
from datetime import datetime, timedelta

from .config import Settings

logger = logging.getLogger(__name__)


def run_cleanup(settings: Settings) -> int:
    """Remove scratch run directories older than the retention period.

    Returns number of directories removed.
    """
    scratch = settings.paths.scratch
    retention_hours = settings.cleanup.retention_hours
    cutoff = datetime.now() - timedelta(hours=retention_hours)

    if not scratch.exists():
        logger.warning(f"Scratch directory not found: {scratch}")
        return 0

    removed = 0
    for path in scratch.iterdir():
        if not path.is_dir():
            continue

        mtime = datetime.fromtimestamp(path.stat().st_mtime)
        if mtime < cutoff:
            logger.info(f"Removing stale scratch directory: {path.name}")
            shutil.rmtree(path)
            removed += 1

    logger.info(f"Cleanup complete: {removed} directories removed from scratch")
    return removed
