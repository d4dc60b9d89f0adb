"""APScheduler wrapper for periodic database backups."""

import logging
import signal
import sys

from apscheduler.schedulers.blocking import BlockingScheduler

from config import BACKUP_INTERVAL_MINUTES

logger = logging.getLogger(__name__)


def _backup_job(db_path: str, backup_dir: str):
    """Job function called by scheduler."""
    from backup import create_backup
    try:
        path = create_backup(db_path, backup_dir)
        if path is None:
            logger.warning("=== Scheduled backup produced no file ===")
    except Exception as e:
        logger.error(f"Scheduled backup failed: {e}")


def build_scheduler(db_path: str, backup_dir: str) -> BlockingScheduler:
    scheduler = BlockingScheduler()
    scheduler.add_job(
        _backup_job,
        "interval",
        minutes=BACKUP_INTERVAL_MINUTES,
        args=[db_path, backup_dir],
        id="auto_backup",
        name="Auto Backup",
    )
    return scheduler


def run_backup_scheduler(db_path: str, backup_dir: str):
    """Start the blocking backup scheduler."""
    scheduler = build_scheduler(db_path, backup_dir)

    def shutdown(signum, frame):
        logger.info("Shutting down scheduler...")
        scheduler.shutdown(wait=False)
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    logger.info(
        f"Scheduler started. Backing up every {BACKUP_INTERVAL_MINUTES} minutes. "
        "Press Ctrl+C to stop."
    )
    # Back up immediately on start, then schedule
    _backup_job(db_path, backup_dir)
    scheduler.start()
