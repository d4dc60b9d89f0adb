"""SQLite backups of the collection database."""

import logging
import re
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from config import BACKUP_DIR, DB_PATH, MAX_BACKUPS

logger = logging.getLogger(__name__)

_BACKUP_NAME_RE = re.compile(
    r"^backup_(?:auto|manual)_(\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{6})\.db$"
)


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")


def _copy_database(source: Path, target: Path) -> bool:
    """Copy one SQLite file onto another with the backup API."""
    src = sqlite3.connect(source)
    dst = sqlite3.connect(target)
    try:
        src.backup(dst)
        return True
    except sqlite3.Error as e:
        logger.error(f"Copy {source.name} -> {target.name} failed: {e}")
        return False
    finally:
        src.close()
        dst.close()


def create_backup(
    db_path: str = DB_PATH,
    backup_dir: str = BACKUP_DIR,
    manual: bool = False,
    max_backups: int = MAX_BACKUPS,
) -> Optional[Path]:
    """Copy the database into backup_dir. Returns the backup path, or None on failure."""
    source = Path(db_path)
    if not source.exists():
        logger.error(f"Source database not found: {source}")
        return None

    target_dir = Path(backup_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    kind = "manual" if manual else "auto"
    target = target_dir / f"backup_{kind}_{_timestamp()}.db"

    if not _copy_database(source, target):
        target.unlink(missing_ok=True)
        return None

    heads = verify_backup(target)
    if heads is None:
        target.unlink(missing_ok=True)
        return None

    size_kb = target.stat().st_size / 1024
    logger.info(f"Backup written: {target.name} ({size_kb:.2f} KB, {heads} doll heads)")
    clean_old_backups(target_dir, max_backups)
    return target


def verify_backup(backup_path) -> Optional[int]:
    """Open a backup read-only and count its doll heads. None if unreadable."""
    backup_path = Path(backup_path)
    try:
        conn = sqlite3.connect(f"file:{backup_path}?mode=ro", uri=True)
        try:
            return conn.execute("SELECT COUNT(*) FROM doll_heads").fetchone()[0]
        finally:
            conn.close()
    except sqlite3.Error as e:
        logger.error(f"Backup verification failed for {backup_path.name}: {e}")
        return None


def restore_backup(
    backup_path, db_path: str = DB_PATH, backup_dir: str = BACKUP_DIR
) -> bool:
    """Replace the database with a backup.

    The current database is first saved as before_restore_<timestamp>.db in
    backup_dir. Unverifiable backups are refused and leave the database
    untouched.
    """
    backup_path = Path(backup_path)
    if not backup_path.exists():
        logger.error(f"Backup not found: {backup_path}")
        return False
    heads = verify_backup(backup_path)
    if heads is None:
        logger.error(f"Refusing to restore unverifiable backup: {backup_path.name}")
        return False

    target = Path(db_path)
    if target.exists():
        snapshot_dir = Path(backup_dir)
        snapshot_dir.mkdir(parents=True, exist_ok=True)
        snapshot = snapshot_dir / f"before_restore_{_timestamp()}.db"
        if not _copy_database(target, snapshot):
            snapshot.unlink(missing_ok=True)
            return False
        logger.info(f"Current database saved as {snapshot.name}")

    if not _copy_database(backup_path, target):
        return False

    restored = verify_backup(target)
    if restored != heads:
        logger.error(f"Restore check failed: expected {heads} doll heads, found {restored}")
        return False
    logger.info(f"Restored {backup_path.name} ({restored} doll heads)")
    return True


def list_backups(backup_dir: str = BACKUP_DIR) -> list[Path]:
    """Backup files, newest first. Files not named like a backup are ignored."""
    target_dir = Path(backup_dir)
    if not target_dir.exists():
        return []
    stamped = []
    for path in target_dir.glob("backup_*.db"):
        match = _BACKUP_NAME_RE.match(path.name)
        if match:
            stamped.append((match.group(1), path))
    stamped.sort(key=lambda t: t[0], reverse=True)
    return [path for _, path in stamped]


def clean_old_backups(backup_dir, max_backups: int = MAX_BACKUPS) -> int:
    """Delete all but the newest max_backups files. Returns how many were removed."""
    stale = list_backups(str(backup_dir))[max_backups:]
    for path in stale:
        path.unlink()
        logger.info(f"Removed old backup: {path.name}")
    return len(stale)
