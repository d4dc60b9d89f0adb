#!/usr/bin/env python3
"""Main entry point for the doll collection payment tracker."""

import argparse
import logging
import sys
from datetime import date

from dotenv import load_dotenv
load_dotenv()

from config import BACKUP_DIR, COLLECTIONS, DB_PATH
from db import (
    confirm_arrival,
    get_all_collectibles,
    get_connection,
    get_expense_stats,
    init_db,
    update_payment_status,
)
from payment import arrival_eligible, build_reminder_queue, classify, reminder_status

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def show_reminders(db_path: str, today: date) -> list:
    """Log the final-payment reminder queue and return it."""
    conn = get_connection(db_path)
    items = get_all_collectibles(conn)
    conn.close()

    reminders = build_reminder_queue(items, today)
    if not reminders:
        logger.info("No outstanding final payments")
        return reminders

    logger.info(f"=== {len(reminders)} outstanding final payments ({today.isoformat()}) ===")
    for r in reminders:
        item = r.item
        text, _ = reminder_status(r)
        display = COLLECTIONS[item.collection]["display_name"]
        due = item.final_payment_date.isoformat() if item.final_payment_date else "-"
        amount = f"{item.final_payment:.2f}" if item.final_payment is not None else "?"
        badge = classify(item, today).label
        line = f"  [{display}] #{item.id} {item.name}: {text} (due {due}, {amount}) [{badge}]"
        if arrival_eligible(item, today):
            line += " - has it arrived?"
        logger.info(line)
    return reminders


def show_stats(db_path: str):
    conn = get_connection(db_path)
    stats = get_expense_stats(conn)
    conn.close()
    for key, s in stats.items():
        label = COLLECTIONS[key]["display_name"] if key in COLLECTIONS else "All"
        logger.info(
            f"{label}: {s.total_count} items ({s.owned_count} owned, "
            f"{s.preorder_count} preorder), spent {s.total_amount:.2f}, "
            f"deposits {s.total_paid:.2f}, remaining {s.total_remaining:.2f}, "
            f"outstanding {s.outstanding:.2f}"
        )


def _parse_target(value: str) -> tuple[str, int]:
    """Parse 'collection:id' command-line targets."""
    collection, sep, item_id = value.partition(":")
    if not sep or collection not in COLLECTIONS or not item_id.isdigit():
        raise argparse.ArgumentTypeError(
            f"expected COLLECTION:ID with COLLECTION in {', '.join(COLLECTIONS)}"
        )
    return collection, int(item_id)


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected YYYY-MM-DD")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Doll collection payment tracker")
    parser.add_argument("--db", default=DB_PATH, help="Path to the SQLite database")
    parser.add_argument(
        "--today", type=_parse_day, default=None, help="Evaluate as of this date (YYYY-MM-DD)"
    )
    parser.add_argument("--stats", action="store_true", help="Show spending statistics")
    parser.add_argument(
        "--mark-paid", type=_parse_target, metavar="COLLECTION:ID",
        help="Mark the final payment of an item as paid",
    )
    parser.add_argument(
        "--confirm-arrival", type=_parse_target, metavar="COLLECTION:ID",
        help="Mark a preordered item as arrived",
    )
    parser.add_argument("--backup", action="store_true", help="Create a manual backup and exit")
    parser.add_argument(
        "--schedule-backups", action="store_true", help="Run hourly backups until stopped"
    )
    parser.add_argument("--restore", metavar="FILE", help="Restore the database from a backup file")
    parser.add_argument("--backup-dir", default=BACKUP_DIR, help="Backup directory")
    args = parser.parse_args(argv)

    init_db(args.db)
    today = args.today or date.today()

    if args.restore:
        from backup import restore_backup
        return 0 if restore_backup(args.restore, args.db, args.backup_dir) else 1

    if args.backup:
        from backup import create_backup
        return 0 if create_backup(args.db, args.backup_dir, manual=True) else 1

    if args.schedule_backups:
        from scheduler import run_backup_scheduler
        run_backup_scheduler(args.db, args.backup_dir)
        return 0

    if args.mark_paid or args.confirm_arrival:
        conn = get_connection(args.db)
        ok = True
        if args.mark_paid:
            collection, item_id = args.mark_paid
            if update_payment_status(conn, collection, item_id, "full_paid"):
                logger.info(f"[{collection}] #{item_id} marked as paid in full")
            else:
                logger.error(f"[{collection}] #{item_id} not found")
                ok = False
        if args.confirm_arrival:
            collection, item_id = args.confirm_arrival
            if confirm_arrival(conn, collection, item_id, True):
                logger.info(f"[{collection}] #{item_id} confirmed as arrived")
            else:
                logger.error(f"[{collection}] #{item_id} not found")
                ok = False
        conn.commit()
        conn.close()
        return 0 if ok else 1

    if args.stats:
        show_stats(args.db)
        return 0

    show_reminders(args.db, today)
    return 0


if __name__ == "__main__":
    sys.exit(main())
