"""SQLite record store for doll heads, doll bodies and wardrobe items."""

import logging
import sqlite3
from datetime import datetime
from typing import Optional

from config import COLLECTIONS, DB_PATH, PAYMENT_STATUSES, WARDROBE_CATEGORIES
from models import ExpenseStats, StatusChange
from payment.models import Collectible, CollectibleInput

logger = logging.getLogger(__name__)


def now_local() -> str:
    """Return current local time as a SQLite-friendly string."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


_ITEM_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    company TEXT,
    category TEXT,
    size_category TEXT,
    ownership_status TEXT DEFAULT 'owned',
    original_price REAL,
    actual_price REAL,
    purchase_channel TEXT,
    profile_image_url TEXT,
    sort_order INTEGER DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""

SCHEMA = "".join(_ITEM_TABLE.format(table=name) for name in COLLECTIONS) + """
CREATE TABLE IF NOT EXISTS status_changes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    collection TEXT NOT NULL,
    item_id INTEGER NOT NULL,
    change_type TEXT,
    old_value TEXT,
    new_value TEXT,
    changed_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""

# Columns added after the first release; applied on every start if missing.
_PAYMENT_COLUMNS = [
    ("total_price", "REAL"),
    ("deposit", "REAL"),
    ("final_payment", "REAL"),
    ("final_payment_date", "TEXT"),
    ("payment_status", "TEXT DEFAULT 'deposit_only'"),
]

_INSERT_FIELDS = [
    "name", "company", "category", "size_category", "ownership_status",
    "payment_status", "original_price", "actual_price", "total_price",
    "deposit", "final_payment", "final_payment_date", "purchase_channel",
    "profile_image_url", "sort_order",
]


def get_connection(db_path: str = DB_PATH) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db(db_path: str = DB_PATH):
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    for table in COLLECTIONS:
        _migrate_payment_columns(conn, table)
    conn.close()


def _migrate_payment_columns(conn: sqlite3.Connection, table: str):
    """Add payment columns to an existing item table if missing."""
    existing = {
        row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()
    }
    for col_name, col_type in _PAYMENT_COLUMNS:
        if col_name not in existing:
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {col_name} {col_type}")
            logger.info(f"Added column {table}.{col_name}")
    conn.commit()


def _table(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise ValueError(
            f"Unknown collection: {collection} (expected one of {', '.join(COLLECTIONS)})"
        )
    return COLLECTIONS[collection]["name"]


def _to_collectible(row: sqlite3.Row, collection: str) -> Collectible:
    return Collectible(
        id=row["id"],
        name=row["name"],
        collection=collection,
        category=row["category"],
        ownership_status=row["ownership_status"],
        payment_status=row["payment_status"],
        final_payment_date=row["final_payment_date"],
        final_payment=row["final_payment"],
        profile_image_url=row["profile_image_url"],
    )


def add_collectible(conn: sqlite3.Connection, collection: str, data: dict) -> int:
    """Validate and insert a collectible. Returns the database row id.

    Raises ValueError (pydantic ValidationError) on invalid input.
    """
    table = _table(collection)
    item = CollectibleInput(**data)
    if collection == "wardrobe_items" and item.category not in WARDROBE_CATEGORIES:
        raise ValueError(f"Unknown wardrobe category: {item.category}")

    values = item.model_dump()
    if item.final_payment_date is not None:
        values["final_payment_date"] = item.final_payment_date.isoformat()

    placeholders = ", ".join("?" for _ in _INSERT_FIELDS)
    cursor = conn.execute(
        f"INSERT INTO {table} ({', '.join(_INSERT_FIELDS)}) VALUES ({placeholders})",
        [values[f] for f in _INSERT_FIELDS],
    )
    return cursor.lastrowid


def get_collectible(
    conn: sqlite3.Connection, collection: str, item_id: int
) -> Optional[Collectible]:
    table = _table(collection)
    row = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (item_id,)).fetchone()
    return _to_collectible(row, collection) if row else None


def get_collectibles(
    conn: sqlite3.Connection, collection: str, category: Optional[str] = None
) -> list[Collectible]:
    table = _table(collection)
    query = f"SELECT * FROM {table}"
    params: list = []
    if category:
        query += " WHERE category = ?"
        params.append(category)
    query += " ORDER BY sort_order, id"
    rows = conn.execute(query, params).fetchall()
    return [_to_collectible(r, collection) for r in rows]


def get_all_collectibles(conn: sqlite3.Connection) -> list[Collectible]:
    """Every collectible across heads, bodies and wardrobe, in that order."""
    items = []
    for collection in COLLECTIONS:
        items.extend(get_collectibles(conn, collection))
    return items


def update_payment_status(
    conn: sqlite3.Connection, collection: str, item_id: int, payment_status: str
) -> bool:
    """Set payment_status on an item. Returns False if the item does not exist."""
    table = _table(collection)
    if payment_status not in PAYMENT_STATUSES:
        raise ValueError(
            f"payment_status must be one of: {', '.join(PAYMENT_STATUSES)}"
        )
    row = conn.execute(
        f"SELECT payment_status FROM {table} WHERE id = ?", (item_id,)
    ).fetchone()
    if not row:
        return False

    old_status = row["payment_status"] or "deposit_only"
    conn.execute(
        f"UPDATE {table} SET payment_status = ? WHERE id = ?",
        (payment_status, item_id),
    )
    if old_status != payment_status:
        log_status_change(conn, collection, item_id, "payment", old_status, payment_status)
    return True


def confirm_arrival(
    conn: sqlite3.Connection, collection: str, item_id: int, has_arrived: bool
) -> bool:
    """Mark an item as owned once it has arrived.

    Only has_arrived=True changes anything. Returns True if the item was
    switched to 'owned'.
    """
    table = _table(collection)
    if not has_arrived:
        logger.info(f"[{collection}] #{item_id} not arrived yet, status unchanged")
        return False

    row = conn.execute(
        f"SELECT ownership_status FROM {table} WHERE id = ?", (item_id,)
    ).fetchone()
    if not row:
        return False

    old_status = row["ownership_status"] or "owned"
    conn.execute(
        f"UPDATE {table} SET ownership_status = 'owned' WHERE id = ?", (item_id,)
    )
    if old_status != "owned":
        log_status_change(conn, collection, item_id, "arrival", old_status, "owned")
    return True


def log_status_change(
    conn: sqlite3.Connection, collection: str, item_id: int,
    change_type: str, old_value: str, new_value: str,
):
    conn.execute(
        """INSERT INTO status_changes
            (collection, item_id, change_type, old_value, new_value, changed_at)
        VALUES (?, ?, ?, ?, ?, ?)""",
        (collection, item_id, change_type, old_value, new_value, now_local()),
    )


def get_status_changes(conn: sqlite3.Connection, limit: int = 50) -> list[StatusChange]:
    rows = conn.execute(
        "SELECT * FROM status_changes ORDER BY id DESC LIMIT ?", (limit,)
    ).fetchall()
    return [
        StatusChange(
            collection=r["collection"],
            item_id=r["item_id"],
            change_type=r["change_type"],
            old_value=r["old_value"],
            new_value=r["new_value"],
            changed_at=datetime.strptime(r["changed_at"], "%Y-%m-%d %H:%M:%S"),
        )
        for r in rows
    ]


def _accumulate(stats: ExpenseStats, row: sqlite3.Row):
    ownership = row["ownership_status"] or "owned"
    stats.total_count += 1
    if ownership == "owned":
        stats.owned_count += 1
    else:
        stats.preorder_count += 1
        if (row["payment_status"] or "deposit_only") != "full_paid":
            stats.outstanding += row["final_payment"] or 0
    stats.total_amount += (
        row["total_price"] or row["actual_price"] or row["original_price"] or 0
    )
    stats.total_paid += row["deposit"] or 0
    stats.total_remaining += row["final_payment"] or 0


def get_expense_stats(conn: sqlite3.Connection) -> dict[str, ExpenseStats]:
    """Spend totals per collection, plus a 'total' entry across all of them."""
    result = {"total": ExpenseStats()}
    for collection in COLLECTIONS:
        stats = ExpenseStats()
        for row in conn.execute(f"SELECT * FROM {_table(collection)}").fetchall():
            _accumulate(stats, row)
            _accumulate(result["total"], row)
        result[collection] = stats
    return result
