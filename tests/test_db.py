import sqlite3
from datetime import date

import pytest

from db import (
    add_collectible,
    confirm_arrival,
    get_all_collectibles,
    get_collectible,
    get_collectibles,
    get_connection,
    get_expense_stats,
    get_status_changes,
    init_db,
    update_payment_status,
)


def _preorder(**kwargs):
    data = {
        "name": "Lumi head",
        "ownership_status": "preorder",
        "total_price": 1200,
        "deposit": 300,
        "final_payment": 900,
        "final_payment_date": "2025-07-01",
    }
    data.update(kwargs)
    return data


class TestInitDb:
    def test_migrates_old_tables(self, tmp_path):
        path = str(tmp_path / "old.db")
        conn = sqlite3.connect(path)
        conn.execute("CREATE TABLE doll_heads (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, "
                     "company TEXT, category TEXT, size_category TEXT, ownership_status TEXT DEFAULT 'owned', "
                     "original_price REAL, actual_price REAL, purchase_channel TEXT, profile_image_url TEXT, "
                     "sort_order INTEGER DEFAULT 0, created_at DATETIME DEFAULT CURRENT_TIMESTAMP)")
        conn.execute("INSERT INTO doll_heads (name, ownership_status) VALUES ('Old', 'preorder')")
        conn.commit()
        conn.close()

        init_db(path)
        init_db(path)  # idempotent

        conn = get_connection(path)
        columns = {r[1] for r in conn.execute("PRAGMA table_info(doll_heads)")}
        assert {"final_payment_date", "payment_status", "deposit"} <= columns
        item = get_collectible(conn, "doll_heads", 1)
        assert item.payment_status == "deposit_only"
        assert item.final_payment_date is None
        conn.close()


class TestAddCollectible:
    def test_roundtrip_to_engine_model(self, conn):
        item_id = add_collectible(conn, "doll_heads", _preorder())
        item = get_collectible(conn, "doll_heads", item_id)
        assert item.id == item_id
        assert item.collection == "doll_heads"
        assert item.ownership_status == "preorder"
        assert item.payment_status == "deposit_only"
        assert item.final_payment_date == date(2025, 7, 1)
        assert item.final_payment == 900

    def test_rejects_bad_enum(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "doll_heads", _preorder(ownership_status="wishlist"))

    def test_rejects_bad_date(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "doll_heads", _preorder(final_payment_date="2025/07/01"))
        with pytest.raises(ValueError):
            add_collectible(conn, "doll_heads", _preorder(final_payment_date="2025-02-30"))

    def test_rejects_negative_price(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "doll_bodies", _preorder(deposit=-1))

    def test_rejects_empty_name(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "doll_bodies", _preorder(name="  "))

    def test_wardrobe_needs_known_category(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "wardrobe_items", _preorder(category="shoes"))
        add_collectible(conn, "wardrobe_items", _preorder(category="wigs"))

    def test_unknown_collection(self, conn):
        with pytest.raises(ValueError):
            add_collectible(conn, "makeup_artists", _preorder())


class TestQueries:
    def test_filters_and_ordering(self, conn):
        add_collectible(conn, "wardrobe_items", _preorder(name="B", category="eyes", sort_order=2))
        add_collectible(conn, "wardrobe_items", _preorder(name="A", category="eyes", sort_order=1))
        add_collectible(conn, "wardrobe_items", _preorder(name="C", category="wigs"))
        assert [i.name for i in get_collectibles(conn, "wardrobe_items", "eyes")] == ["A", "B"]
        assert len(get_collectibles(conn, "wardrobe_items")) == 3

    def test_all_collections(self, conn):
        add_collectible(conn, "doll_heads", _preorder(name="head"))
        add_collectible(conn, "doll_bodies", _preorder(name="body"))
        add_collectible(conn, "wardrobe_items", _preorder(name="wig", category="wigs"))
        items = get_all_collectibles(conn)
        assert [(i.collection, i.name) for i in items] == [
            ("doll_heads", "head"), ("doll_bodies", "body"), ("wardrobe_items", "wig"),
        ]

    def test_missing_item(self, conn):
        assert get_collectible(conn, "doll_heads", 999) is None

    def test_broken_stored_date_reads_as_absent(self, conn):
        item_id = add_collectible(conn, "doll_heads", _preorder())
        conn.execute("UPDATE doll_heads SET final_payment_date = 'next month' WHERE id = ?", (item_id,))
        assert get_collectible(conn, "doll_heads", item_id).final_payment_date is None


class TestTransitions:
    def test_mark_paid(self, conn):
        item_id = add_collectible(conn, "doll_bodies", _preorder())
        assert update_payment_status(conn, "doll_bodies", item_id, "full_paid") is True
        assert get_collectible(conn, "doll_bodies", item_id).payment_status == "full_paid"
        change = get_status_changes(conn)[0]
        assert (change.collection, change.item_id, change.change_type) == ("doll_bodies", item_id, "payment")
        assert (change.old_value, change.new_value) == ("deposit_only", "full_paid")

    def test_mark_paid_missing_item(self, conn):
        assert update_payment_status(conn, "doll_bodies", 42, "full_paid") is False

    def test_mark_paid_bad_status(self, conn):
        item_id = add_collectible(conn, "doll_bodies", _preorder())
        with pytest.raises(ValueError):
            update_payment_status(conn, "doll_bodies", item_id, "half_paid")

    def test_confirm_arrival(self, conn):
        item_id = add_collectible(conn, "doll_heads", _preorder(payment_status="full_paid"))
        assert confirm_arrival(conn, "doll_heads", item_id, True) is True
        assert get_collectible(conn, "doll_heads", item_id).ownership_status == "owned"
        assert get_status_changes(conn)[0].change_type == "arrival"

    def test_not_arrived_changes_nothing(self, conn):
        item_id = add_collectible(conn, "doll_heads", _preorder())
        assert confirm_arrival(conn, "doll_heads", item_id, False) is False
        assert get_collectible(conn, "doll_heads", item_id).ownership_status == "preorder"
        assert get_status_changes(conn) == []

    def test_confirm_arrival_missing_item(self, conn):
        assert confirm_arrival(conn, "wardrobe_items", 7, True) is False


class TestExpenseStats:
    def test_totals(self, conn):
        add_collectible(conn, "doll_heads", _preorder())
        add_collectible(conn, "doll_heads", _preorder(payment_status="full_paid", final_payment=100))
        add_collectible(conn, "doll_bodies", {"name": "Body", "actual_price": 800})
        stats = get_expense_stats(conn)

        heads = stats["doll_heads"]
        assert (heads.total_count, heads.owned_count, heads.preorder_count) == (2, 0, 2)
        assert heads.total_amount == 2400
        assert heads.total_paid == 600
        assert heads.total_remaining == 1000
        assert heads.outstanding == 900

        total = stats["total"]
        assert total.total_count == 3
        assert total.owned_count == 1
        assert total.total_amount == 3200
        assert stats["wardrobe_items"].total_count == 0
