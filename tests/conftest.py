from datetime import date, timedelta

import pytest

from db import get_connection, init_db
from payment import Collectible

TODAY = date(2025, 6, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_item():
    """Build a Collectible due `offset` days from TODAY (None = no date)."""

    def _make(offset=None, ownership="preorder", payment="deposit_only", **kwargs):
        due = TODAY + timedelta(days=offset) if offset is not None else None
        return Collectible(
            ownership_status=ownership,
            payment_status=payment,
            final_payment_date=due,
            **kwargs,
        )

    return _make


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "collection.db")
    init_db(path)
    return path


@pytest.fixture
def conn(db_path):
    conn = get_connection(db_path)
    yield conn
    conn.close()
