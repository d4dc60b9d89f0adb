"""Cached SQL queries for the collection dashboard."""

import sqlite3
from datetime import date

import pandas as pd
import streamlit as st

from config import COLLECTIONS, DB_PATH
from db import get_all_collectibles, get_connection, get_expense_stats, init_db
from payment import (
    arrival_eligible,
    build_reminder_queue,
    classify,
    countdown,
    reminder_status,
)


def get_conn() -> sqlite3.Connection:
    init_db(DB_PATH)
    return get_connection(DB_PATH)


# --- Overview ---


@st.cache_data(ttl=300)
def get_stats_frame() -> pd.DataFrame:
    """Expense stats, one row per collection plus 'total'."""
    conn = get_conn()
    stats = get_expense_stats(conn)
    conn.close()
    df = pd.DataFrame([{"collection": k, **v.to_dict()} for k, v in stats.items()])
    df["display_name"] = df["collection"].map(
        lambda c: COLLECTIONS[c]["display_name"] if c in COLLECTIONS else "All"
    )
    return df


@st.cache_data(ttl=300)
def get_ownership_breakdown() -> pd.DataFrame:
    """Item count per ownership status, across all collections."""
    conn = get_conn()
    parts = [
        pd.read_sql_query(
            f"SELECT COALESCE(ownership_status, 'owned') as status, COUNT(*) as count "
            f"FROM {name} GROUP BY status",
            conn,
        )
        for name in COLLECTIONS
    ]
    conn.close()
    df = pd.concat(parts, ignore_index=True)
    if df.empty:
        return df
    return df.groupby("status", as_index=False)["count"].sum()


# --- Payment reminders ---


@st.cache_data(ttl=300)
def get_reminder_frame(today: date) -> pd.DataFrame:
    """The ordered reminder queue as a table, with badges and countdowns."""
    conn = get_conn()
    items = get_all_collectibles(conn)
    conn.close()

    rows = []
    for r in build_reminder_queue(items, today):
        item = r.item
        status_text, status_class = reminder_status(r)
        cd = countdown(item, today)
        rows.append({
            "collection": COLLECTIONS[item.collection]["display_name"],
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "final_payment_date": item.final_payment_date,
            "final_payment": item.final_payment,
            "days_remaining": r.days_remaining,
            "group": r.group.name.lower(),
            "status": status_text,
            "status_class": status_class,
            "badge": classify(item, today).label,
            "countdown": cd.text if cd else None,
            "ask_arrival": arrival_eligible(item, today),
            "image_url": item.profile_image_url,
        })
    return pd.DataFrame(rows)
