"""Doll Collection Dashboard: Streamlit entrypoint."""

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from analytics.queries import get_conn
from db import get_status_changes

st.set_page_config(
    page_title="Doll Collection",
    page_icon="🎎",
    layout="wide",
)

# --- Sidebar ---
st.sidebar.title("Doll Collection")

# Last payment / arrival change
conn = get_conn()
changes = get_status_changes(conn, limit=1)
conn.close()
if changes:
    st.sidebar.caption(f"Last update: {changes[0].changed_at:%Y-%m-%d %H:%M}")

if st.sidebar.button("🔄 Refresh data"):
    st.cache_data.clear()
    st.rerun()

# --- Navigation ---
pages = [
    st.Page("pages/1_overview.py", title="Overview", icon="📊", default=True),
    st.Page("pages/2_payment_reminders.py", title="Payment reminders", icon="💰"),
]

pg = st.navigation(pages)
pg.run()
