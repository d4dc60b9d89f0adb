"""Final-payment reminder queue page."""

from datetime import date

import streamlit as st

from analytics.charts import reminder_group_bar
from analytics.queries import get_reminder_frame

st.header("Payment reminders")

today = st.date_input("As of", value=date.today())
df = get_reminder_frame(today)

if df.empty:
    st.info("No outstanding final payments.")
    st.stop()

# --- Metrics ---
c1, c2, c3, c4 = st.columns(4)
c1.metric("Outstanding", f"{len(df):,}")
c2.metric("Overdue", int((df["group"] == "overdue").sum()))
c3.metric("In grace period", int((df["group"] == "grace").sum()))
c4.metric("Still owed", f"¥{df['final_payment'].fillna(0).sum():,.2f}")

st.divider()

col_left, col_right = st.columns([2, 1])

with col_left:
    collections = st.multiselect(
        "Collection", options=sorted(df["collection"].unique()), default=None
    )
    filtered = df[df["collection"].isin(collections)] if collections else df

    st.dataframe(
        filtered[["collection", "name", "status", "badge", "countdown",
                  "final_payment_date", "final_payment", "ask_arrival"]],
        use_container_width=True,
        column_config={
            "collection": st.column_config.TextColumn("Type"),
            "name": st.column_config.TextColumn("Name"),
            "status": st.column_config.TextColumn("Status"),
            "badge": st.column_config.TextColumn("Badge"),
            "countdown": st.column_config.TextColumn("Countdown"),
            "final_payment_date": st.column_config.DateColumn("Due"),
            "final_payment": st.column_config.NumberColumn("Final payment", format="¥%.2f"),
            "ask_arrival": st.column_config.CheckboxColumn("Arrived?"),
        },
        hide_index=True,
    )

with col_right:
    st.plotly_chart(reminder_group_bar(df), use_container_width=True)
