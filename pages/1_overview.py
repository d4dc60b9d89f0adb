"""Overview / spending summary page."""

import streamlit as st

from analytics.charts import outstanding_by_collection_bar, ownership_pie_chart
from analytics.queries import get_ownership_breakdown, get_stats_frame

st.header("Overview")

stats = get_stats_frame()
total = stats[stats["collection"] == "total"].iloc[0]

c1, c2, c3, c4 = st.columns(4)
c1.metric("Items", f"{int(total['total_count']):,}")
c2.metric("Owned", f"{int(total['owned_count']):,}")
c3.metric("Preorder", f"{int(total['preorder_count']):,}")
c4.metric("Still owed", f"¥{total['outstanding']:,.2f}")

st.divider()

col_left, col_right = st.columns(2)

with col_left:
    status_df = get_ownership_breakdown()
    if not status_df.empty:
        st.plotly_chart(ownership_pie_chart(status_df), use_container_width=True)
    else:
        st.info("No items yet.")

with col_right:
    per_collection = stats[stats["collection"] != "total"]
    if per_collection["total_count"].sum() > 0:
        st.plotly_chart(outstanding_by_collection_bar(per_collection), use_container_width=True)
    else:
        st.info("No payment data yet.")

st.divider()

st.subheader("Spending by collection")
st.dataframe(
    stats[["display_name", "total_count", "owned_count", "preorder_count",
           "total_amount", "total_paid", "total_remaining", "outstanding"]],
    use_container_width=True,
    column_config={
        "display_name": st.column_config.TextColumn("Collection"),
        "total_count": st.column_config.NumberColumn("Items"),
        "owned_count": st.column_config.NumberColumn("Owned"),
        "preorder_count": st.column_config.NumberColumn("Preorder"),
        "total_amount": st.column_config.NumberColumn("Spent", format="¥%.2f"),
        "total_paid": st.column_config.NumberColumn("Deposits", format="¥%.2f"),
        "total_remaining": st.column_config.NumberColumn("Final payments", format="¥%.2f"),
        "outstanding": st.column_config.NumberColumn("Still owed", format="¥%.2f"),
    },
    hide_index=True,
)
