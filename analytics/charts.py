"""Reusable Plotly chart builders for the dashboard."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd

# Consistent color palette
COLLECTION_COLORS = {
    "Doll head": "#FF6B6B",
    "Doll body": "#4ECDC4",
    "Wardrobe": "#45B7D1",
}

STATUS_COLORS = {
    "owned": "#2ECC71",
    "preorder": "#3498DB",
}

REMINDER_COLORS = {
    "overdue": "#E74C3C",
    "grace": "#E67E22",
    "due_today": "#F1C40F",
    "imminent": "#F39C12",
    "no_date": "#95A5A6",
    "future": "#2ECC71",
}

LAYOUT_DEFAULTS = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(family="sans-serif"),
    margin=dict(l=20, r=20, t=40, b=20),
)


def ownership_pie_chart(df: pd.DataFrame) -> go.Figure:
    fig = px.pie(
        df,
        values="count",
        names="status",
        color="status",
        color_discrete_map=STATUS_COLORS,
        hole=0.4,
    )
    fig.update_layout(title="Owned vs preorder", **LAYOUT_DEFAULTS)
    return fig


def outstanding_by_collection_bar(df: pd.DataFrame) -> go.Figure:
    """Deposits paid vs final payments still owed, per collection."""
    melted = df.melt(
        id_vars="display_name",
        value_vars=["total_paid", "outstanding"],
        var_name="kind",
        value_name="amount",
    )
    melted["kind"] = melted["kind"].map({"total_paid": "Deposits paid", "outstanding": "Still owed"})
    fig = px.bar(
        melted,
        x="display_name",
        y="amount",
        color="kind",
        barmode="group",
        color_discrete_map={"Deposits paid": "#2ECC71", "Still owed": "#E74C3C"},
    )
    fig.update_layout(
        title="Payments by collection",
        xaxis_title="",
        yaxis_title="Amount (¥)",
        **LAYOUT_DEFAULTS,
    )
    return fig


def reminder_group_bar(df: pd.DataFrame) -> go.Figure:
    counts = df["group"].value_counts().reindex(list(REMINDER_COLORS), fill_value=0).reset_index()
    counts.columns = ["group", "count"]
    fig = px.bar(
        counts,
        x="group",
        y="count",
        color="group",
        color_discrete_map=REMINDER_COLORS,
    )
    fig.update_layout(
        title="Reminders by urgency",
        showlegend=False,
        xaxis_title="",
        yaxis_title="Items",
        **LAYOUT_DEFAULTS,
    )
    return fig
