"""Streamlit dashboard for SiteNote sales analytics.

Replaceable UI layer: all display logic lives here. Data comes from the
service layer only; results are kept in session state through a
LatestRequestGuard so a slow, superseded fetch never overwrites a newer one.
"""

from __future__ import annotations

from typing import Any, Callable

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from app.config import get_sitenote_api_settings
from app.domain.flats_analytics import (
    FlatsAnalytics,
    OutstandingCashReport,
    ResolvedAnalytics,
    ResolvedOverview,
)
from app.services.project_names_service import with_project_names
from app.services.request_guard import LatestRequestGuard
from sales_analytics.charts import (
    inventory_rows,
    project_bar_rows,
    sold_unsold_distribution,
    status_distribution,
    type_bar_rows,
)
from sales_analytics.formatting import (
    format_compact_currency,
    format_count,
    format_currency,
    format_percentage,
)

st.set_page_config(
    page_title="SiteNote Analytics",
    page_icon="🏢",
    layout="wide",
    initial_sidebar_state="expanded",
)

PAGES = ("Flats analytics", "Team overview", "Outstanding cash")
FALLBACK_TEAM_ID = "2acd2ec8-5532-4710-bcc0-5c467b96b44a"


@st.cache_resource(show_spinner=False)
def _load_services() -> dict[str, Any]:
    """Build service singletons lazily to keep startup lightweight."""
    from app.services.flats_analytics_service import get_flats_analytics_resolver  # noqa: PLC0415
    from app.services.outstanding_cash_service import get_outstanding_cash_service  # noqa: PLC0415
    from app.services.project_names_service import get_project_name_service  # noqa: PLC0415
    from app.services.team_overview_service import get_team_overview_service  # noqa: PLC0415

    return {
        "resolver": get_flats_analytics_resolver(),
        "project_names": get_project_name_service(),
        "overview": get_team_overview_service(),
        "cash": get_outstanding_cash_service(),
    }


def _guard(page: str) -> LatestRequestGuard:
    key = f"guard::{page}"
    if key not in st.session_state:
        st.session_state[key] = LatestRequestGuard()
    return st.session_state[key]


def _load(page: str, team_id: str, refresh: bool, fetch: Callable[[str], Any]) -> Any:
    """
    Fetch when the team changes or a refresh is requested; otherwise reuse
    the last accepted result for this page.
    """
    guard = _guard(page)
    loaded_key = f"loaded_team::{page}"
    if refresh or st.session_state.get(loaded_key) != team_id or guard.current is None:
        token = guard.begin()
        with st.spinner("Loading analytics…"):
            result = fetch(team_id)
        if guard.accept(token, result):
            st.session_state[loaded_key] = team_id
    return guard.current


def _metric_row(cards: list[tuple[str, str, str]]) -> None:
    columns = st.columns(len(cards))
    for column, (label, value, caption) in zip(columns, cards):
        with column:
            st.metric(label, value)
            st.caption(caption)


# ── Flats analytics ────────────────────────────────────────────────────────


def _fetch_flats(team_id: str) -> ResolvedAnalytics:
    services = _load_services()
    return with_project_names(
        services["resolver"].resolve(team_id),
        services["project_names"],
        team_id,
    )


def _status_pie(report: FlatsAnalytics) -> go.Figure:
    data = pd.DataFrame(status_distribution(report))
    fig = px.pie(
        data,
        names="name",
        values="value",
        color="name",
        color_discrete_map=dict(zip(data["name"], data["color"])),
        hole=0.35,
    )
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(margin=dict(t=20, b=20, l=20, r=20), showlegend=True)
    return fig


def _stacked_status_bar(rows: list[dict[str, Any]]) -> go.Figure:
    fig = go.Figure()
    for key, label, color in (
        ("sold", "Sold", "#22c55e"),
        ("unsold", "Unsold", "#6b7280"),
        ("reserved", "Reserved", "#3b82f6"),
    ):
        fig.add_trace(
            go.Bar(
                x=[row["name"] for row in rows],
                y=[row[key] for row in rows],
                name=label,
                marker_color=color,
            )
        )
    fig.update_layout(barmode="stack", margin=dict(t=20, b=20, l=20, r=20))
    return fig


def render_flats_page(team_id: str, refresh: bool) -> None:
    resolved: ResolvedAnalytics | None = _load("flats", team_id, refresh, _fetch_flats)
    if resolved is None:
        st.info("No analytics loaded yet.")
        return

    report, outcome = resolved.report, resolved.outcome
    st.header("Flats Analytics")
    if outcome.warning:
        st.warning(outcome.warning)
    if outcome.reasons:
        with st.expander("Data source details"):
            for rejection in outcome.reasons:
                st.write(f"**{rejection.tier}** skipped: {rejection.reason}")

    _metric_row(
        [
            ("Total Flats", format_count(report.total_flats), "Across all projects"),
            ("Sold Flats", format_count(report.sold_flats), f"{format_percentage(report.sell_rate)} sell rate"),
            ("Total Revenue", format_compact_currency(report.total_revenue), "From sold flats"),
            ("Average Price", format_compact_currency(report.average_price), "Per flat"),
        ]
    )

    overview_tab, projects_tab, types_tab, inventory_tab = st.tabs(
        ["Overview", "Projects", "Flat Types", "Inventory"]
    )

    with overview_tab:
        st.subheader("Sales Distribution")
        st.plotly_chart(_status_pie(report), use_container_width=True)

    with projects_tab:
        rows = project_bar_rows(report)
        if not rows:
            st.info("No project breakdown available.")
        else:
            st.plotly_chart(_stacked_status_bar(rows), use_container_width=True)
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    with types_tab:
        rows = type_bar_rows(report)
        if not rows:
            st.info("No flat-type breakdown available for this data source.")
        else:
            st.plotly_chart(_stacked_status_bar(rows), use_container_width=True)
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    with inventory_tab:
        rows = inventory_rows(report)
        if not rows:
            st.info("No per-flat inventory available for this data source.")
        else:
            st.caption(f"Showing {len(rows)} of {format_count(len(report.flats))} flats")
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


# ── Team overview ──────────────────────────────────────────────────────────


def render_overview_page(team_id: str, refresh: bool) -> None:
    resolved: ResolvedOverview | None = _load(
        "overview", team_id, refresh, lambda tid: _load_services()["overview"].load(tid)
    )
    if resolved is None:
        st.info("No overview loaded yet.")
        return

    overview = resolved.overview
    st.header("Analytics Dashboard")
    st.caption(f"Comprehensive insights for Team {team_id}")
    if resolved.warning:
        st.warning(resolved.warning)

    _metric_row(
        [
            ("Total Flats", format_count(overview.total_flats), "Total inventory"),
            ("Sold Flats", format_count(overview.sold_flats), "Successfully sold"),
            ("Unsold Flats", format_count(overview.unsold_flats), "Available for sale"),
            ("Sold Percentage", overview.sold_percentage, "Sales performance"),
        ]
    )

    data = pd.DataFrame(sold_unsold_distribution(overview.sold_flats, overview.unsold_flats))
    fig = px.pie(
        data,
        names="name",
        values="value",
        color="name",
        color_discrete_map=dict(zip(data["name"], data["color"])),
    )
    st.plotly_chart(fig, use_container_width=True)

    if overview.projects:
        st.dataframe(
            pd.DataFrame([vars(row) for row in overview.projects]),
            use_container_width=True,
            hide_index=True,
        )


# ── Outstanding cash ───────────────────────────────────────────────────────


def _cash_comparison_chart(report: OutstandingCashReport) -> go.Figure:
    names = [row.project_name for row in report.rows]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=names, y=[row.outstanding for row in report.rows], name="Outstanding Cash", marker_color="#ef4444"))
    fig.add_trace(go.Bar(x=names, y=[row.received for row in report.rows], name="Received Cash", marker_color="#22c55e"))
    fig.update_layout(barmode="group", margin=dict(t=20, b=20, l=20, r=20))
    return fig


def _cash_stacked_chart(report: OutstandingCashReport) -> go.Figure:
    names = [row.project_name for row in report.stacked_rows]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=names, y=[row.received for row in report.stacked_rows], name="Received Cash", marker_color="#22c55e"))
    fig.add_trace(go.Bar(x=names, y=[row.remaining for row in report.stacked_rows], name="Outstanding Cash", marker_color="#ef4444"))
    fig.update_layout(barmode="stack", margin=dict(t=20, b=20, l=20, r=20))
    return fig


def render_cash_page(team_id: str, refresh: bool) -> None:
    report: OutstandingCashReport | None = _load(
        "cash", team_id, refresh, lambda tid: _load_services()["cash"].load(tid)
    )
    if report is None:
        st.info("No payment data loaded yet.")
        return

    st.header("Outstanding Cash Analytics")
    st.caption("Track and analyze outstanding payments across projects")
    for message in report.errors:
        st.error(message)

    if report.summary is not None:
        summary = report.summary
        _metric_row(
            [
                ("Total Outstanding Cash", format_currency(summary.total_outstanding), "Amount pending collection across all projects"),
                ("Total Received Cash", format_currency(summary.total_received), "Amount successfully collected from all projects"),
                ("Due Cash", format_currency(summary.due), f"{format_percentage(summary.due_percentage)} of total"),
            ]
        )

    if not report.rows:
        return

    st.subheader("Project-wise Outstanding Cash")
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Project Name": row.project_name,
                    "Outstanding Cash": format_currency(row.outstanding),
                    "Received Cash": format_currency(row.received),
                    "Completion": format_percentage(row.completion_rate),
                }
                for row in report.rows
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

    chart_type = st.radio("Chart", ["Comparison", "Stacked"], horizontal=True)
    if chart_type == "Comparison":
        st.plotly_chart(_cash_comparison_chart(report), use_container_width=True)
    else:
        st.plotly_chart(_cash_stacked_chart(report), use_container_width=True)


# ── Sidebar / routing ──────────────────────────────────────────────────────

with st.sidebar:
    st.title("SiteNote Analytics")
    st.caption("Real estate sales and payment insights")
    st.divider()

    default_team_id = get_sitenote_api_settings().default_team_id or FALLBACK_TEAM_ID
    team_id_input = st.text_input("Team ID", value=default_team_id, placeholder="Enter Team ID")
    page = st.radio("View", PAGES)
    refresh_clicked = st.button("Refresh", type="primary", use_container_width=True)

selected_team_id = team_id_input.strip()
if not selected_team_id:
    st.info("Enter a team ID in the sidebar to load analytics.")
elif page == PAGES[0]:
    render_flats_page(selected_team_id, refresh_clicked)
elif page == PAGES[1]:
    render_overview_page(selected_team_id, refresh_clicked)
else:
    render_cash_page(selected_team_id, refresh_clicked)
