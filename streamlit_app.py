"""Streamlit dashboard for the synthetic sales dataset.

Run: streamlit run streamlit_app.py

Each browser connection gets its own DashboardSession in
``st.session_state``; the dataset is generated once per session and every
rerun only re-derives the views from it.
"""

from __future__ import annotations

import io

import streamlit as st

from app.config import get_pipeline_settings
from app.logging_utils import configure_logging
from dashboard.session import DashboardSession
from dashboard.views import VIEW_BUILDERS

# ── Page config (must be first Streamlit call) ─────────────────────────────
st.set_page_config(
    page_title="Sales Analytics Dashboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource(show_spinner=False)
def _initialize() -> int:
    """Process-wide setup, run once per server process. Returns the default seed."""
    settings = get_pipeline_settings()
    configure_logging(settings.log_level)
    return settings.seed


def _new_session(seed: int) -> DashboardSession:
    session = DashboardSession(seed=seed)
    for name, builder in VIEW_BUILDERS.items():
        session.subscribe(name, builder)
    return session


default_seed = _initialize()

# ── Session state defaults ─────────────────────────────────────────────────
if "dashboard_session" not in st.session_state:
    st.session_state.dashboard_session = _new_session(default_seed)

session: DashboardSession = st.session_state.dashboard_session


with st.sidebar:
    st.title("📊 Sales Analytics")
    st.caption("Synthetic daily sales, 2023")
    st.divider()
    page = st.radio(
        "View",
        options=["Dashboard", "Data Explorer", "Visualizations", "Statistics", "About"],
    )
    st.divider()
    seed = st.number_input("Seed", min_value=0, value=int(session.seed), step=1)
    if st.button("Restart session", use_container_width=True):
        session.restart(seed=int(seed))
    st.caption(f"Datasets generated this session: {session.generation_count}")


views = session.refresh()

if page == "Dashboard":
    st.header("Dashboard")
    boxes = views["value_boxes"]
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Sales", boxes["total_sales"])
    col2.metric("Avg Customers/Day", boxes["avg_customers"])
    col3.metric("Total Records", boxes["total_records"])

    st.plotly_chart(views["sales_trend"], use_container_width=True)
    left, right = st.columns(2)
    with left:
        st.plotly_chart(views["region_pie"], use_container_width=True)
    with right:
        st.plotly_chart(views["product_bar"], use_container_width=True)

elif page == "Data Explorer":
    st.header("Data Explorer")
    table = views["data_table"]
    st.dataframe(table, use_container_width=True, height=600)

    csv_buffer = io.StringIO()
    table.to_csv(csv_buffer, index=False)
    st.download_button(
        label="Download CSV",
        data=csv_buffer.getvalue().encode("utf-8"),
        file_name=f"sales_{session.seed}.csv",
        mime="text/csv",
    )

elif page == "Visualizations":
    st.header("Visualizations")
    left, right = st.columns(2)
    with left:
        st.plotly_chart(views["sales_distribution"], use_container_width=True)
    with right:
        st.plotly_chart(views["customer_distribution"], use_container_width=True)

elif page == "Statistics":
    st.header("Statistics")
    st.plotly_chart(views["correlation_heatmap"], use_container_width=True)
    st.subheader("Hypothesis tests")
    st.dataframe(views["hypothesis_tests"], use_container_width=True)

else:
    st.header("About This Dashboard")
    st.markdown(
        "Interactive exploration of one simulated year of daily sales.\n\n"
        "- Interactive plotly charts\n"
        "- Data explorer with CSV export\n"
        "- Correlation and hypothesis-test summaries\n\n"
        "The batch report and trend plot are produced by `python -m app.main`."
    )
