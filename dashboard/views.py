"""
dashboard/views.py

View builders for the dashboard. Each takes the session dataset and
returns a plotly figure, a DataFrame or a plain dict; nothing here
touches Streamlit.
"""

from __future__ import annotations

from typing import Any

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from analysis.correlation import correlate
from analysis.hypothesis import run_hypothesis_tests
from app.domain.sales import SalesDataset
from app.services.aggregation_service import (
    aggregate_by_product,
    aggregate_by_region,
    headline_metrics,
)

TREND_COLOR = "#2E86AB"
PRODUCT_COLOR = "#A23B72"
SALES_HIST_COLOR = "#F18F01"
CUSTOMER_HIST_COLOR = "#C73E1D"


def value_boxes(dataset: SalesDataset) -> dict[str, Any]:
    metrics = headline_metrics(dataset.frame)
    return {
        "total_sales": f"${metrics['total_sales']:,.2f}",
        "avg_customers": f"{metrics['avg_customers']:.1f}",
        "total_records": f"{metrics['total_records']:,}",
    }


def sales_trend_figure(dataset: SalesDataset) -> go.Figure:
    fig = px.line(
        dataset.frame,
        x="date",
        y="sales",
        title="Sales Trend Over Time",
        color_discrete_sequence=[TREND_COLOR],
    )
    fig.update_layout(
        height=350,
        xaxis_title="Date",
        yaxis_title="Sales ($)",
        hovermode="x unified",
    )
    return fig


def region_pie_figure(dataset: SalesDataset) -> go.Figure:
    summary = pd.DataFrame(
        [{"region": item.region, "total_sales": item.total_sales} for item in aggregate_by_region(dataset.frame)]
    )
    fig = px.pie(summary, names="region", values="total_sales", title="Sales by Region")
    fig.update_layout(height=300)
    return fig


def product_bar_figure(dataset: SalesDataset) -> go.Figure:
    summary = pd.DataFrame(
        [{"product": item.product, "total_sales": item.total_sales} for item in aggregate_by_product(dataset.frame)]
    )
    fig = px.bar(
        summary,
        x="product",
        y="total_sales",
        title="Sales by Product",
        color_discrete_sequence=[PRODUCT_COLOR],
    )
    fig.update_layout(
        height=300,
        xaxis_title="Product",
        yaxis_title="Total Sales ($)",
        yaxis_tickformat="$,.0f",
    )
    return fig


def _histogram(frame: pd.DataFrame, column: str, title: str, axis_title: str, color: str) -> go.Figure:
    fig = px.histogram(frame, x=column, title=title, color_discrete_sequence=[color])
    fig.update_layout(height=350, xaxis_title=axis_title, yaxis_title="Frequency")
    return fig


def sales_distribution_figure(dataset: SalesDataset) -> go.Figure:
    return _histogram(dataset.frame, "sales", "Sales Distribution", "Sales ($)", SALES_HIST_COLOR)


def customer_distribution_figure(dataset: SalesDataset) -> go.Figure:
    return _histogram(
        dataset.frame, "customers", "Customer Distribution", "Customers", CUSTOMER_HIST_COLOR
    )


def correlation_heatmap_figure(dataset: SalesDataset) -> go.Figure:
    result = correlate(dataset.frame)
    matrix = pd.DataFrame(result.values, index=result.field_names, columns=result.field_names)
    fig = px.imshow(
        matrix,
        text_auto=".2f",
        zmin=-1.0,
        zmax=1.0,
        color_continuous_scale="RdBu_r",
        title="Correlation Matrix",
    )
    fig.update_layout(height=350)
    return fig


def hypothesis_table(dataset: SalesDataset) -> pd.DataFrame:
    suite = run_hypothesis_tests(dataset.frame, random_state=dataset.seed)
    outcomes = [
        *suite.normality.values(),
        suite.anova_region,
        suite.anova_product,
        suite.two_sample,
    ]
    return pd.DataFrame(
        [
            {
                "test": outcome.name,
                "statistic": round(outcome.statistic, 4),
                "p_value": outcome.p_value,
            }
            for outcome in outcomes
            if outcome is not None
        ]
    )


def data_table(dataset: SalesDataset) -> pd.DataFrame:
    """Newest records first."""
    frame = dataset.frame
    frame["date"] = frame["date"].dt.date
    return frame.sort_values("date", ascending=False).reset_index(drop=True)


VIEW_BUILDERS = {
    "value_boxes": value_boxes,
    "sales_trend": sales_trend_figure,
    "region_pie": region_pie_figure,
    "product_bar": product_bar_figure,
    "sales_distribution": sales_distribution_figure,
    "customer_distribution": customer_distribution_figure,
    "correlation_heatmap": correlation_heatmap_figure,
    "hypothesis_tests": hypothesis_table,
    "data_table": data_table,
}
