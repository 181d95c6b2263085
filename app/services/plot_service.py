"""
app/services/plot_service.py

Static sales trend chart for the batch run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # non-interactive backend for saving PNGs
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from statsmodels.nonparametric.smoothers_lowess import lowess  # noqa: E402

logger = logging.getLogger(__name__)

FIGSIZE = (12, 8)
DPI = 300

LINE_COLOR = "#2E86AB"
SMOOTH_COLOR = "#A23B72"
BAND_COLOR = "#F18F01"


def render_sales_trend(frame: pd.DataFrame, path: Path, smoothing: float = 0.75) -> Path:
    """
    Plot daily sales with a LOWESS trend and save a 12x8in, 300 DPI PNG.

    Raises:
        OSError: If the image cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    dates = pd.to_datetime(frame["date"])
    sales = frame["sales"].astype(float)
    ordinal = dates.map(pd.Timestamp.toordinal).to_numpy(dtype=float)
    smoothed = lowess(sales.to_numpy(), ordinal, frac=smoothing, return_sorted=False)
    spread = float((sales - smoothed).std())

    fig, ax = plt.subplots(figsize=FIGSIZE)
    try:
        ax.plot(dates, sales, color=LINE_COLOR, linewidth=1, label="Daily sales")
        ax.fill_between(dates, smoothed - spread, smoothed + spread, color=BAND_COLOR, alpha=0.3)
        ax.plot(dates, smoothed, color=SMOOTH_COLOR, linewidth=2, label="LOWESS trend")
        ax.set_title("Sales Trend Analysis", fontsize=16, fontweight="bold")
        ax.set_xlabel("Date")
        ax.set_ylabel("Sales ($)")
        ax.legend(loc="upper right")
        ax.grid(alpha=0.3)
        fig.text(0.5, 0.01, "Daily sales performance over time", ha="center", color="gray")
        fig.savefig(path, dpi=DPI)
    finally:
        plt.close(fig)

    logger.info("Sales trend plot saved to %s", path)
    return path
