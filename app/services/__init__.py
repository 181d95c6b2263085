"""
app/services package marker.
"""

from app.services.aggregation_service import (
    aggregate_by_product,
    aggregate_by_region,
    describe_dataset,
    headline_metrics,
)
from app.services.data_generator import generate

__all__ = [
    "aggregate_by_product",
    "aggregate_by_region",
    "describe_dataset",
    "headline_metrics",
    "generate",
]
