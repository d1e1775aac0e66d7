"""
sales_analytics/synthetic.py

Seedable sample data for the last tier of the fallback ladder.

The shape is fixed (four projects of twenty flats each); types, statuses
and prices are drawn from a ``random.Random`` instance so that a given
seed always reproduces the same report. Output is for demonstration only
and must be shown with a sample-data notice.
"""

from __future__ import annotations

import random
from typing import Final

from app.domain.flats_analytics import FlatRecord, FlatsAnalytics, FlatStatus, FlatType
from sales_analytics.aggregator import aggregate
from sales_analytics.normalizer import BASE_PRICES

SAMPLE_PROJECTS: Final[tuple[str, ...]] = (
    "Sunrise Apartments",
    "Green Valley",
    "Metro Heights",
    "Royal Gardens",
)
FLATS_PER_PROJECT: Final[int] = 20
PRICE_SPREAD: Final[float] = 1_000_000.0

SAMPLE_SIZES: Final[dict[str, float]] = {
    FlatType.ONE_BHK: 650.0,
    FlatType.TWO_BHK: 950.0,
    FlatType.THREE_BHK: 1200.0,
    FlatType.FOUR_BHK: 1500.0,
}
SAMPLE_SOLD_DATE: Final[str] = "2024-06-15"


def generate_synthetic_records(seed: int | None = None) -> list[FlatRecord]:
    rng = random.Random(seed)
    records: list[FlatRecord] = []
    for project_index, project_name in enumerate(SAMPLE_PROJECTS):
        block = chr(ord("A") + project_index)
        for number in range(1, FLATS_PER_PROJECT + 1):
            flat_type = rng.choice(FlatType.ORDERED)
            status = rng.choice(FlatStatus.ALL)
            price = BASE_PRICES[flat_type] + rng.random() * PRICE_SPREAD
            is_sold = status == FlatStatus.SOLD
            records.append(
                FlatRecord(
                    flat_id=f"flat_{project_index}_{number}",
                    project_id=f"proj_{project_index}",
                    project_name=project_name,
                    flat_number=f"{block}{number:03d}",
                    flat_type=flat_type,
                    size=SAMPLE_SIZES[flat_type],
                    price=price,
                    status=status,
                    buyer_name=f"Buyer {number}" if is_sold else None,
                    sold_date=SAMPLE_SOLD_DATE if is_sold else None,
                )
            )
    return records


def generate_synthetic_analytics(seed: int | None = None) -> FlatsAnalytics:
    """
    Build a complete sample report. Pass ``seed`` for reproducible output.
    """

    return aggregate(generate_synthetic_records(seed))
