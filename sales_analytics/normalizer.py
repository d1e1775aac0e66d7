"""
sales_analytics/normalizer.py

Convert raw upstream flat records into canonical FlatRecord values.

Normalization is a pure function of (raw, index, schema): no I/O, no
clock, no randomness. Malformed input is treated as an empty record and
runs through the same default chain, so this module never raises for
bad data.

Classification order (first match wins)
---------------------------------------
1. non-blank buyer name        -> sold
2. explicit ``True`` sold flag -> sold
3. status equal to "reserved"  -> reserved
4. anything else               -> unsold
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Final

from app.domain.flats_analytics import FlatRecord, FlatStatus, FlatType, SchemaKind
from sales_analytics.accessors import first_number, first_present, first_text, rules_for

BASE_PRICES: Final[dict[str, float]] = {
    FlatType.ONE_BHK: 2_500_000.0,
    FlatType.TWO_BHK: 4_000_000.0,
    FlatType.THREE_BHK: 6_000_000.0,
    FlatType.FOUR_BHK: 8_000_000.0,
}
"""Base price per flat type, strictly increasing by rank."""

UNIT_RATE: Final[float] = 2_000.0
"""Price added per square foot on top of the base price."""

DEFAULT_SIZE: Final[float] = 950.0
"""Display size used when the source carries no usable size."""


def parse_flat_type(value: Any) -> str:
    """
    Map a raw BHK label onto the fixed flat-type enumeration.

    Matching ignores case and whitespace; bare digits ("3") are accepted.
    Unknown labels fall back to ``FlatType.DEFAULT``.
    """

    if value is None or isinstance(value, (bool, dict, list)):
        return FlatType.DEFAULT
    compact = "".join(str(value).split()).upper()
    if compact.isdigit():
        compact = f"{compact}BHK"
    if compact in FlatType.ORDERED:
        return compact
    return FlatType.DEFAULT


def classify(
    *,
    buyer_name: str | None,
    sold_flag: Any,
    status: str | None,
) -> str:
    if buyer_name:
        return FlatStatus.SOLD
    if sold_flag is True:
        return FlatStatus.SOLD
    if status is not None and status.lower() == FlatStatus.RESERVED:
        return FlatStatus.RESERVED
    return FlatStatus.UNSOLD


def estimate_price(flat_type: str, size: float | None) -> float:
    base_price = BASE_PRICES[flat_type]
    if size is not None and size > 0:
        return base_price + size * UNIT_RATE
    return base_price


def normalize(raw: Any, index: int, schema: str = SchemaKind.FLATS) -> FlatRecord:
    """
    Normalize one raw record.

    Parameters
    ----------
    raw:
        Untrusted upstream value. Anything that is not a mapping is
        treated as an empty record.
    index:
        Position of the record in its source collection. Used to build
        deterministic placeholder identifiers.
    schema:
        ``SchemaKind`` selecting which accessor rules apply.
    """

    rules = rules_for(schema)
    source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    buyer_name = first_text(source, rules.buyer_name) or None
    status = classify(
        buyer_name=buyer_name,
        sold_flag=first_present(source, rules.sold_flag),
        status=first_text(source, rules.status),
    )

    flat_type = parse_flat_type(first_present(source, rules.flat_type))
    raw_size = first_number(source, rules.size)
    explicit_price = first_number(source, rules.price)
    if explicit_price is not None and explicit_price > 0:
        price = explicit_price
    else:
        price = estimate_price(flat_type, raw_size)

    flat_id = first_text(source, rules.flat_id) or f"{rules.flat_id_prefix}_{index}"
    sold_date = first_text(source, rules.sold_date) if status == FlatStatus.SOLD else None

    return FlatRecord(
        flat_id=flat_id,
        project_id=first_text(source, rules.project_id) or f"{rules.project_id_prefix}_{index}",
        project_name=first_text(source, rules.project_name) or f"Project {index + 1}",
        flat_number=first_text(source, rules.flat_number) or f"A{index:03d}",
        flat_type=flat_type,
        size=raw_size if raw_size is not None and raw_size > 0 else DEFAULT_SIZE,
        price=price,
        status=status,
        buyer_name=buyer_name,
        sold_date=sold_date or None,
    )


def normalize_many(raws: Iterable[Any], schema: str = SchemaKind.FLATS) -> list[FlatRecord]:
    """
    Normalize a collection, using each record's position as its index.
    """

    return [normalize(raw, index, schema) for index, raw in enumerate(raws)]
