"""
sales_analytics/accessors.py

Declarative field-resolution rules for upstream flat records.

Each schema lists, per canonical field, the source keys to try in order.
The first key holding a present, non-blank value wins.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.domain.flats_analytics import SchemaKind


@dataclass(frozen=True)
class AccessorRules:
    """
    Ordered source keys for every canonical field of one schema.
    """

    flat_id: tuple[str, ...]
    project_id: tuple[str, ...]
    project_name: tuple[str, ...]
    flat_number: tuple[str, ...]
    flat_type: tuple[str, ...]
    size: tuple[str, ...]
    price: tuple[str, ...]
    buyer_name: tuple[str, ...]
    sold_flag: tuple[str, ...]
    status: tuple[str, ...]
    sold_date: tuple[str, ...]
    flat_id_prefix: str = "flat"
    project_id_prefix: str = "proj"


ACCESSOR_RULES: dict[str, AccessorRules] = {
    SchemaKind.FLATS: AccessorRules(
        flat_id=("_id", "flatId"),
        project_id=("projectId",),
        project_name=("projectName",),
        flat_number=("series", "flatId"),
        flat_type=("bhkSize",),
        size=("squareFeet",),
        price=("price",),
        buyer_name=("customerName",),
        sold_flag=("isSold",),
        status=("status",),
        sold_date=("soldDate",),
    ),
    SchemaKind.ANALYTICS: AccessorRules(
        flat_id=("id", "_id", "flatId"),
        project_id=("projectId", "project"),
        project_name=("projectName", "name"),
        flat_number=("flatNumber", "flatId"),
        flat_type=("type", "flatType", "bhkSize"),
        size=("size", "area", "squareFeet"),
        price=("price",),
        buyer_name=("buyerName", "customerName"),
        sold_flag=("isSold", "sold"),
        status=("status",),
        sold_date=("soldDate",),
    ),
}


def rules_for(schema: str) -> AccessorRules:
    try:
        return ACCESSOR_RULES[schema]
    except KeyError as exc:
        allowed = ", ".join(sorted(ACCESSOR_RULES))
        raise ValueError(f"Unsupported schema '{schema}'. Allowed schemas: {allowed}.") from exc


def first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """
    Return the value of the first key that is present and not blank.
    """

    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def first_text(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    value = first_present(raw, keys)
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    return str(value).strip()


def to_number(value: Any) -> float | None:
    """
    Parse ``value`` as a finite float; booleans, junk and integers too large
    for a float give ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def first_number(raw: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    """
    Return the first key's value that parses as a finite number.
    """

    for key in keys:
        number = to_number(raw.get(key))
        if number is not None:
            return number
    return None


def first_count(raw: Mapping[str, Any], keys: tuple[str, ...]) -> int:
    """
    Non-negative integer count from the first numeric key; 0 when absent.
    """

    value = first_number(raw, keys)
    return max(0, int(value)) if value is not None else 0
