"""Helpers for collections ordered by ``order_number``."""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple

Record = Dict[str, Any]


def next_order_number(records: Sequence[Record]) -> int:
    """One past the highest order number, 0 for an empty collection."""
    numbers = [r["order_number"] for r in records if r.get("order_number") is not None]
    return max(numbers) + 1 if numbers else 0


def sorted_by_order(records: Sequence[Record]) -> List[Record]:
    # stable: ties keep the order the store returned them in
    return sorted(records, key=lambda r: r.get("order_number") or 0)


def find_swap_partner(
    records: Sequence[Record], record_id: str, direction: str
) -> Optional[Tuple[Record, Record]]:
    """Return ``(record, neighbour)`` to swap, or None at the boundary.

    Raises:
        ValueError: unknown direction
        KeyError: ``record_id`` is not in ``records``
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Invalid direction '{direction}'")
    ordered = sorted_by_order(records)
    index = next(
        (i for i, r in enumerate(ordered) if r["id"] == record_id), None
    )
    if index is None:
        raise KeyError(record_id)
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(ordered):
        return None
    return ordered[index], ordered[target]
