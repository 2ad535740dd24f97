"""Ordering policy shared by the preview payload and generated scripts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal, TypeVar

BarOrdering = Literal["original", "ascending", "descending"]

L = TypeVar("L")


def ordering_from_config(config: Mapping[str, object]) -> BarOrdering:
    """Return the configured bar ordering, defaulting to the original order."""

    value = config.get("barOrdering")
    if value in ("ascending", "descending"):
        return value  # type: ignore[return-value]
    return "original"


def sort_permutation(values: Sequence[float], ordering: BarOrdering) -> list[int]:
    """Return the index permutation that applies `ordering` to `values`.

    The sort is stable in both directions: equal values keep their input order.
    """

    indices = list(range(len(values)))
    if ordering == "original":
        return indices
    return sorted(indices, key=lambda i: values[i], reverse=ordering == "descending")


def apply_ordering(
    labels: Sequence[L],
    values: Sequence[float],
    ordering: BarOrdering,
) -> tuple[list[L], list[float]]:
    """Permute labels and values together.

    Args:
        labels: Category labels aligned with `values`.
        values: Numeric values used as the sort key.
        ordering: "original", "ascending" or "descending".

    Returns:
        `(labels, values)` reordered by the same permutation.
    """

    if len(labels) != len(values):
        raise ValueError(f"labels and values differ in length ({len(labels)} != {len(values)}).")
    order = sort_permutation(values, ordering)
    return [labels[i] for i in order], [values[i] for i in order]
