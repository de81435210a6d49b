"""One-to-one assignment between observed items and expected candidates.

``assign`` takes a boolean compatibility matrix (row i = observed item,
column j = candidate, True when the item matches the candidate) and
returns a maximum assignment: as many items as possible each paired with
a distinct candidate.  No first-fit heuristic is involved, so an item that
could satisfy several candidates never steals the only candidate another
item could use.

The solver is scipy's ``linear_sum_assignment`` on a 0 / inf cost matrix.
Forbidden (infinite) cells never reach the solver, which would raise
``ValueError``: they are replaced by a guard value that dominates every
finite cost, so the solver minimises the number of guarded pairs, i.e.
maximises the number of real ones.  Guarded pairs are filtered out of the
result.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["Assignment", "assign", "hungarian_match"]


@dataclass(frozen=True, slots=True)
class Assignment:
    """Result of ``assign``.

    Attributes:
        pairs:          ``(row, column)`` pairs that were assigned.
        unassigned_rows:    Rows (observed items) left without a candidate.
        unassigned_columns: Columns (candidates) left without an item.
    """

    pairs: tuple[tuple[int, int], ...]
    unassigned_rows: tuple[int, ...]
    unassigned_columns: tuple[int, ...]


def hungarian_match(cost_matrix: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Optimal assignment of ``cost_matrix`` ignoring infinite cells.

    Returns:
        ``(row_ind, col_ind)`` integer arrays; pairs whose original cost was
        infinite are removed, so both may be empty.
    """
    empty = np.array([], dtype=int)
    cost = np.asarray(cost_matrix, dtype=float)
    if cost.size == 0:
        return empty, empty

    forbidden = np.isinf(cost)
    if forbidden.all():
        return empty, empty

    if forbidden.any():
        guard = float(cost[~forbidden].max()) * 2.0 + 1.0
        cost = np.where(forbidden, guard, cost)

    row_ind, col_ind = linear_sum_assignment(cost)
    keep = ~forbidden[row_ind, col_ind]
    return row_ind[keep], col_ind[keep]


def assign(compatible: np.ndarray) -> Assignment:
    """Maximum one-to-one assignment over a boolean compatibility matrix."""
    matrix = np.asarray(compatible, dtype=bool)
    if matrix.ndim != 2:
        msg = f"compatibility matrix must be 2-D, got shape {matrix.shape}"
        raise ValueError(msg)

    n_rows, n_cols = matrix.shape
    rows, cols = hungarian_match(np.where(matrix, 0.0, np.inf))
    pairs = tuple(zip(rows.tolist(), cols.tolist(), strict=True))
    used_rows = {r for r, _ in pairs}
    used_cols = {c for _, c in pairs}
    return Assignment(
        pairs=pairs,
        unassigned_rows=tuple(r for r in range(n_rows) if r not in used_rows),
        unassigned_columns=tuple(c for c in range(n_cols) if c not in used_cols),
    )
