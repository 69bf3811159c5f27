"""
Pick which columns to show.

Every candidate column i has a natural width w_i, an importance v_i and an
optional mutex group. We choose x_i in {0, 1} to

    maximize   sum(v_i * x_i)
    subject to sum((1 + w_i) * x_i) <= budget + 1     (one separator per column,
                                                        none before the first)
               sum(x_i for i in group) <= 1            for each mutex group

The catalog is a dozen or so columns, so an exact branch and bound over
"one choice per group" is instant.

When nothing fits at all the caller falls back to showing every column at or
above ALWAYS_SHOW_IMPORTANCE, ignoring width and mutex groups.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from dtsearch.columns import ALWAYS_SHOW_IMPORTANCE, Column

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selected:
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class Infeasible:
    reason: str


SelectionResult = Union[Selected, Infeasible]


def _choice_sets(groups: Sequence[Optional[str]]) -> List[List[int]]:
    """
    Split column indices into sets from which at most one may be chosen: one
    set per mutex group, and a singleton for every ungrouped column. Sets are
    ordered by their first member.
    """
    sets: List[List[int]] = []
    by_group = {}
    for i, group in enumerate(groups):
        if group is None:
            sets.append([i])
        elif group in by_group:
            by_group[group].append(i)
        else:
            by_group[group] = [i]
            sets.append(by_group[group])
    return sets


def solve_selection(
    widths: Sequence[int],
    importances: Sequence[int],
    groups: Sequence[Optional[str]],
    budget: int,
) -> SelectionResult:
    """
    Exact maximum-importance selection. Ties on importance go to the narrower
    selection, then to the first one found in catalog order.

    Returns Infeasible when no column fits the budget at all.
    """
    capacity = budget + 1
    if capacity < 0:
        return Infeasible(f"negative width budget {budget}")

    costs = [1 + w for w in widths]
    sets = _choice_sets(groups)
    # Upper bound on what the sets from k onward can still add.
    gains = [max([importances[i] for i in s] + [0]) for s in sets]
    remaining = [0] * (len(sets) + 1)
    for k in range(len(sets) - 1, -1, -1):
        remaining[k] = remaining[k + 1] + gains[k]

    best_value, best_cost, best_picked = 0, 0, ()

    def visit(k: int, value: int, cost: int, picked: Tuple[int, ...]):
        nonlocal best_value, best_cost, best_picked
        if value > best_value or (value == best_value and cost < best_cost):
            best_value, best_cost, best_picked = value, cost, picked
        if k == len(sets):
            return
        bound = value + remaining[k]
        if bound < best_value or (bound == best_value and cost >= best_cost):
            return
        for i in sets[k]:
            # zero or negative importance only ever costs width
            if importances[i] > 0 and cost + costs[i] <= capacity:
                visit(k + 1, value + importances[i], cost + costs[i], picked + (i,))
        visit(k + 1, value, cost, picked)

    visit(0, 0, 0, ())

    if not best_picked:
        return Infeasible(f"no column fits in {budget} columns")
    return Selected(tuple(sorted(best_picked)))


def fallback_selection(importances: Sequence[int], threshold: int = ALWAYS_SHOW_IMPORTANCE) -> List[int]:
    return [i for i, importance in enumerate(importances) if importance >= threshold]


def pick_columns(columns: Sequence[Column], widths: Sequence[int], budget: int) -> List[int]:
    """Indices of the columns to show, in catalog order."""
    importances = [c.importance for c in columns]
    groups = [c.mutex_group for c in columns]
    logger.debug(
        "Column selection model: budget=%d columns=%s",
        budget,
        [(c.label, w, c.importance, c.mutex_group) for c, w in zip(columns, widths)],
    )

    result = solve_selection(widths, importances, groups, budget)
    logger.debug("Selection result: %s", result)
    if isinstance(result, Selected):
        return list(result.indices)

    picked = fallback_selection(importances)
    logger.debug("Falling back to importance >= %d: %s", ALWAYS_SHOW_IMPORTANCE, picked)
    return picked
