"""Karnaugh map grid, adjacency and grouping helpers."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)


class VariableCount(IntEnum):
    """Supported K-map sizes; each member selects its own fixed tables."""

    TWO = 2
    THREE = 3
    FOUR = 4

    @classmethod
    def from_value(cls, n: int) -> "VariableCount":
        try:
            return cls(n)
        except ValueError:
            raise ValueError("K-map available for 2-4 variables.") from None

    @property
    def size(self) -> int:
        return 1 << self.value

    @property
    def adjacency(self) -> Dict[int, Tuple[int, ...]]:
        return ADJACENCY[self]

    @property
    def layout(self) -> Tuple[Tuple[int, ...], ...]:
        return LAYOUTS[self]

    @property
    def dimensions(self) -> Tuple[int, int]:
        return len(self.layout), len(self.layout[0])


# Neighbour order matters: group growth visits neighbours in this order.
ADJACENCY: Dict[VariableCount, Dict[int, Tuple[int, ...]]] = {
    VariableCount.TWO: {
        0: (1, 2), 1: (0, 3), 2: (0, 3), 3: (1, 2),
    },
    VariableCount.THREE: {
        0: (1, 2, 4), 1: (0, 3, 5), 2: (0, 3, 6), 3: (1, 2, 7),
        4: (0, 5, 6), 5: (1, 4, 7), 6: (2, 4, 7), 7: (3, 5, 6),
    },
    VariableCount.FOUR: {
        0: (1, 4, 8), 1: (0, 3, 5, 9), 2: (3, 6, 10), 3: (1, 2, 7, 11),
        4: (0, 5, 6, 12), 5: (1, 4, 7, 13), 6: (2, 4, 7, 14), 7: (3, 5, 6, 15),
        8: (0, 9, 12), 9: (1, 8, 11, 13), 10: (2, 11, 14), 11: (3, 9, 10, 15),
        12: (4, 8, 13), 13: (5, 9, 12, 15), 14: (6, 10, 15), 15: (7, 11, 13, 14),
    },
}

# Cell indices as drawn: n=2 rows A / cols B, n=3 rows A / cols BC,
# n=4 rows AB / cols CD, both axes in Gray order.
LAYOUTS: Dict[VariableCount, Tuple[Tuple[int, ...], ...]] = {
    VariableCount.TWO: ((0, 1), (2, 3)),
    VariableCount.THREE: ((0, 1, 3, 2), (4, 5, 7, 6)),
    VariableCount.FOUR: (
        (0, 1, 3, 2),
        (4, 5, 7, 6),
        (12, 13, 15, 14),
        (8, 9, 11, 10),
    ),
}


@dataclass(frozen=True)
class Group:
    """A candidate implicant: the sorted indices of the 1-cells it spans."""

    cells: Tuple[int, ...]

    @classmethod
    def of(cls, cells: Iterable[int]) -> "Group":
        return cls(tuple(sorted(set(cells))))

    @property
    def size(self) -> int:
        return len(self.cells)


def map_dimensions(nvars: int) -> Tuple[int, int]:
    """Return (rows, cols) for K-map based on variable count."""
    return VariableCount.from_value(nvars).dimensions


def idx_to_rc(nvars: int, idx: int) -> Tuple[int, int]:
    """Translate a minterm index to (row, col) coordinates."""
    for r, row in enumerate(VariableCount.from_value(nvars).layout):
        if idx in row:
            return r, row.index(idx)
    raise ValueError(f"Cell index {idx} is outside a {nvars}-variable map.")


def rc_to_idx(nvars: int, r: int, c: int) -> int:
    """Return the minterm index drawn at (row, col)."""
    return VariableCount.from_value(nvars).layout[r][c]


def build_grid(minterms: Iterable[int], nvars: int) -> Tuple[int, ...]:
    """Return the 2**n bit grid with a 1 at every minterm index."""
    ones = set(minterms)
    return tuple(1 if idx in ones else 0 for idx in range(VariableCount.from_value(nvars).size))


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def grow_group(
    grid: Sequence[int], start: int, size: int, adjacency: Dict[int, Tuple[int, ...]]
) -> List[int]:
    """Breadth-first collect up to ``size`` connected 1-cells starting at ``start``.

    Growth stops once ``size`` cells are visited or no unvisited 1-valued
    neighbour is reachable, so the result may be smaller than requested.
    The cells are connected but not necessarily a rectangular K-map block.
    """
    if not grid[start]:
        return []

    visited = [start]
    seen = {start}
    queue = deque([start])
    while queue and len(visited) < size:
        current = queue.popleft()
        for neighbor in adjacency.get(current, ()):
            if neighbor not in seen and grid[neighbor] and len(visited) < size:
                seen.add(neighbor)
                visited.append(neighbor)
                queue.append(neighbor)
    return visited


def _power_sizes_desc(limit: int) -> List[int]:
    sizes = [limit]
    while sizes[-1] > 1:
        sizes.append(sizes[-1] // 2)
    return sizes


def find_prime_implicants(grid: Sequence[int], nvars: int) -> List[Group]:
    """Enumerate candidate groups, largest sizes first, deduplicated by cell set."""
    count = VariableCount.from_value(nvars)
    found: List[Group] = []
    for size in _power_sizes_desc(count.size):
        for start in range(count.size):
            if not grid[start]:
                continue
            cells = grow_group(grid, start, size, count.adjacency)
            if len(cells) != size or not _is_power_of_two(len(cells)):
                continue
            group = Group.of(cells)
            if group not in found:
                found.append(group)
    logger.debug("Found %d candidate groups for %d variables", len(found), nvars)
    return found


def select_cover(groups: Sequence[Group], minterms: Iterable[int]) -> List[Group]:
    """Greedily pick groups, largest first, until every minterm is covered.

    Ties keep discovery order. A group is taken when it adds at least one
    uncovered cell; the walk stops once the covered count reaches the
    minterm count.
    """
    total = len(set(minterms))
    chosen: List[Group] = []
    covered: set = set()

    for group in sorted(groups, key=lambda g: g.size, reverse=True):
        if not [cell for cell in group.cells if cell not in covered]:
            continue
        chosen.append(group)
        covered.update(group.cells)
        if len(covered) == total:
            break
    return chosen


# ------------------------------- term naming -------------------------------

_TERMS_2_PAIRS: Dict[FrozenSet[int], str] = {
    frozenset({0, 1}): "A'",
    frozenset({2, 3}): "A",
    frozenset({0, 2}): "B'",
    frozenset({1, 3}): "B",
}
_TERMS_2_SINGLE = {0: "A'B'", 1: "A'B", 2: "AB'", 3: "AB"}

_TERMS_3_QUADS: Dict[FrozenSet[int], str] = {
    frozenset({0, 1, 2, 3}): "A'",
    frozenset({4, 5, 6, 7}): "A",
    frozenset({0, 1, 4, 5}): "B'",
    frozenset({2, 3, 6, 7}): "B",
    frozenset({0, 2, 4, 6}): "C'",
    frozenset({1, 3, 5, 7}): "C",
}
_TERMS_3_PAIRS: Dict[Tuple[int, int], str] = {
    (0, 1): "A'B'", (2, 3): "A'B", (4, 5): "AB'", (6, 7): "AB",
    (0, 4): "B'C'", (1, 5): "B'C", (3, 7): "BC", (2, 6): "BC'",
}
# Listed in Gray column order (0, 1, 3, 2, 4, 5, 7, 6) but looked up by cell index.
_TERMS_3_SINGLE: Tuple[str, ...] = (
    "A'B'C'", "A'B'C", "A'BC", "A'BC'",
    "AB'C'", "AB'C", "ABC", "ABC'",
)


def _term_2(group: Group) -> str:
    if group.size == 4:
        return "1"
    if group.size == 2:
        return _TERMS_2_PAIRS.get(frozenset(group.cells), "")
    if group.size == 1:
        return _TERMS_2_SINGLE.get(group.cells[0], "")
    return ""


def _term_3(group: Group) -> str:
    if group.size == 8:
        return "1"
    if group.size == 4:
        return _TERMS_3_QUADS.get(frozenset(group.cells), "")
    if group.size == 2:
        return _TERMS_3_PAIRS.get(group.cells, "")
    if group.size == 1:
        idx = group.cells[0]
        return _TERMS_3_SINGLE[idx] if 0 <= idx < len(_TERMS_3_SINGLE) else ""
    return ""


def _term_4(group: Group) -> str:
    if group.size == 16:
        return "1"
    if group.size == 1:
        idx = group.cells[0]
        return "".join(
            var if (idx >> shift) & 1 else f"{var}'"
            for var, shift in (("A", 3), ("B", 2), ("C", 1), ("D", 0))
        )
    # Pairs, quads and octets are not named for four variables.
    return ""


_TERM_BUILDERS = {
    VariableCount.TWO: _term_2,
    VariableCount.THREE: _term_3,
    VariableCount.FOUR: _term_4,
}


def term_for(group: Group, nvars: int) -> str:
    """Return the SOP product term for a group, or "" when its shape is not recognised."""
    return _TERM_BUILDERS[VariableCount.from_value(nvars)](group)


# ------------------------------- explanations -------------------------------

@dataclass(frozen=True)
class Law:
    name: str
    rationale: str


LAWS: Dict[int, Law] = {
    1: Law("No Simplification", "Single minterm - cannot be reduced further"),
    2: Law(
        "Adjacency Law",
        "X·Y + X·Y' = X. Two adjacent cells eliminate one variable",
    ),
    4: Law(
        "Consensus & Absorption Laws",
        "Multiple pairs of adjacency eliminate two variables",
    ),
    8: Law(
        "Full Variable Elimination",
        "Repeated application of the Adjacency Law eliminates three variables",
    ),
    16: Law("Tautology Law", "F = 1 (all cells are 1s)"),
}
FALLBACK_LAW = Law("Simplification Applied", "")


def explain_size(size: int) -> Law:
    """Return the Boolean law describing a group of ``size`` cells."""
    return LAWS.get(size, FALLBACK_LAW)


@dataclass(frozen=True)
class GroupExplanation:
    cells: Tuple[int, ...]
    term: str
    law: str
    rationale: str


def explain_groups(groups: Sequence[Group], nvars: int) -> List[GroupExplanation]:
    explanations = []
    for group in groups:
        law = explain_size(group.size)
        explanations.append(
            GroupExplanation(
                cells=group.cells,
                term=term_for(group, nvars),
                law=law.name,
                rationale=law.rationale,
            )
        )
    return explanations


def format_explanation(explanations: Sequence[GroupExplanation]) -> str:
    """Render per-group explanations as the step-by-step text block."""
    if not explanations:
        return "No groups formed."

    lines = ["Boolean Simplification Steps:", ""]
    for i, item in enumerate(explanations, start=1):
        lines.append(f"Group {i}: Cells [{', '.join(str(c) for c in item.cells)}]")
        lines.append(f"  Term: {item.term}")
        lines.append(f"  Law: {item.law}")
        lines.append(f"  Details: {item.rationale}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


__all__ = [
    "ADJACENCY",
    "FALLBACK_LAW",
    "Group",
    "GroupExplanation",
    "LAWS",
    "LAYOUTS",
    "Law",
    "VariableCount",
    "build_grid",
    "explain_groups",
    "explain_size",
    "find_prime_implicants",
    "format_explanation",
    "grow_group",
    "idx_to_rc",
    "map_dimensions",
    "rc_to_idx",
    "select_cover",
    "term_for",
]
