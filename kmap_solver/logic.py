"""Boolean logic utilities for the K-Map Solver UI."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from sympy import And, Not, Or, Symbol, symbols
from sympy.logic.boolalg import BooleanFalse, BooleanTrue, SOPform, simplify_logic

from .kmap_engine import (
    Group,
    GroupExplanation,
    VariableCount,
    build_grid,
    explain_groups,
    find_prime_implicants,
    format_explanation,
    select_cover,
    term_for,
)

logger = logging.getLogger(__name__)

EXAMPLE_MINTERMS = {
    2: [1, 3],
    3: [1, 2, 5, 6],
    4: [1, 4, 5, 6, 12, 13, 14, 15],
}


@dataclass(frozen=True)
class MinimizationResult:
    """Outcome of one ``minimize`` call."""

    expression: str
    groups: Tuple[Group, ...]
    prime_implicants: Tuple[Group, ...]
    minterms: Tuple[int, ...]
    explanations: Tuple[GroupExplanation, ...]
    explanation: str

    @property
    def simplified_form(self) -> str:
        return f"F = {self.expression}"

    @property
    def terms(self) -> List[str]:
        return [item.term for item in self.explanations if item.term]


def minimize(minterms: Iterable[int], variable_count: int) -> MinimizationResult:
    """Simplify the function given by ``minterms`` with the greedy K-map heuristic.

    Minterms are assumed to be in range (see ``validate_minterm_range``).
    Groups whose shape cannot be named are kept in ``groups`` but left out
    of the expression.
    """
    count = VariableCount.from_value(variable_count)
    mins = tuple(sorted(set(minterms)))

    if not mins:
        return MinimizationResult(
            expression="0",
            groups=(),
            prime_implicants=(),
            minterms=mins,
            explanations=(),
            explanation="No minterms selected - function is always 0",
        )
    if len(mins) == count.size:
        return MinimizationResult(
            expression="1",
            groups=(),
            prime_implicants=(),
            minterms=mins,
            explanations=(),
            explanation="All minterms selected - function is always 1",
        )

    grid = build_grid(mins, count)
    candidates = find_prime_implicants(grid, count)
    selected = select_cover(candidates, mins)

    terms = []
    for group in selected:
        term = term_for(group, count)
        if term:
            terms.append(term)
        else:
            logger.debug("Group %s has no %d-variable term; dropped", group.cells, count)

    explanations = tuple(explain_groups(selected, count))
    return MinimizationResult(
        expression=" + ".join(terms) if terms else "0",
        groups=tuple(selected),
        prime_implicants=tuple(candidates),
        minterms=mins,
        explanations=explanations,
        explanation=format_explanation(explanations),
    )


# ------------------------------- input handling -------------------------------

def parse_minterms(raw: str) -> List[int]:
    """Split comma-separated text into integers, ignoring blanks and junk."""
    values = []
    for piece in raw.split(","):
        piece = piece.strip()
        try:
            values.append(int(piece))
        except ValueError:
            continue
    return values


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    for m in minterms:
        if m < 0 or m > max_valid:
            raise ValueError(f"Minterms must be between 0 and {max_valid} for {n} variables")


def solve_from_text(raw: str, n: int) -> MinimizationResult:
    """Parse, validate and minimise user-typed minterms."""
    if not raw.strip():
        raise ValueError("Please enter at least one minterm")
    mins = parse_minterms(raw)
    validate_minterm_range(mins, n)
    if not mins:
        raise ValueError("Please enter valid minterms")
    return minimize(mins, n)


def toggle_minterm(minterms: Iterable[int], idx: int) -> List[int]:
    """Flip one cell of the map and return the sorted minterm list."""
    current = set(minterms)
    if idx in current:
        current.discard(idx)
    else:
        current.add(idx)
    return sorted(current)


def truth_table_rows(minterms: Iterable[int], n: int) -> List[Tuple[Tuple[int, ...], int]]:
    """Return ((bits...), F) rows in index order, most significant bit first."""
    ones = set(minterms)
    return [
        (bits, 1 if idx in ones else 0)
        for idx, bits in enumerate(itertools.product([0, 1], repeat=n))
    ]


# ------------------------------- SymPy bridge -------------------------------

def get_variables(n: int):
    """Return SymPy symbols (A, B, C, ...) for the requested variable count."""
    if n < 1:
        raise ValueError("Number of variables must be positive.")
    return symbols(" ".join(chr(65 + i) for i in range(n)))


def term_to_expr(term: str, vars_tuple):
    """Parse a product term such as ``A'BC`` into a SymPy conjunction."""
    if term == "1":
        return True
    lookup = {str(v): v for v in vars_tuple}
    literals = []
    i = 0
    while i < len(term):
        name = term[i]
        if name not in lookup:
            raise ValueError(f"Unknown variable {name!r} in term {term!r}")
        if i + 1 < len(term) and term[i + 1] == "'":
            literals.append(Not(lookup[name]))
            i += 2
        else:
            literals.append(lookup[name])
            i += 1
    if not literals:
        raise ValueError("Empty product term.")
    return And(*literals)


def expression_to_sympy(expression: str, vars_tuple):
    """Convert a published SOP string back into a SymPy expression."""
    if expression == "0":
        return False
    if expression == "1":
        return True
    return Or(*(term_to_expr(t.strip(), vars_tuple) for t in expression.split("+")))


def truth_minterms(expr, vars_tuple) -> Sequence[int]:
    """Return indices whose assignments make the expression evaluate to True."""
    if expr is True or expr is False:
        return list(range(2 ** len(vars_tuple))) if expr else []
    mins = []
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(vars_tuple))):
        subs = {var: bool(bit) for var, bit in zip(vars_tuple, bits)}
        if bool(expr.xreplace(subs)):
            mins.append(idx)
    return mins


def uncovered_minterms(result: MinimizationResult, n: int) -> List[int]:
    """Minterms of ``result`` that its published expression does not produce."""
    vars_tuple = get_variables(n)
    produced = set(truth_minterms(expression_to_sympy(result.expression, vars_tuple), vars_tuple))
    return [m for m in result.minterms if m not in produced]


def prime_format(expr, var_order: Tuple[Symbol, ...]) -> str:
    """Format a simplified DNF expression into SOP text following var_order."""
    if expr is False or isinstance(expr, BooleanFalse):
        return "0"
    if expr is True or isinstance(expr, BooleanTrue):
        return "1"

    def lit_to_str(lit):
        if isinstance(lit, Not):
            return f"{lit.args[0]}'"
        return str(lit)

    terms = list(expr.args) if isinstance(expr, Or) else [expr]
    result = []
    for term in terms:
        literals = list(term.args) if isinstance(term, And) else [term]
        ordered = []
        for var in var_order:
            for lit in literals:
                if lit == var or (isinstance(lit, Not) and lit.args[0] == var):
                    ordered.append(lit)
                    break
        result.append("".join(lit_to_str(item) for item in ordered) or "1")
    return " + ".join(result)


def reference_expression(minterms: Iterable[int], n: int) -> str:
    """Exact minimal SOP computed by SymPy, for comparison with the heuristic."""
    vars_tuple = get_variables(n)
    mins = sorted(set(minterms))
    if not mins:
        return "0"
    expr = simplify_logic(SOPform(vars_tuple, mins), form="dnf")
    return prime_format(expr, vars_tuple)
