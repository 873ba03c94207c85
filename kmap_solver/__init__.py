"""Convenience exports for core K-Map solver helpers."""

from .logic import (
    EXAMPLE_MINTERMS,
    MinimizationResult,
    expression_to_sympy,
    get_variables,
    minimize,
    parse_minterms,
    prime_format,
    reference_expression,
    solve_from_text,
    term_to_expr,
    toggle_minterm,
    truth_minterms,
    truth_table_rows,
    uncovered_minterms,
    validate_minterm_range,
)
from .kmap_engine import (
    Group,
    GroupExplanation,
    Law,
    VariableCount,
    build_grid,
    explain_groups,
    explain_size,
    find_prime_implicants,
    format_explanation,
    grow_group,
    idx_to_rc,
    map_dimensions,
    rc_to_idx,
    select_cover,
    term_for,
)

__all__ = [
    "EXAMPLE_MINTERMS",
    "Group",
    "GroupExplanation",
    "Law",
    "MinimizationResult",
    "VariableCount",
    "build_grid",
    "explain_groups",
    "explain_size",
    "expression_to_sympy",
    "find_prime_implicants",
    "format_explanation",
    "get_variables",
    "grow_group",
    "idx_to_rc",
    "map_dimensions",
    "minimize",
    "parse_minterms",
    "prime_format",
    "rc_to_idx",
    "reference_expression",
    "select_cover",
    "solve_from_text",
    "term_for",
    "term_to_expr",
    "toggle_minterm",
    "truth_minterms",
    "truth_table_rows",
    "uncovered_minterms",
    "validate_minterm_range",
]
