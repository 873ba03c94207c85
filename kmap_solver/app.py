import logging

import streamlit as st
import matplotlib.pyplot as plt
import numpy as np

from kmap_solver.kmap_engine import idx_to_rc, map_dimensions, rc_to_idx
from kmap_solver.logic import (
    EXAMPLE_MINTERMS,
    parse_minterms,
    reference_expression,
    solve_from_text,
    toggle_minterm,
    truth_table_rows,
    uncovered_minterms,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("kmap_solver.app")

# ------------------------------- UI setup -------------------------------

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]

AXIS_LABELS = {
    2: (["B=0", "B=1"], ["A=0", "A=1"]),
    3: (["BC=00", "BC=01", "BC=11", "BC=10"], ["A=0", "A=1"]),
    4: (
        ["CD=00", "CD=01", "CD=11", "CD=10"],
        ["AB=00", "AB=01", "AB=11", "AB=10"],
    ),
}

st.set_page_config(page_title="K-Map Solver", layout="wide")
st.title("🧮 K-Map Solver")
st.markdown("---")

if "minterms_text" not in st.session_state:
    st.session_state.minterms_text = "1, 2, 5, 6"

n = st.number_input("Number of variables:", min_value=2, max_value=4, value=3, step=1)
n = int(n)


def _current_minterms():
    max_valid = (1 << n) - 1
    return [m for m in parse_minterms(st.session_state.minterms_text) if 0 <= m <= max_valid]


def _toggle(idx):
    mins = toggle_minterm(_current_minterms(), idx)
    st.session_state.minterms_text = ", ".join(str(m) for m in mins)


def _load_example():
    st.session_state.minterms_text = ", ".join(str(m) for m in EXAMPLE_MINTERMS[n])


def _reset():
    st.session_state.minterms_text = ""


st.text_input("Minterms (e.g. 1, 3, 5, 7):", key="minterms_text")

col_example, col_reset, _ = st.columns([1, 1, 6])
col_example.button("Load example", on_click=_load_example)
col_reset.button("Reset", on_click=_reset)

# ------------------------------- cell toggles -------------------------------

st.caption("Click a cell to toggle it")
ones_now = set(_current_minterms())
nrows, ncols = map_dimensions(n)
for r in range(nrows):
    cols = st.columns(ncols + 4)
    for c in range(ncols):
        idx = rc_to_idx(n, r, c)
        cols[c].button(
            f"m{idx}: {1 if idx in ones_now else 0}",
            key=f"cell-{n}-{idx}",
            on_click=_toggle,
            args=(idx,),
        )


def draw_kmap(result):
    size_map = {2: (3.2, 3.2), 3: (5.2, 3.4), 4: (5.2, 5.2)}
    fig, ax = plt.subplots(figsize=size_map.get(n, (4.2, 4.2)))

    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    col_labels, row_labels = AXIS_LABELS[n]
    for j, lab in enumerate(col_labels):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(row_labels):
        ax.text(-0.25, i + 0.5, lab, ha="right", va="center", fontsize=10, color="#333")

    ones = set(result.minterms)
    for idx in range(2**n):
        r, c = idx_to_rc(n, idx)
        val, color = ("1", "#1f3c88") if idx in ones else ("0", "#9aa7b7")
        ax.text(c + 0.5, r + 0.5, val, color=color,
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(c + 0.05, r + 0.9, str(idx), color="#777", fontsize=8, alpha=0.7)

    # Groups need not be rectangles, so outline each member cell with a
    # per-group inset.
    for i, group in enumerate(result.groups):
        color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
        inset = 0.06 + 0.05 * (i % 6)
        for idx in group.cells:
            r, c = idx_to_rc(n, idx)
            ax.add_patch(plt.Rectangle(
                (c + inset, r + inset), 1 - 2 * inset, 1 - 2 * inset,
                fill=False, color=color, lw=2.2,
            ))
    return fig


# ------------------------------- solve -------------------------------

if st.button("Solve 🚀"):
    try:
        result = solve_from_text(st.session_state.minterms_text, n)

        st.success(f"**Simplified:**  \n{result.simplified_form}")
        st.info(f"**Exact minimal SOP (SymPy):**  \nF = {reference_expression(result.minterms, n)}")

        missing = uncovered_minterms(result, n)
        if missing:
            logger.info("Expression leaves minterms %s uncovered", missing)
            st.warning(f"The simplified expression does not produce minterms {missing}")

        if result.groups:
            for i, item in enumerate(result.explanations, start=1):
                st.markdown(
                    f"**Group {i}:** Cells {list(item.cells)}  \n"
                    f"**Term:** `{item.term}`  \n"
                    f"**Boolean Law Applied:** {item.law}  \n{item.rationale}"
                )
        else:
            st.caption("No groups found.")
        st.text_area("Simplification steps:", result.explanation, height=220)

        with st.container():
            st.markdown("### 🗺️ Karnaugh map")
            st.pyplot(draw_kmap(result))

        st.markdown("### Truth table")
        header = [chr(65 + i) for i in range(n)] + ["F"]
        rows = [list(bits) + [out] for bits, out in truth_table_rows(result.minterms, n)]
        st.table([dict(zip(header, row)) for row in rows])

    except ValueError as e:
        st.error(str(e))
