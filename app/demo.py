"""
Minesweeper Probe Checker - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import streamlit as st
from typing import Any, FrozenSet, List, Tuple

from minesweeper_probe import Board, MalformedBoard, ProbeSolver, Verdict
from minesweeper_probe.analysis import random_snapshot
from minesweeper_probe.solver import EXAMPLE_BOARD

Coordinate = Tuple[int, int]

VERDICT_TEXT = {
    Verdict.SAFE: "The probe is safe",
    Verdict.MINE: "The probe is a mine",
    Verdict.UNDETERMINED: "The probe cannot be determined",
    Verdict.INCONSISTENT: "The board is inconsistent",
}


def render_board_html(
    board: Board,
    forced_mine: FrozenSet[Coordinate] = frozenset(),
    forced_safe: FrozenSet[Coordinate] = frozenset(),
    highlight_cells: FrozenSet[Coordinate] = frozenset(),
) -> str:
    """Render the board with forced cells overlaid as an HTML table."""
    # Scale cell size based on board width
    if board.width >= 25:
        cell_size = 16
        font_size = "11px"
    elif board.width >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 30
        font_size = "15px"

    colors = {
        "0": "#cccccc",
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
    }

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for r in range(board.height):
        html += "<tr>"
        for c in range(board.width):
            cell_pos = (r, c)
            token = board.label(cell_pos).token()
            mine = cell_pos in forced_mine
            safe = cell_pos in forced_safe

            if mine and safe:
                cell = "!"  # Forced both ways
                bg = "#ff0000"
                text_color = "#ffffff"
            elif mine:
                cell = "M"  # Forced mine
                bg = "#ffa500"
                text_color = "#ffffff"
            elif safe:
                cell = "S"  # Forced safe
                bg = "#90ee90"
                text_color = "#006400"
            elif token == "*":
                cell = "*"
                bg = "#ffcccc"
                text_color = "#ff0000"
            elif token in ("_", "?"):
                cell = token
                bg = "#c0c0c0"
                text_color = "#666666"
            else:
                cell = token
                bg = "#f0f0f0" if token in ("0", "s") else "#ffffff"
                text_color = colors.get(token, "#000000")

            if cell_pos == board.probe:
                border = "3px solid #0000ff"
            elif cell_pos in highlight_cells:
                border = "3px solid #ff0000"
            else:
                border = "1px solid #999"

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{cell}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def main():
    st.set_page_config(
        page_title="Minesweeper Probe Checker",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper Probe Checker")
    st.markdown("""
    Decides whether the probe `?` is provably safe, provably a mine, or undetermined
    by propagating the visible clues to a fixpoint.
    """)

    # Sidebar configuration
    st.sidebar.header("Random Board")
    height = st.sidebar.slider("Height", 3, 20, 9)
    width = st.sidebar.slider("Width", 3, 20, 9)
    max_mines = height * width - 1
    mines = st.sidebar.slider("Mines", 0, max_mines, min(10, max_mines))
    reveal_fraction = st.sidebar.slider("Revealed fraction", 0.0, 1.0, 0.6, 0.05)

    # Initialize session state
    if "board_text" not in st.session_state:
        st.session_state.board_text = EXAMPLE_BOARD

    if st.sidebar.button("Generate Random Board"):
        board, _ = random_snapshot(
            height, width, mines, reveal_fraction=reveal_fraction,
            rng=np.random.default_rng(),
        )
        st.session_state.board_text = board.render()
        st.rerun()

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Board")
        text = st.text_area(
            "Tokens: `_` covered, `?` probe, `*` mine, `s` safe, `0`-`8` clue",
            value=st.session_state.board_text,
            height=200,
        )
        st.session_state.board_text = text

        try:
            board = Board.from_text(text)
        except MalformedBoard as exc:
            st.error(f"Malformed board: {exc}")
            return

        solver = ProbeSolver(board)
        resolution = solver.solve()
        derivation = solver.derivation
        assert derivation is not None
        history = derivation.history

        forced_mine: FrozenSet[Coordinate] = derivation.forced_mine
        forced_safe: FrozenSet[Coordinate] = derivation.forced_safe
        highlight: FrozenSet[Coordinate] = frozenset()

        # Round replay
        if history:
            replay = st.checkbox("Round-by-Round Replay", value=False)
            if replay:
                round_display = st.slider("Round", 1, len(history), len(history))
                shown = history[:round_display]
                forced_mine = frozenset().union(*(d.forced_mine for d in shown))
                forced_safe = frozenset().union(*(d.forced_safe for d in shown))
                last = shown[-1]
                highlight = last.forced_mine | last.forced_safe
                st.info(
                    f"**Round {last.index}**: {len(last.forced_mine)} mine(s), "
                    f"{len(last.forced_safe)} safe cell(s) from "
                    f"{last.examined_clues} examined clue(s)"
                )

        html = render_board_html(board, forced_mine, forced_safe, highlight)
        st.markdown(html, unsafe_allow_html=True)

        message = VERDICT_TEXT[resolution.verdict]
        if resolution.verdict is Verdict.SAFE:
            st.success(message)
        elif resolution.verdict is Verdict.MINE:
            st.error(message)
        elif resolution.verdict is Verdict.INCONSISTENT:
            st.warning(f"{message}: {sorted(resolution.conflicts)}")
        else:
            st.info(message)

        # Board legend
        st.markdown("""
        <div style="font-size: 12px; margin-top: 10px;">
        <b>Legend:</b>
        <span style="background: #c0c0c0; color: #666666; padding: 2px 6px; margin: 0 4px; font-weight: bold;">_</span> Covered
        <span style="background: #90ee90; color: #006400; padding: 2px 6px; margin: 0 4px; font-weight: bold;">S</span> Forced safe
        <span style="background: #ffa500; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Forced mine
        <span style="background: #ff0000; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">!</span> Forced both ways
        <span style="border: 3px solid #0000ff; padding: 2px 6px; margin: 0 4px;">?</span> Probe
        </div>
        """, unsafe_allow_html=True)

    with col2:
        st.subheader("Propagation Statistics")
        summary = solver.summary()
        metrics: List[Tuple[str, Any]] = [
            ("Verdict", summary["verdict"]),
            ("Rounds", summary["rounds"]),
            ("Forced Mines", summary["forced_mine_count"]),
            ("Forced Safe", summary["forced_safe_count"]),
        ]
        for label, value in metrics:
            st.metric(label, value)

        st.markdown("---")
        st.markdown("""
        **Rules:**
        1. **Saturation**: a clue already touching `n` mines makes its other covered neighbors safe
        2. **Exhaustion**: a clue needing exactly as many mines as it has covered neighbors makes them all mines
        """)


if __name__ == "__main__":
    main()
