"""One-shot command line program: read a board from stdin and print the probe verdict."""

import logging
import os
import sys
from typing import Optional, TextIO

from .board import Board, MalformedBoard
from .solver import EXAMPLE_BOARD, ProbeSolver
from .verdict import Verdict

LOG_LEVEL_ENV = "MINESWEEPER_PROBE_LOG_LEVEL"

VERDICT_MESSAGES = {
    Verdict.SAFE: "The probe is safe",
    Verdict.MINE: "The probe is a mine",
    Verdict.UNDETERMINED: "The probe cannot be determined",
    Verdict.INCONSISTENT: "The board is inconsistent",
}


def configure_logging() -> None:
    """Configure root logging from the MINESWEEPER_PROBE_LOG_LEVEL variable."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV} must be a logging level name, got {level_name!r}.")
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
    )


def run_cli(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    Run the read-solve-print cycle once.

    Empty input falls back to the built-in example board, which is echoed.

    Returns:
        Process exit status: 0 for any verdict, 1 for a malformed board.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    print(
        "A Minesweeper board consists of `_` (covered), `?` (probe), "
        "`*` (mine), `s` (safe) and numbers 0-8 (mines around).",
        file=stdout,
    )
    print(
        "Enter a board with exactly one probe (ending with EOF), "
        "or nothing to use the example:",
        file=stdout,
    )

    raw = stdin.read().strip()
    if not raw:
        raw = EXAMPLE_BOARD
        print("Example board:", file=stdout)
        print(raw, file=stdout)

    try:
        board = Board.from_text(raw)
    except MalformedBoard as exc:
        print(f"Malformed board: {exc}", file=stderr)
        return 1

    resolution = ProbeSolver(board, record_rounds=False).solve()
    print(file=stdout)
    print(VERDICT_MESSAGES[resolution.verdict], file=stdout)
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run_cli())
