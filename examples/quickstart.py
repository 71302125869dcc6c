"""
Quickstart example for the Minesweeper Probe Checker.

This script demonstrates basic usage of the checker.
"""

from minesweeper_probe import Board, ProbeSolver, check_probe
from minesweeper_probe.analysis import format_derivation, run_verdict_many_tests
from minesweeper_probe.solver import EXAMPLE_BOARD


def main():
    print("=" * 60)
    print("Minesweeper Probe Checker - Quickstart Example")
    print("=" * 60)

    # Example 1: Check the built-in example board
    print("\n1. Checking the 6x6 example board...")
    print("-" * 60)
    print(EXAMPLE_BOARD)

    board = Board.from_text(EXAMPLE_BOARD)
    solver = ProbeSolver(board)
    resolution = solver.solve()
    summary = solver.summary()

    print(f"\nVerdict: {resolution.verdict.value}")
    print(f"Rounds: {summary['rounds']}")
    print(f"Forced mines: {summary['forced_mine_count']}")
    print(f"Forced safe cells: {summary['forced_safe_count']}")

    # Example 2: Show the derived facts on the board
    print("\n2. Derived facts (S = safe, M = mine):")
    print("-" * 60)
    assert solver.derivation is not None
    print(format_derivation(board, solver.derivation))

    # Example 3: One-call check from raw text
    print("\n3. A clue of 1 next to a revealed mine...")
    print("-" * 60)
    print(f"Verdict: {check_probe('* 1 ?').value}")

    # Example 4: Verdict mix on random boards
    print("\n4. Verdict mix over 200 random 9x9 boards with 10 mines...")
    print("-" * 60)

    results = run_verdict_many_tests(9, 9, 10, runs=200, seed=7)
    for name in ("safe", "mine", "undetermined", "inconsistent"):
        print(f"{name:15s}: {results[f'{name}_rate']*100:5.1f}%")
    print(f"Average rounds: {results['avg_rounds']:.2f}")
    print(f"Agreement with exhaustive check: {results['exhaustive_agreement']*100:.1f}%")

    print("\n" + "=" * 60)
    print("Done! See README.md for more detailed usage instructions.")
    print("=" * 60)


if __name__ == "__main__":
    main()
