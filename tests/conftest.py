import pytest

from minesweeper_probe.solver import EXAMPLE_BOARD

# Probe sits under a clue whose remaining mine count equals its covered cells.
EXHAUSTED_PROBE_BOARD = """
_ _ 2 _ 3 _
2 _ _ * * 3
1 1 2 4 _ 3
1 _ 3 4 _ 2
2 * ? * _ 3
_ 3 3 3 * *
"""

# (3,3) forces (3,4) as a mine, which then saturates (4,4) and (4,5) onto the probe.
CASCADE_BOARD = """
* 2 2 2 3 *
2 _ 2 * * 3
1 1 2 4 * _
1 2 3 4 _ ?
2 _ * * 4 3
* 3 3 3 * *
"""

# (0,1) is saturated by its mine while (0,3) needs the probe as its only mine.
CONTRADICTION_BOARD = """
* 1 ? 1 s
"""

# Probe is safe under a 0 clue, but (0,2) is forced both ways.
REMOTE_CONTRADICTION_BOARD = """
* 1 _ 1 s
s s s s s
? 0 s s s
"""

# (0,4) shows 2 but touches three revealed mines.
OVER_MINED_BOARD = """
* 2 2 2 2 *
2 _ 2 * * 3
_ _ _ _ * 3
_ _ ? _ _ _
2 _ _ _ 4 2
* 3 3 3 _ _
"""


@pytest.fixture
def example_board_text():
    return EXAMPLE_BOARD


@pytest.fixture
def exhausted_probe_board_text():
    return EXHAUSTED_PROBE_BOARD


@pytest.fixture
def cascade_board_text():
    return CASCADE_BOARD


@pytest.fixture
def contradiction_board_text():
    return CONTRADICTION_BOARD


@pytest.fixture
def remote_contradiction_board_text():
    return REMOTE_CONTRADICTION_BOARD


@pytest.fixture
def over_mined_board_text():
    return OVER_MINED_BOARD
