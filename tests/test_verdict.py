import logging

import pytest

from minesweeper_probe.engine import Derivation
from minesweeper_probe.verdict import Verdict, resolve_verdict

PROBE = (1, 1)


def make_derivation(mine=(), safe=()):
    return Derivation(forced_mine=frozenset(mine), forced_safe=frozenset(safe), rounds=1)


@pytest.mark.parametrize(
    "mine, safe, expected",
    [
        ((), [PROBE], Verdict.SAFE),
        ([PROBE], (), Verdict.MINE),
        ((), (), Verdict.UNDETERMINED),
        ([(0, 0)], [(0, 1)], Verdict.UNDETERMINED),
        ([PROBE], [PROBE], Verdict.INCONSISTENT),
    ],
)
def test_verdicts(mine, safe, expected):
    resolution = resolve_verdict(make_derivation(mine, safe), PROBE)
    assert resolution.verdict is expected
    assert resolution.probe == PROBE


def test_conflict_elsewhere_makes_board_inconsistent():
    derivation = make_derivation(mine=[(0, 0)], safe=[PROBE, (0, 0)])

    resolution = resolve_verdict(derivation, PROBE)

    assert resolution.verdict is Verdict.INCONSISTENT
    assert resolution.conflicts == frozenset({(0, 0)})


def test_inconsistency_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="minesweeper_probe.verdict"):
        resolve_verdict(make_derivation([PROBE], [PROBE]), PROBE)

    assert "inconsistent" in caplog.text
