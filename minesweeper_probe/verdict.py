"""Verdict resolver: read the derived fact sets for the probe cell."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet

from .engine import Derivation
from .utils import Coordinate

logger = logging.getLogger(__name__)


class Verdict(Enum):
    SAFE = "safe"
    MINE = "mine"
    UNDETERMINED = "undetermined"
    INCONSISTENT = "inconsistent"


@dataclass(frozen=True)
class Resolution:
    verdict: Verdict
    probe: Coordinate
    conflicts: FrozenSet[Coordinate] = frozenset()


def resolve_verdict(derivation: Derivation, probe: Coordinate) -> Resolution:
    """
    Map the final fact sets to exactly one verdict for the probe.

    Any cell forced both ways makes the whole board inconsistent, even when
    the probe itself is forced only one way.
    """
    conflicts = derivation.conflicts
    if conflicts:
        logger.warning(
            "Board is inconsistent: %d cell(s) forced both mine and safe: %s",
            len(conflicts),
            sorted(conflicts),
        )
        return Resolution(Verdict.INCONSISTENT, probe, conflicts)

    if probe in derivation.forced_safe:
        verdict = Verdict.SAFE
    elif probe in derivation.forced_mine:
        verdict = Verdict.MINE
    else:
        verdict = Verdict.UNDETERMINED

    logger.info("Probe %s resolved as %s", probe, verdict.value)
    return Resolution(verdict, probe)
