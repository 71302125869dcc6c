"""
Minesweeper Probe Checker

Decides whether the single probe cell of a Minesweeper board snapshot is
provably safe, provably a mine, or undetermined:
- Board model: parsed labels, validation and 8-neighborhoods
- Fact extraction: clue, covered-neighbor and known-mine-neighbor facts
- Constraint propagation: saturation and exhaustion rules run to a fixpoint
- Verdict resolution: safe / mine / undetermined / inconsistent
"""

from .board import Board, Label, LabelKind, MalformedBoard, parse_label
from .engine import Derivation, PropagationEngine, RoundDelta, propagate
from .facts import SeedFacts, extract_facts
from .solver import ProbeSolver, check_probe
from .verdict import Resolution, Verdict, resolve_verdict

__version__ = "1.0.0"

__all__ = [
    # Board model
    "Board",
    "Label",
    "LabelKind",
    "MalformedBoard",
    "parse_label",
    # Inference
    "SeedFacts",
    "extract_facts",
    "Derivation",
    "PropagationEngine",
    "RoundDelta",
    "propagate",
    "Resolution",
    "Verdict",
    "resolve_verdict",
    # Entry points
    "ProbeSolver",
    "check_probe",
]
