# -----------------------------
# presenter.py
# -----------------------------
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .game import Choice, RoundOutcome


class Phase(str, Enum):
    COMMITTED = "committed"
    THINKING = "thinking"
    RESOLVED = "resolved"
    REVEALED = "revealed"
    ROUND_COMPLETE = "round_complete"
    MATCH_OVER = "match_over"
    RESET = "reset"
    ERROR = "error"


@dataclass(frozen=True)
class PhaseEvent:
    """Everything a presenter needs to render one phase transition."""
    phase: Phase
    player_score: int
    computer_score: int
    round: int
    max_rounds: int
    player_choice: Optional[Choice] = None
    opponent_choice: Optional[Choice] = None
    outcome: Optional[RoundOutcome] = None
    match_winner: Optional[RoundOutcome] = None
    message: Optional[str] = None
    summary: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        def val(x):
            return x.value if x is not None else None

        return {
            "phase": self.phase.value,
            "scores": {"player": self.player_score, "computer": self.computer_score},
            "round": self.round,
            "max_rounds": self.max_rounds,
            "player_choice": val(self.player_choice),
            "opponent_choice": val(self.opponent_choice),
            "outcome": val(self.outcome),
            "match_winner": val(self.match_winner),
            "message": self.message,
            "summary": self.summary,
        }


class Presenter:
    """Receives phase events from the core. Subclasses render them."""

    async def publish(self, event: PhaseEvent) -> None:
        raise NotImplementedError


class NullPresenter(Presenter):
    async def publish(self, event: PhaseEvent) -> None:
        return None

