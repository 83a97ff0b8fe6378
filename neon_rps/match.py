# -----------------------------
# match.py
# -----------------------------
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from .game import Choice, RoundOutcome, match_winner, require_choice
from .history import RoundRecord, summarize
from .presenter import NullPresenter, Phase, PhaseEvent, Presenter
from .sound import SoundBoard, SoundCue

logger = logging.getLogger(__name__)


class MatchStateError(RuntimeError):
    """Illegal match status transition."""


class MatchStatus(str, Enum):
    IDLE = "idle"
    IN_ROUND = "in_round"
    MATCH_OVER = "match_over"


# IDLE -> IDLE is a reset between rounds
TRANSITIONS: Dict[MatchStatus, Set[MatchStatus]] = {
    MatchStatus.IDLE: {MatchStatus.IN_ROUND, MatchStatus.IDLE},
    MatchStatus.IN_ROUND: {MatchStatus.IDLE, MatchStatus.MATCH_OVER},
    MatchStatus.MATCH_OVER: {MatchStatus.IDLE},
}


@dataclass
class MatchState:
    max_rounds: int = 5
    player_score: int = 0
    computer_score: int = 0
    current_round: int = 1
    status: MatchStatus = MatchStatus.IDLE
    history: List[RoundRecord] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.status is MatchStatus.MATCH_OVER

    @property
    def is_processing(self) -> bool:
        return self.status is MatchStatus.IN_ROUND

    @property
    def draws(self) -> int:
        return sum(1 for r in self.history if r.outcome is RoundOutcome.DRAW)

    @property
    def display_round(self) -> int:
        return min(self.current_round, self.max_rounds)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "player_score": self.player_score,
            "computer_score": self.computer_score,
            "current_round": self.current_round,
            "max_rounds": self.max_rounds,
            "is_over": self.is_over,
            "is_processing": self.is_processing,
        }


class MatchController:
    """Owns the MatchState; every mutation goes through here."""

    def __init__(
        self,
        max_rounds: int = 5,
        presenter: Optional[Presenter] = None,
        sound: Optional[SoundBoard] = None,
    ):
        if max_rounds < 1:
            raise ValueError("max_rounds must be >= 1")
        self.state = MatchState(max_rounds=max_rounds)
        self.presenter = presenter or NullPresenter()
        self.sound = sound or SoundBoard()
        self.winner: Optional[RoundOutcome] = None
        self.reset_pending = False
        self.last_event: Optional[PhaseEvent] = None

    # --- status ---

    def _move(self, to: MatchStatus) -> None:
        current = self.state.status
        if to not in TRANSITIONS[current]:
            raise MatchStateError(f"cannot go from {current.value} to {to.value}")
        self.state.status = to

    def open_round(self) -> None:
        self._move(MatchStatus.IN_ROUND)

    async def close_round(self) -> None:
        if self.state.status is MatchStatus.IN_ROUND:
            self._move(MatchStatus.IDLE)
        if self.reset_pending:
            await self.reset()

    @property
    def is_final_round(self) -> bool:
        return self.state.current_round >= self.state.max_rounds

    # --- presentation ---

    def event(self, phase: Phase, **extra: Any) -> PhaseEvent:
        s = self.state
        return PhaseEvent(
            phase=phase,
            player_score=s.player_score,
            computer_score=s.computer_score,
            round=s.display_round,
            max_rounds=s.max_rounds,
            **extra,
        )

    async def notify(self, event: PhaseEvent) -> None:
        self.last_event = event
        try:
            await self.presenter.publish(event)
        except Exception:
            logger.warning("presenter failed on %s", event.phase.value, exc_info=True)

    # --- round steps ---

    def record_outcome(self, player: Choice, opponent: Choice, outcome: RoundOutcome) -> None:
        """Score update for the round in flight."""
        if not self.state.is_processing:
            raise MatchStateError("scores only change inside a round")
        require_choice(player)
        require_choice(opponent)
        if outcome is RoundOutcome.PLAYER_WINS:
            self.state.player_score += 1
        elif outcome is RoundOutcome.COMPUTER_WINS:
            self.state.computer_score += 1
        self.state.history.append(
            RoundRecord(self.state.current_round, player, opponent, outcome)
        )

    def undo_outcome(self, round_no: int) -> bool:
        """Take back the score of a round that failed before the counter moved."""
        s = self.state
        if not s.is_processing or s.current_round != round_no:
            return False
        if not s.history or s.history[-1].round != round_no:
            return False
        record = s.history.pop()
        if record.outcome is RoundOutcome.PLAYER_WINS:
            s.player_score -= 1
        elif record.outcome is RoundOutcome.COMPUTER_WINS:
            s.computer_score -= 1
        logger.info("round %d rolled back", round_no)
        return True

    async def advance(self) -> bool:
        """Step the round counter. Returns True when that ended the match."""
        if not self.state.is_processing:
            raise MatchStateError("round counter only moves inside a round")
        self.state.current_round += 1
        if self.state.current_round > self.state.max_rounds:
            await self.end_match()
            return True
        return False

    async def end_match(self) -> RoundOutcome:
        if self.state.is_over:
            raise MatchStateError("match already over")
        self._move(MatchStatus.MATCH_OVER)
        s = self.state
        self.winner = match_winner(s.player_score, s.computer_score)
        logger.info(
            "match over: %s (%d-%d, %d draws)",
            self.winner.value, s.player_score, s.computer_score, s.draws,
        )
        await self.notify(
            self.event(Phase.MATCH_OVER, match_winner=self.winner, summary=summarize(s.history))
        )
        await self.sound.play(SoundCue.MATCH_OVER)
        return self.winner

    async def reset(self) -> bool:
        """
        Start a fresh match. A round that is already running is never cut short:
        the reset is parked and applied when that round closes (returns False).
        """
        if self.state.is_processing:
            logger.info("reset requested mid-round, deferring")
            self.reset_pending = True
            return False

        self._move(MatchStatus.IDLE)
        s = self.state
        s.player_score = 0
        s.computer_score = 0
        s.current_round = 1
        s.history = []
        self.winner = None
        self.reset_pending = False
        logger.info("match reset")
        await self.notify(self.event(Phase.RESET))
        await self.sound.play(SoundCue.RESET)
        return True


class InputGate:
    """Lets at most one round run; closed while a round runs or after the match."""

    def __init__(self, match: MatchController):
        self.match = match

    @property
    def is_open(self) -> bool:
        return self.match.state.status is MatchStatus.IDLE

    def try_begin_round(self, choice: Choice) -> bool:
        require_choice(choice)
        # no await between the check and the status change
        if not self.is_open:
            return False
        self.match.open_round()
        return True

    async def finish_round(self) -> None:
        await self.match.close_round()
