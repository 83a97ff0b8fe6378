# -----------------------------
# rounds.py
# -----------------------------
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .game import Choice, OpponentChooser, RoundOutcome, resolve
from .match import InputGate, MatchController
from .presenter import Phase, PhaseEvent
from .sound import SoundCue

logger = logging.getLogger(__name__)

ERROR_STATUS = "Error occurred. Please try again."

OUTCOME_CUES: Dict[RoundOutcome, SoundCue] = {
    RoundOutcome.PLAYER_WINS: SoundCue.PLAYER,
    RoundOutcome.COMPUTER_WINS: SoundCue.COMPUTER,
    RoundOutcome.DRAW: SoundCue.DRAW,
}

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class Timings:
    """Presentation pauses, in seconds."""
    thinking: float = 0.8
    reveal: float = 0.6
    next_round: float = 2.0
    match_over: float = 1.5

    @classmethod
    def from_settings(cls, settings) -> "Timings":
        return cls(
            thinking=settings.thinking_delay_ms / 1000,
            reveal=settings.reveal_delay_ms / 1000,
            next_round=settings.next_round_delay_ms / 1000,
            match_over=settings.match_over_delay_ms / 1000,
        )


@dataclass
class RoundSession:
    player_choice: Choice
    opponent_choice: Optional[Choice] = None
    outcome: Optional[RoundOutcome] = None


class RoundController:
    """
    Runs one round after the gate has let it in:
    committed -> thinking -> resolved -> revealed -> round complete | match over.
    """

    def __init__(
        self,
        match: MatchController,
        gate: InputGate,
        chooser: Optional[OpponentChooser] = None,
        timings: Optional[Timings] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.match = match
        self.gate = gate
        self.chooser = chooser or OpponentChooser()
        self.timings = timings or Timings()
        self.sleep = sleep or asyncio.sleep

    async def play_round(self, choice: Choice) -> List[PhaseEvent]:
        events: List[PhaseEvent] = []
        session = RoundSession(player_choice=choice)
        match = self.match
        round_no = match.state.current_round

        async def emit(phase: Phase, **extra: Any) -> None:
            if phase is not Phase.ROUND_COMPLETE:
                extra.update(
                    player_choice=session.player_choice,
                    opponent_choice=session.opponent_choice,
                    outcome=session.outcome,
                )
            event = match.event(phase, **extra)
            events.append(event)
            await match.notify(event)

        try:
            await emit(Phase.COMMITTED)
            await match.sound.play(SoundCue.SELECT)

            await emit(Phase.THINKING)
            await self.sleep(self.timings.thinking)

            session.opponent_choice = self.chooser.choose()
            session.outcome = resolve(session.player_choice, session.opponent_choice)
            match.record_outcome(session.player_choice, session.opponent_choice, session.outcome)
            logger.debug(
                "round %d: %s vs %s -> %s",
                match.state.current_round, session.player_choice.value,
                session.opponent_choice.value, session.outcome.value,
            )
            await emit(Phase.RESOLVED)
            await self.sleep(self.timings.reveal)

            await emit(Phase.REVEALED)
            await match.sound.play(OUTCOME_CUES[session.outcome])

            if match.is_final_round:
                await self.sleep(self.timings.match_over)
                # counter step and match end happen together
                if await match.advance():
                    events.append(match.last_event)
            else:
                await match.advance()
                await self.sleep(self.timings.next_round)
                await emit(Phase.ROUND_COMPLETE)
        except Exception:
            logger.exception("round failed")
            # a round that never advanced leaves no score behind
            match.undo_outcome(round_no)
            await emit(Phase.ERROR, message=ERROR_STATUS)
        finally:
            await self.gate.finish_round()
        return events
