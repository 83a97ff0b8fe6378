# -----------------------------
# session.py
# -----------------------------
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional

from .game import Choice, OpponentChooser
from .match import InputGate, MatchController
from .presenter import PhaseEvent, Presenter
from .rounds import RoundController, Sleep, Timings
from .sound import SoundBoard

logger = logging.getLogger(__name__)


class GameSession:
    """One player, one match at a time. Wires gate, match and round controller."""

    def __init__(
        self,
        presenter: Optional[Presenter] = None,
        sound: Optional[SoundBoard] = None,
        max_rounds: int = 5,
        chooser: Optional[OpponentChooser] = None,
        timings: Optional[Timings] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.match = MatchController(max_rounds=max_rounds, presenter=presenter, sound=sound)
        self.gate = InputGate(self.match)
        self.rounds = RoundController(
            self.match, self.gate, chooser=chooser, timings=timings, sleep=sleep
        )
        self.round_task: Optional[asyncio.Task] = None

    @classmethod
    def from_settings(cls, settings, presenter: Optional[Presenter] = None, sound_sink=None) -> "GameSession":
        return cls(
            presenter=presenter,
            sound=SoundBoard(sink=sound_sink, enabled=settings.sound_enabled),
            max_rounds=settings.max_rounds,
            timings=Timings.from_settings(settings),
        )

    @property
    def state(self):
        return self.match.state

    def submit_choice(self, choice: Choice) -> Optional["asyncio.Task[List[PhaseEvent]]"]:
        """
        Start a round if the gate is open. Input that arrives while a round
        runs or after the match ended is dropped (returns None), never queued.
        Must be called from inside the running event loop.
        """
        if not self.gate.try_begin_round(choice):
            logger.debug("dropped %s (status=%s)", choice.value, self.state.status.value)
            return None
        self.round_task = asyncio.get_running_loop().create_task(self.rounds.play_round(choice))
        return self.round_task

    async def request_reset(self) -> bool:
        return await self.match.reset()

    async def wait_idle(self) -> None:
        if self.round_task is not None:
            await self.round_task

    def snapshot(self) -> Dict[str, Any]:
        return self.state.snapshot()

    async def close(self) -> None:
        task = self.round_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
