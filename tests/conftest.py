"""
Pytest fixtures: scripted opponent, recording presenter / sound sink, instant sleep
"""
from __future__ import annotations

from typing import Any, Dict, List

import pytest

from neon_rps.game import OpponentChooser
from neon_rps.presenter import Phase, PhaseEvent, Presenter
from neon_rps.session import GameSession
from neon_rps.sound import SoundBoard


class ScriptedRng:
    """Stands in for random.Random: hands out a fixed sequence of choices."""

    def __init__(self, moves):
        self.moves = list(moves)

    def choice(self, seq):
        return self.moves.pop(0)


class RecordingPresenter(Presenter):
    def __init__(self):
        self.events: List[PhaseEvent] = []

    async def publish(self, event: PhaseEvent) -> None:
        self.events.append(event)

    @property
    def phases(self) -> List[Phase]:
        return [e.phase for e in self.events]


class RecordingSink:
    def __init__(self):
        self.payloads: List[Dict[str, Any]] = []

    async def __call__(self, payload: Dict[str, Any]) -> None:
        self.payloads.append(payload)

    @property
    def cues(self) -> List[str]:
        return [p["cue"] for p in self.payloads]


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_session(presenter, sink, sleeps):
    def _make(opponent=None, max_rounds: int = 5, **kwargs) -> GameSession:
        chooser = OpponentChooser(ScriptedRng(opponent)) if opponent is not None else None
        kwargs.setdefault("presenter", presenter)
        kwargs.setdefault("sound", SoundBoard(sink=sink))
        kwargs.setdefault("sleep", sleeps)
        return GameSession(max_rounds=max_rounds, chooser=chooser, **kwargs)

    return _make
