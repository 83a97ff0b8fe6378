# -----------------------------
# sound.py
# -----------------------------
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class SoundCue(str, Enum):
    SELECT = "select"
    PLAYER = "player"
    COMPUTER = "computer"
    DRAW = "draw"
    RESET = "reset"
    MATCH_OVER = "matchOver"


@dataclass(frozen=True)
class Tone:
    frequency: int  # Hz
    duration: float  # seconds
    waveform: str


TONES: Dict[SoundCue, Tone] = {
    SoundCue.SELECT: Tone(800, 0.1, "square"),
    SoundCue.PLAYER: Tone(523, 0.3, "triangle"),
    SoundCue.COMPUTER: Tone(277, 0.3, "triangle"),
    SoundCue.DRAW: Tone(440, 0.2, "sine"),
    SoundCue.RESET: Tone(600, 0.2, "sawtooth"),
    SoundCue.MATCH_OVER: Tone(220, 0.5, "square"),
}

SoundSink = Callable[[Dict[str, Any]], Awaitable[None]]


def cue_payload(cue: SoundCue) -> Dict[str, Any]:
    return {"cue": cue.value, **asdict(TONES[cue])}


class SoundBoard:
    """Forwards symbolic cues to a sink. Never raises."""

    def __init__(self, sink: Optional[SoundSink] = None, enabled: bool = True):
        self.sink = sink
        self.enabled = enabled

    async def play(self, cue: SoundCue) -> None:
        if not self.enabled or self.sink is None:
            return
        try:
            await self.sink(cue_payload(cue))
        except Exception as exc:
            # audio is optional
            logger.debug("sound cue %s dropped: %s", cue.value, exc)
