"""NEON RPS: best-of-N rock/paper/scissors against a random CPU."""

from .game import Choice, InvalidChoiceError, OpponentChooser, RoundOutcome, resolve
from .match import InputGate, MatchController, MatchState, MatchStateError, MatchStatus
from .presenter import Phase, PhaseEvent, Presenter
from .rounds import RoundController, Timings
from .session import GameSession
from .sound import SoundBoard, SoundCue

__version__ = "0.1.0"
