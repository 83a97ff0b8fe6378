# -----------------------------
# game.py
# -----------------------------
from __future__ import annotations
import random
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InvalidChoiceError(ValueError):
    """Raised when something that is not a Choice reaches the game logic."""


class Choice(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class RoundOutcome(str, Enum):
    PLAYER_WINS = "player"
    COMPUTER_WINS = "computer"
    DRAW = "draw"


CHOICES: Tuple[Choice, ...] = (Choice.ROCK, Choice.PAPER, Choice.SCISSORS)

# BEATS[x] -> the choice that x defeats
BEATS: Dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.PAPER: Choice.ROCK,
    Choice.SCISSORS: Choice.PAPER,
}


def require_choice(value: Any) -> Choice:
    if not isinstance(value, Choice):
        raise InvalidChoiceError(f"not a Choice: {value!r}")
    return value


def parse_choice(value: Any) -> Choice:
    """Case-insensitive 'rock' | 'paper' | 'scissors' -> Choice."""
    if isinstance(value, Choice):
        return value
    if not isinstance(value, str):
        raise InvalidChoiceError(f"not a Choice: {value!r}")
    try:
        return Choice(value.strip().lower())
    except ValueError:
        raise InvalidChoiceError(f"not a Choice: {value!r}") from None


def resolve(player: Choice, opponent: Choice) -> RoundOutcome:
    require_choice(player)
    require_choice(opponent)
    if player is opponent:
        return RoundOutcome.DRAW
    if BEATS[player] is opponent:
        return RoundOutcome.PLAYER_WINS
    return RoundOutcome.COMPUTER_WINS


def match_winner(player_score: int, computer_score: int) -> RoundOutcome:
    if player_score > computer_score:
        return RoundOutcome.PLAYER_WINS
    if computer_score > player_score:
        return RoundOutcome.COMPUTER_WINS
    return RoundOutcome.DRAW


class OpponentChooser:
    """Uniform random opponent.

    `rng` is anything with a ``choice(seq)`` method; a fresh ``random.Random``
    is used when none is given.
    """

    def __init__(self, rng: Optional[Any] = None):
        self.rng = rng if rng is not None else random.Random()

    def choose(self) -> Choice:
        return require_choice(self.rng.choice(CHOICES))
