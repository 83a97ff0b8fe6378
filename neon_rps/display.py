from __future__ import annotations
from typing import Any, Dict, Optional

from .game import Choice, RoundOutcome
from .presenter import Phase, PhaseEvent

EMOJI = {Choice.ROCK: "🗿", Choice.PAPER: "📄", Choice.SCISSORS: "✂️"}
THINKING_EMOJI = "🤖"
PLACEHOLDER = "?"

KEY_BINDINGS: Dict[str, Choice] = {
    "1": Choice.ROCK,
    "2": Choice.PAPER,
    "3": Choice.SCISSORS,
    "r": Choice.ROCK,
    "p": Choice.PAPER,
    "s": Choice.SCISSORS,
}

STATUS_GREETING = "Neural interface online. Select your weapon..."
STATUS_THINKING = "CPU analyzing optimal strategy..."
STATUS_NEXT_ROUND = "Select your next protocol..."
STATUS_RESET = "New tournament initialized. Make your choice..."

MATCH_OVER_COPY: Dict[RoundOutcome, Dict[str, str]] = {
    RoundOutcome.PLAYER_WINS: {
        "title": "SYSTEM COMPROMISED",
        "result": "HUMAN VICTORY ACHIEVED",
        "description": "You have successfully breached the mainframe!",
    },
    RoundOutcome.COMPUTER_WINS: {
        "title": "ACCESS DENIED",
        "result": "COMPUTER DEFENSE SUCCESSFUL",
        "description": "The artificial intelligence has prevailed!",
    },
    RoundOutcome.DRAW: {
        "title": "EQUILIBRIUM STATE",
        "result": "NEURAL PARITY DETECTED",
        "description": "Human and AI capabilities are perfectly matched!",
    },
}


def choice_for_key(key: Optional[str]) -> Optional[Choice]:
    """Keyboard shortcut -> Choice, None for keys that mean nothing."""
    if not isinstance(key, str) or not key:
        return None
    return KEY_BINDINGS.get(key.lower())


def emoji(choice: Optional[Choice]) -> str:
    return EMOJI.get(choice, PLACEHOLDER) if choice is not None else PLACEHOLDER


def result_banner(outcome: RoundOutcome, player: Choice, opponent: Choice) -> Dict[str, str]:
    if outcome is RoundOutcome.DRAW:
        return {"main": "NEURAL SYNC", "sub": "Both entities selected identical protocols"}
    p, o = player.value.upper(), opponent.value.upper()
    if outcome is RoundOutcome.PLAYER_WINS:
        return {"main": "SYSTEM BREACH", "sub": f"Your {p} protocol defeated COMPUTER {o}"}
    return {"main": "FIREWALL ACTIVE", "sub": f"COMPUTER {o} blocked your {p} attempt"}


def status_line(event: PhaseEvent) -> Optional[str]:
    if event.phase is Phase.THINKING:
        return STATUS_THINKING
    if event.phase is Phase.REVEALED:
        return f"Round {event.round} complete"
    if event.phase is Phase.ROUND_COMPLETE:
        return STATUS_NEXT_ROUND
    if event.phase is Phase.RESET:
        return STATUS_RESET
    if event.phase is Phase.ERROR:
        return event.message
    return None


def render(event: PhaseEvent) -> Dict[str, Any]:
    """Display hints sent to the browser alongside the raw event."""
    out: Dict[str, Any] = {
        "player_face": emoji(event.player_choice),
        "computer_face": emoji(event.opponent_choice),
        "status": status_line(event),
    }
    if event.phase is Phase.THINKING:
        out["computer_face"] = THINKING_EMOJI
    if event.phase is Phase.REVEALED and event.outcome is not None:
        out["banner"] = result_banner(event.outcome, event.player_choice, event.opponent_choice)
    if event.phase is Phase.MATCH_OVER and event.match_winner is not None:
        out["modal"] = MATCH_OVER_COPY[event.match_winner]
    return out
