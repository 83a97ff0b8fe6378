"""
# history.py
In-session round log helpers. Nothing here is written to disk.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from .game import CHOICES, Choice, RoundOutcome

COLUMNS = ["round", "player_choice", "opponent_choice", "outcome"]


@dataclass(frozen=True)
class RoundRecord:
    round: int
    player_choice: Choice
    opponent_choice: Choice
    outcome: RoundOutcome


def rounds_dataframe(history: List[RoundRecord]) -> pd.DataFrame:
    """One row per played round, enum values flattened to strings."""
    rows = [
        {
            "round": r.round,
            "player_choice": r.player_choice.value,
            "opponent_choice": r.opponent_choice.value,
            "outcome": r.outcome.value,
        }
        for r in history
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(history: List[RoundRecord]) -> Dict[str, Any]:
    """
    Totals for the match-over screen.
    `by_choice` maps each player choice to its win/loss/draw counts.
    """
    df = rounds_dataframe(history)
    counts = df["outcome"].value_counts()
    favourite: Optional[str] = None
    if not df.empty:
        usage = df["player_choice"].value_counts()
        # ties broken by rock/paper/scissors order
        top = usage.max()
        favourite = next(c.value for c in CHOICES if usage.get(c.value, 0) == top)

    table = pd.crosstab(df["player_choice"], df["outcome"]) if not df.empty else pd.DataFrame()
    by_choice: Dict[str, Dict[str, int]] = {}
    for c in CHOICES:
        by_choice[c.value] = {
            o.value: int(table.at[c.value, o.value])
            if c.value in table.index and o.value in table.columns
            else 0
            for o in RoundOutcome
        }

    return {
        "rounds": int(len(df)),
        "wins": int(counts.get(RoundOutcome.PLAYER_WINS.value, 0)),
        "losses": int(counts.get(RoundOutcome.COMPUTER_WINS.value, 0)),
        "draws": int(counts.get(RoundOutcome.DRAW.value, 0)),
        "favourite_choice": favourite,
        "by_choice": by_choice,
    }
