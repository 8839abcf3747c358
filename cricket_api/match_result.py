# cricket_api/match_result.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from cricket_api.config import MAX_WICKETS
from cricket_api.models import InningsAggregate, MatchStatus, Side


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    winner: Optional[Side] = None

    @property
    def is_tie(self) -> bool:
        return self.status == "Completed" and self.winner is None


def _other_side(side: Side) -> Side:
    return "B" if side == "A" else "A"


def decide_match_result(
    first: InningsAggregate,
    second: Optional[InningsAggregate] = None,
    *,
    second_complete: Optional[bool] = None,
    target: Optional[int] = None,
) -> MatchResult:
    """
    Match status after the latest delivery.

    Rules:
    - first innings only: "Innings Break" once it is complete, else "Live"
    - chase target = first innings runs + 1 unless a revised target is given
    - chase complete and target reached -> chasing side wins
    - chase complete one short of target -> tie (winner None)
    - chase complete and short          -> side batting first wins
    - otherwise the chase is still "Live"

    second_complete defaults to second.is_completed.
    """
    if second is None:
        return MatchResult(status="Innings Break" if first.is_completed else "Live")

    complete = second.is_completed if second_complete is None else bool(second_complete)
    if not complete:
        return MatchResult(status="Live")

    if target is None:
        target = first.total_runs + 1
    defending = first.batting_team
    chasing = second.batting_team
    if chasing is None and defending is not None:
        chasing = _other_side(defending)
    if defending is None and chasing is not None:
        defending = _other_side(chasing)

    if second.total_runs >= target:
        return MatchResult(status="Completed", winner=chasing)
    if second.total_runs == target - 1:
        return MatchResult(status="Completed", winner=None)
    return MatchResult(status="Completed", winner=defending)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def result_text(
    result: MatchResult,
    first: InningsAggregate,
    second: InningsAggregate,
    *,
    team_names: Dict[str, str],
    max_wickets: int = MAX_WICKETS,
) -> Optional[str]:
    """
    Margin-of-victory text for a completed match.

      "Strikers won by 12 runs"     side batting first won
      "Chargers won by 4 wickets"   chasing side won
      "Match tied"
    """
    if result.status != "Completed":
        return None

    if result.winner is None:
        return "Match tied"

    winner_name = team_names.get(result.winner, result.winner)

    if result.winner == first.batting_team:
        margin = max(first.total_runs - second.total_runs, 0)
        if margin == 0:
            return f"{winner_name} won the match"
        return f"{winner_name} won by {_plural(margin, 'run')}"

    wickets_remaining = max(max_wickets - second.wickets, 1)
    return f"{winner_name} won by {_plural(wickets_remaining, 'wicket')}"
