# cricket_api/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from cricket_api import scoring
from cricket_api.config import (
    BALLS_PER_OVER,
    DEFAULT_MATCH_FORMAT,
    MAX_WICKETS,
)
from cricket_api.models import Delivery, ExtrasType


class UnknownFormatError(ValueError):
    """Raised when a match format name or overs value cannot be resolved."""
    pass


@dataclass(frozen=True)
class ScoringRules:
    """
    The scoring rules for one match format.

    Every caller goes through this object instead of the free functions in
    scoring.py, so formats (T20, ODI, super over...) differ only by values.
    """
    overs_per_innings: int
    balls_per_over: int = BALLS_PER_OVER
    max_wickets: int = MAX_WICKETS
    name: str = "CUSTOM"

    @property
    def max_legal_balls(self) -> int:
        return self.overs_per_innings * self.balls_per_over

    def is_legal_ball(self, extras_type: ExtrasType) -> bool:
        return scoring.is_legal_ball(extras_type)

    def ball_runs(self, runs_off_bat: int, extras_runs: int) -> int:
        return scoring.calculate_ball_runs(runs_off_bat, extras_runs)

    def should_rotate_strike(self, runs_off_bat: int, extras_type: ExtrasType, extras_runs: int) -> bool:
        return scoring.should_rotate_strike(runs_off_bat, extras_type, extras_runs)

    def should_end_innings(self, legal_balls: int, wickets: int) -> bool:
        return scoring.should_end_innings(
            legal_balls,
            wickets,
            self.overs_per_innings,
            balls_per_over=self.balls_per_over,
            max_wickets=self.max_wickets,
        )

    def display_text(self, delivery: Delivery) -> str:
        return scoring.ball_display_text(
            delivery.runs_off_bat,
            delivery.extras_type,
            delivery.extras_runs,
            delivery.wicket_type,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "overs_per_innings": self.overs_per_innings,
            "balls_per_over": self.balls_per_over,
            "max_wickets": self.max_wickets,
            "max_legal_balls": self.max_legal_balls,
        }


# -----------------------------
# Named formats
# -----------------------------
MATCH_FORMATS: Dict[str, ScoringRules] = {
    "T20": ScoringRules(20, name="T20"),
    "ODI": ScoringRules(50, name="ODI"),
    "T10": ScoringRules(10, name="T10"),
    # One over each, two wickets end it
    "SUPER_OVER": ScoringRules(1, max_wickets=2, name="SUPER_OVER"),
}


def rules_for(format_name: Optional[str] = None, overs_per_innings: Optional[int] = None) -> ScoringRules:
    """
    Resolve the rules for a match.

    - format_name picks a preset (defaults to DEFAULT_MATCH_FORMAT)
    - overs_per_innings overrides the preset's overs (tournament matches
      are often shortened, e.g. 8 or 12 overs)
    """
    key = (format_name or DEFAULT_MATCH_FORMAT).strip().upper()
    base = MATCH_FORMATS.get(key)
    if base is None:
        raise UnknownFormatError(f"Unknown match format: {format_name}")

    if overs_per_innings is None:
        return base

    if int(overs_per_innings) <= 0:
        raise UnknownFormatError("overs_per_innings must be positive")

    return ScoringRules(
        overs_per_innings=int(overs_per_innings),
        balls_per_over=base.balls_per_over,
        max_wickets=base.max_wickets,
        name=base.name,
    )
