from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Literal


# -----------------------------
# Enumerations (stored values)
# -----------------------------
ExtrasType = Literal["None", "Wide", "NoBall", "Bye", "LegBye"]
WicketType = Literal["None", "Bowled", "Caught", "RunOut", "Stumps", "HitWicket", "LBW"]
Side = Literal["A", "B"]
MatchStatus = Literal["Upcoming", "Starting Soon", "Live", "Innings Break", "Completed"]

EXTRAS_TYPES = ("None", "Wide", "NoBall", "Bye", "LegBye")
WICKET_TYPES = ("None", "Bowled", "Caught", "RunOut", "Stumps", "HitWicket", "LBW")

# Extras that still count toward the over
LEGAL_EXTRAS = frozenset({"None", "Bye", "LegBye"})


# -----------------------------
# Delivery (one ball bowled)
# -----------------------------
@dataclass(frozen=True)
class Delivery:
    runs_off_bat: int = 0
    extras_type: ExtrasType = "None"
    extras_runs: int = 0
    wicket_type: WicketType = "None"

    # Identifiers carried through for scorecards; the rules never read them
    over_number: Optional[int] = None
    striker_id: Optional[str] = None
    non_striker_id: Optional[str] = None
    bowler_id: Optional[str] = None
    dismissed_player_id: Optional[str] = None
    fielder_id: Optional[str] = None
    keeper_id: Optional[str] = None

    @property
    def is_wicket(self) -> bool:
        return self.wicket_type != "None"


# -----------------------------
# Innings aggregate
# -----------------------------
@dataclass(frozen=True)
class InningsAggregate:
    """
    Running totals for one batting innings.
    balls_bowled counts LEGAL deliveries only (wides / no-balls excluded).
    """
    total_runs: int = 0
    wickets: int = 0
    balls_bowled: int = 0
    is_completed: bool = False

    batting_team: Optional[Side] = None
