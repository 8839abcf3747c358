# cricket_api/stats.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from cricket_api.models import Delivery
from cricket_api.overs_math import balls_to_overs
from cricket_api.scoring import BALLS_PER_OVER, calculate_ball_runs, is_legal_ball


@dataclass
class OverRecord:
    """One over of an innings: its bowler and deliveries in bowling order."""
    over_number: int
    bowler_id: Optional[str] = None
    deliveries: List[Delivery] = field(default_factory=list)


@dataclass
class BattingStats:
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0


@dataclass
class BowlingStats:
    runs: int = 0
    legal_balls: int = 0
    maidens: int = 0
    wickets: int = 0


def batting_stats(deliveries: Sequence[Delivery]) -> Dict[str, BattingStats]:
    """
    Per-striker batting figures. Balls faced counts legal deliveries only.
    Deliveries without a striker_id are skipped.
    """
    out: Dict[str, BattingStats] = {}
    for d in deliveries:
        if not d.striker_id:
            continue
        bs = out.setdefault(d.striker_id, BattingStats())
        bs.runs += d.runs_off_bat
        if is_legal_ball(d.extras_type):
            bs.balls += 1
        if d.runs_off_bat == 4:
            bs.fours += 1
        elif d.runs_off_bat == 6:
            bs.sixes += 1
    return out


def bowling_stats(overs: Sequence[OverRecord], *, balls_per_over: int = BALLS_PER_OVER) -> Dict[str, BowlingStats]:
    """
    Per-bowler figures.

    - runs: everything conceded, byes and leg-byes included
    - wickets: all dismissals except run outs
    - maiden: a full over of legal balls with no runs conceded
    """
    out: Dict[str, BowlingStats] = {}
    for over in overs:
        if not over.bowler_id:
            continue
        bw = out.setdefault(over.bowler_id, BowlingStats())

        runs_this_over = 0
        legal_this_over = 0
        for d in over.deliveries:
            runs_this_over += calculate_ball_runs(d.runs_off_bat, d.extras_runs)
            if is_legal_ball(d.extras_type):
                legal_this_over += 1
            if d.is_wicket and d.wicket_type != "RunOut":
                bw.wickets += 1

        bw.runs += runs_this_over
        bw.legal_balls += legal_this_over
        if runs_this_over == 0 and legal_this_over == balls_per_over:
            bw.maidens += 1
    return out


def total_extras(deliveries: Sequence[Delivery]) -> int:
    return sum(d.extras_runs for d in deliveries)


# -----------------------------
# Dismissal text
# -----------------------------
def format_dismissal(
    delivery: Delivery,
    bowler_name: Optional[str],
    player_names: Mapping[str, str],
) -> Optional[str]:
    """
    Scorecard dismissal text, e.g. "c Smith b Jones", "lbw b Jones",
    "run out (Smith)". Returns None for deliveries without a wicket.
    """
    wt = delivery.wicket_type
    fielder = player_names.get(delivery.fielder_id) if delivery.fielder_id else None
    keeper = player_names.get(delivery.keeper_id) if delivery.keeper_id else None

    if wt == "Bowled":
        return f"b {bowler_name}" if bowler_name else "b"
    if wt == "LBW":
        return f"lbw b {bowler_name}" if bowler_name else "lbw"
    if wt == "HitWicket":
        return f"hit wicket b {bowler_name}" if bowler_name else "hit wicket"

    if wt == "Caught":
        if fielder and bowler_name:
            return f"c {fielder} b {bowler_name}"
        if bowler_name:
            return f"c b {bowler_name}"
        if fielder:
            return f"c {fielder}"
        return "c"

    if wt == "Stumps":
        if keeper and bowler_name:
            return f"stumped {keeper} b {bowler_name}"
        if bowler_name:
            return f"stumped b {bowler_name}"
        if keeper:
            return f"stumped {keeper}"
        return "stumped"

    if wt == "RunOut":
        return f"run out ({fielder})" if fielder else "run out"

    return None


def dismissal_map(overs: Sequence[OverRecord], player_names: Mapping[str, str]) -> Dict[str, str]:
    """dismissed player id -> dismissal text (first dismissal wins)."""
    out: Dict[str, str] = {}
    for over in overs:
        bowler_name = player_names.get(over.bowler_id) if over.bowler_id else None
        for d in over.deliveries:
            if not d.is_wicket or not d.dismissed_player_id or d.dismissed_player_id in out:
                continue
            text = format_dismissal(d, bowler_name, player_names)
            if text:
                out[d.dismissed_player_id] = text
    return out


def format_strike_rate(runs: int, balls: int) -> str:
    if balls == 0:
        return "-"
    return f"{runs * 100 / balls:.2f}"


def format_economy(runs: int, legal_balls: int, *, balls_per_over: int = BALLS_PER_OVER) -> str:
    if legal_balls == 0:
        return "-"
    return f"{runs * balls_per_over / legal_balls:.2f}"


# -----------------------------
# Scorecard rows
# -----------------------------
def _batting_status(player_id: str, dismissals: Mapping[str, str], retirements: Mapping[str, str]) -> str:
    if player_id in dismissals:
        return dismissals[player_id]
    if retirements.get(player_id):
        return "Retired"
    return "not out"


def build_scorecard(
    overs: Sequence[OverRecord],
    player_names: Mapping[str, str],
    *,
    retirements: Optional[Mapping[str, str]] = None,
    balls_per_over: int = BALLS_PER_OVER,
) -> dict:
    """
    Batting and bowling rows for one innings, in the shape the scoreboard
    renders. Batters are listed in order of first appearance.

    retirements maps player id -> reason. A retired batter shows "Retired"
    instead of "not out"; a later dismissal still takes precedence.
    """
    retirements = retirements or {}
    deliveries = [d for over in overs for d in over.deliveries]
    batting = batting_stats(deliveries)
    bowling = bowling_stats(overs, balls_per_over=balls_per_over)
    dismissals = dismissal_map(overs, player_names)

    batting_rows: List[dict] = []
    for player_id, bs in batting.items():
        batting_rows.append({
            "player_id": player_id,
            "name": player_names.get(player_id, player_id),
            "dismissal": _batting_status(player_id, dismissals, retirements),
            "retired_reason": retirements.get(player_id) if player_id not in dismissals else None,
            "runs": bs.runs,
            "balls": bs.balls,
            "fours": bs.fours,
            "sixes": bs.sixes,
            "strike_rate": format_strike_rate(bs.runs, bs.balls),
        })

    bowling_rows: List[dict] = []
    for player_id, bw in bowling.items():
        bowling_rows.append({
            "player_id": player_id,
            "name": player_names.get(player_id, player_id),
            "overs": balls_to_overs(bw.legal_balls, balls_per_over=balls_per_over),
            "maidens": bw.maidens,
            "runs": bw.runs,
            "wickets": bw.wickets,
            "economy": format_economy(bw.runs, bw.legal_balls, balls_per_over=balls_per_over),
        })

    return {
        "batting": batting_rows,
        "bowling": bowling_rows,
        "extras": total_extras(deliveries),
    }
