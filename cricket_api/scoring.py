# cricket_api/scoring.py
from __future__ import annotations

from cricket_api import config
from cricket_api.models import LEGAL_EXTRAS, ExtrasType, WicketType

# Defaults for every balls-per-over / wicket-limit parameter (from .env)
BALLS_PER_OVER = config.BALLS_PER_OVER
MAX_WICKETS = config.MAX_WICKETS

DOT_BALL = "•"


def is_legal_ball(extras_type: ExtrasType) -> bool:
    """
    Whether a delivery counts toward the over.

    Byes and leg-byes are still fair deliveries. Wides and no-balls are not:
    the bowler has to bowl the ball again.
    """
    return extras_type in LEGAL_EXTRAS


def calculate_ball_runs(runs_off_bat: int, extras_runs: int) -> int:
    """
    Runs credited to the batting team for one delivery (legal or not).
    """
    return runs_off_bat + extras_runs


def should_rotate_strike(runs_off_bat: int, extras_type: ExtrasType, extras_runs: int) -> bool:
    """
    Default strike-rotation heuristic: batters swap ends on an odd number
    of runs actually run.

    - Wide: never (the wide runs are not run between the wickets here)
    - NoBall: odd runs off the bat; the penalty run does not count
    - Bye / LegBye: odd extras runs
    - Normal ball: odd runs off the bat (4 and 6 are boundaries, even anyway)

    Run-outs with the batters crossing are not modelled; the scorer uses
    the manual change-strike control for those.
    """
    if extras_type == "Wide":
        return False

    if extras_type in ("Bye", "LegBye"):
        return extras_runs % 2 == 1

    # "NoBall" and "None"
    return runs_off_bat % 2 == 1


def should_end_innings(
    legal_balls: int,
    wickets: int,
    overs_allowed: int,
    *,
    balls_per_over: int = BALLS_PER_OVER,
    max_wickets: int = MAX_WICKETS,
) -> bool:
    """
    Innings ends once the over quota is used up (overs_allowed * balls_per_over
    legal balls) or once max_wickets have fallen. Either is enough.
    """
    return legal_balls >= overs_allowed * balls_per_over or wickets >= max_wickets


def ball_display_text(
    runs_off_bat: int,
    extras_type: ExtrasType,
    extras_runs: int,
    wicket_type: WicketType,
) -> str:
    """
    Compact scorecard token for one delivery.

    Examples:
      "W", "1W"        wicket (runs prefixed when any were scored, e.g. run out)
      "Wd", "Wd+2"     wide, plus runs beyond the mandatory one
      "Nb", "Nb+4"     no-ball, plus runs beyond the penalty run
      "1b", "2lb"      byes / leg-byes
      "•", "4"         dot ball / runs off the bat
    """
    if wicket_type != "None":
        total = calculate_ball_runs(runs_off_bat, extras_runs)
        return f"{total}W" if total > 0 else "W"

    if extras_type == "Wide":
        additional = max(extras_runs - 1, 0)
        return f"Wd+{additional}" if additional > 0 else "Wd"

    if extras_type == "NoBall":
        additional = runs_off_bat + max(extras_runs - 1, 0)
        return f"Nb+{additional}" if additional > 0 else "Nb"

    if extras_type == "Bye":
        return f"{extras_runs}b"

    if extras_type == "LegBye":
        return f"{extras_runs}lb"

    if runs_off_bat == 0:
        return DOT_BALL

    return str(runs_off_bat)
