# cricket_api/overs_math.py
from __future__ import annotations

from typing import Optional, Union

from cricket_api.scoring import BALLS_PER_OVER

OversLike = Union[str, int, float]


def overs_to_balls(overs: OversLike, *, balls_per_over: int = BALLS_PER_OVER) -> int:
    """
    Converts cricket overs notation to legal balls.

    Supported inputs:
    - "20.0", "19.4", "7.2" (string overs notation)
    - 20 (int overs)
    - 19.4 (float) -> treated as "19.4" (strings preferred)

    Rule: ".x" means x balls (0-5). Example: 19.4 = 19*6 + 4 = 118 balls.
    """
    if overs is None:
        raise ValueError("Overs cannot be None")

    s = str(overs).strip()
    if not s:
        raise ValueError("Overs cannot be empty")

    # Allow plain integer overs "20"
    if "." not in s:
        ov_i = int(s)
        if ov_i < 0:
            raise ValueError(f"Invalid overs: {overs}")
        return ov_i * balls_per_over

    ov_part, ball_part = s.split(".", 1)
    ov_i = int(ov_part) if ov_part else 0

    ball_part = ball_part.strip()
    balls_i = int(ball_part) if ball_part else 0

    if ov_i < 0:
        raise ValueError(f"Invalid overs: {overs}")
    if balls_i < 0 or balls_i >= balls_per_over:
        raise ValueError(f"Invalid overs format: {overs} (balls part must be 0-{balls_per_over - 1})")

    return ov_i * balls_per_over + balls_i


def balls_to_overs(legal_balls: int, *, balls_per_over: int = BALLS_PER_OVER) -> str:
    """
    Display form of overs bowled: 33 balls -> "5.3", 120 balls -> "20".
    """
    if legal_balls <= 0:
        return "0"
    complete_overs, remaining = divmod(legal_balls, balls_per_over)
    if remaining == 0:
        return str(complete_overs)
    return f"{complete_overs}.{remaining}"


def format_score(runs: int, wickets: int) -> str:
    return f"{runs}/{wickets}"


def run_rate(runs: int, legal_balls: int, *, balls_per_over: int = BALLS_PER_OVER) -> Optional[float]:
    """
    Current run rate (runs per over) using total runs, extras included.
    None until a legal ball has been bowled.
    """
    if legal_balls <= 0:
        return None
    return runs * balls_per_over / legal_balls


def required_run_rate(
    target: int,
    current_runs: int,
    balls_remaining: int,
    *,
    balls_per_over: int = BALLS_PER_OVER,
) -> Optional[float]:
    """
    Runs per over needed to reach target. None when no balls remain
    or no runs are needed.
    """
    runs_needed = target - current_runs
    if balls_remaining <= 0 or runs_needed <= 0:
        return None
    return runs_needed * balls_per_over / balls_remaining


def format_run_rate(rr: Optional[float]) -> str:
    if rr is None or rr != rr or rr in (float("inf"), float("-inf")):
        return "-"
    return f"{rr:.2f}"


# -----------------------------
# Over progress
# -----------------------------
def balls_in_current_over(legal_balls: int, *, balls_per_over: int = BALLS_PER_OVER) -> int:
    """
    Legal balls bowled in the over in progress. A completed over reports
    balls_per_over (not 0) so the UI can offer "start new over".
    """
    if legal_balls <= 0:
        return 0
    remaining = legal_balls % balls_per_over
    return balls_per_over if remaining == 0 else remaining


def is_over_complete(legal_balls_in_over: int, *, balls_per_over: int = BALLS_PER_OVER) -> bool:
    return legal_balls_in_over >= balls_per_over

