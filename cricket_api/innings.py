# cricket_api/innings.py
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence

from cricket_api.logging_utils import get_logger
from cricket_api.models import Delivery, InningsAggregate, Side
from cricket_api.overs_math import balls_in_current_over, is_over_complete
from cricket_api.rules import ScoringRules

logger = get_logger(__name__)


class InningsCompletedError(RuntimeError):
    """Raised when a delivery is applied to an innings already marked complete."""
    pass


@dataclass(frozen=True)
class DeliveryOutcome:
    """
    Result of applying one delivery: the updated aggregate plus the hints
    the scoring screen needs for its next state.
    """
    aggregate: InningsAggregate

    ball_runs: int
    is_legal: bool
    is_wicket: bool
    rotate_strike: bool
    over_complete: bool
    innings_complete: bool
    target_reached: bool
    display: str

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["aggregate"] = asdict(self.aggregate)
        return d


def _target_reached(total_runs: int, target: Optional[int]) -> bool:
    return target is not None and total_runs >= target


def apply_delivery(
    aggregate: InningsAggregate,
    delivery: Delivery,
    rules: ScoringRules,
    *,
    target: Optional[int] = None,
) -> DeliveryOutcome:
    """
    Applies a single delivery to the innings aggregate.

    - runs: every delivery adds runs off the bat + extras (wides and no-balls too)
    - wickets: any dismissal adds one (run outs included)
    - balls_bowled: legal deliveries only
    - completion: over quota used up, all out, or (chasing) target reached

    The input aggregate is not modified; the updated copy is returned.
    """
    if aggregate.is_completed:
        raise InningsCompletedError("Innings is already completed; no further deliveries can be recorded")

    ball_runs = rules.ball_runs(delivery.runs_off_bat, delivery.extras_runs)
    legal = rules.is_legal_ball(delivery.extras_type)

    updated = replace(
        aggregate,
        total_runs=aggregate.total_runs + ball_runs,
        wickets=aggregate.wickets + (1 if delivery.is_wicket else 0),
        balls_bowled=aggregate.balls_bowled + (1 if legal else 0),
    )

    reached = _target_reached(updated.total_runs, target)
    complete = rules.should_end_innings(updated.balls_bowled, updated.wickets) or reached
    if complete:
        updated = replace(updated, is_completed=True)
        logger.info(
            "Innings complete: %s/%s after %s legal balls (target_reached=%s)",
            updated.total_runs, updated.wickets, updated.balls_bowled, reached,
        )

    over_complete = legal and is_over_complete(
        balls_in_current_over(updated.balls_bowled, balls_per_over=rules.balls_per_over),
        balls_per_over=rules.balls_per_over,
    )

    return DeliveryOutcome(
        aggregate=updated,
        ball_runs=ball_runs,
        is_legal=legal,
        is_wicket=delivery.is_wicket,
        rotate_strike=rules.should_rotate_strike(
            delivery.runs_off_bat, delivery.extras_type, delivery.extras_runs
        ),
        over_complete=over_complete,
        innings_complete=complete,
        target_reached=reached,
        display=rules.display_text(delivery),
    )


def rebuild_aggregate(
    deliveries: Iterable[Delivery],
    rules: ScoringRules,
    *,
    target: Optional[int] = None,
    batting_team: Optional[Side] = None,
) -> InningsAggregate:
    """
    Recomputes an innings aggregate from its remaining deliveries, e.g.
    after the last ball has been deleted.

    Unlike apply_delivery this never rejects: completion is re-derived
    from the final totals, so deleting the ball that ended an innings
    reopens it.
    """
    total_runs = 0
    wickets = 0
    balls_bowled = 0

    for d in deliveries:
        total_runs += rules.ball_runs(d.runs_off_bat, d.extras_runs)
        if rules.is_legal_ball(d.extras_type):
            balls_bowled += 1
        if d.is_wicket:
            wickets += 1

    complete = rules.should_end_innings(balls_bowled, wickets) or _target_reached(total_runs, target)

    return InningsAggregate(
        total_runs=total_runs,
        wickets=wickets,
        balls_bowled=balls_bowled,
        is_completed=complete,
        batting_team=batting_team,
    )


def current_over_deliveries(
    recent: Sequence[Delivery],
    *,
    needs_new_over: bool = False,
) -> List[Delivery]:
    """
    Deliveries of the over in progress, for the "this over" strip.

    recent is newest-first and must carry over_number. Returns an empty
    list when the over has just been completed and a new one is due.
    """
    if needs_new_over or not recent:
        return []

    current_over = recent[0].over_number
    return [d for d in recent if d.over_number == current_over]
