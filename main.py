# main.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from cricket_api.config import validate_config, LOG_LEVEL, DIALOG_FLAG_TTL_SECONDS
from cricket_api.logging_utils import setup_logging, get_logger
from cricket_api.models import Delivery, InningsAggregate, ExtrasType, WicketType, Side
from cricket_api.rules import MATCH_FORMATS, ScoringRules, UnknownFormatError, rules_for
from cricket_api.innings import InningsCompletedError, apply_delivery, rebuild_aggregate
from cricket_api.validation import DeliveryValidationError, validate_delivery
from cricket_api.match_result import decide_match_result, result_text
from cricket_api.overs_math import (
    balls_in_current_over,
    balls_to_overs,
    format_run_rate,
    format_score,
    overs_to_balls,
    required_run_rate,
    run_rate,
)
from cricket_api.stats import OverRecord, build_scorecard
from cricket_api.interaction import InteractionStore

logger = get_logger("cricket_api.main")

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Cricket Live Scoring API",
    version="0.1.0",
    description="Ball-by-ball scoring rules, innings aggregates, match results and scorecards",
)

app.state.interactions = InteractionStore(ttl_seconds=DIALOG_FLAG_TTL_SECONDS)


@app.on_event("startup")
def on_startup():
    setup_logging(LOG_LEVEL)
    validate_config()
    logger.info("Scoring API started (formats=%s)", ", ".join(sorted(MATCH_FORMATS)))


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Request models
# -----------------------
class DeliveryIn(BaseModel):
    runs_off_bat: int = Field(0, ge=0)
    extras_type: ExtrasType = "None"
    extras_runs: int = Field(0, ge=0)
    wicket_type: WicketType = "None"

    over_number: Optional[int] = Field(None, ge=0)
    striker_id: Optional[str] = None
    non_striker_id: Optional[str] = None
    bowler_id: Optional[str] = None
    dismissed_player_id: Optional[str] = None
    fielder_id: Optional[str] = None
    keeper_id: Optional[str] = None

    def to_delivery(self) -> Delivery:
        return Delivery(**self.model_dump())


class AggregateIn(BaseModel):
    total_runs: int = Field(0, ge=0)
    wickets: int = Field(0, ge=0)
    balls_bowled: int = Field(0, ge=0, description="Legal deliveries only")
    is_completed: bool = False
    batting_team: Optional[Side] = None

    def to_aggregate(self) -> InningsAggregate:
        return InningsAggregate(**self.model_dump())


class RulesIn(BaseModel):
    match_format: Optional[str] = Field(None, description="T20 / ODI / T10 / SUPER_OVER (default from config)")
    overs_per_innings: Optional[int] = Field(None, ge=1, description="Overrides the format's overs")


# -----------------------
# Helpers
# -----------------------
def _resolve_rules(req: RulesIn) -> ScoringRules:
    try:
        return rules_for(req.match_format, req.overs_per_innings)
    except UnknownFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _validated(d: DeliveryIn, *, require_dismissed_player: bool = True) -> Delivery:
    delivery = d.to_delivery()
    try:
        validate_delivery(delivery, require_dismissed_player=require_dismissed_player)
    except DeliveryValidationError as e:
        logger.warning("Rejected delivery: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return delivery


def _check_sides(first: InningsAggregate, second: Optional[InningsAggregate]) -> None:
    # The winner is reported by side, so at least one innings must say who batted
    if first.batting_team is None and (second is None or second.batting_team is None):
        raise HTTPException(status_code=400, detail="batting_team is required on at least one innings")
    if second is not None and first.batting_team is not None and first.batting_team == second.batting_team:
        raise HTTPException(status_code=400, detail="Both innings cannot have the same batting_team")


def _aggregate_dict(agg: InningsAggregate) -> Dict[str, Any]:
    return {
        "total_runs": agg.total_runs,
        "wickets": agg.wickets,
        "balls_bowled": agg.balls_bowled,
        "is_completed": agg.is_completed,
        "batting_team": agg.batting_team,
    }


# -----------------------
# Formats
# -----------------------
@app.get("/api/formats")
def list_formats():
    return {"formats": [r.to_dict() for r in MATCH_FORMATS.values()]}


# -----------------------
# Delivery endpoints
# -----------------------
class EvaluateDeliveryRequest(RulesIn):
    delivery: DeliveryIn
    aggregate: AggregateIn = Field(default_factory=AggregateIn)
    target: Optional[int] = Field(
        None, ge=1, description="Chase target; overrides first_innings runs + 1 (requires first_innings)"
    )
    first_innings: Optional[AggregateIn] = Field(
        None,
        description="Completed first innings; when given, the delivery is scored as part of the chase",
    )
    require_dismissed_player: bool = Field(True, description="Reject wickets without dismissed_player_id")


@app.post("/api/deliveries/evaluate")
def evaluate_delivery(req: EvaluateDeliveryRequest):
    rules = _resolve_rules(req)
    delivery = _validated(req.delivery, require_dismissed_player=req.require_dismissed_player)

    first = req.first_innings.to_aggregate() if req.first_innings is not None else None
    aggregate = req.aggregate.to_aggregate()

    if first is None:
        if req.target is not None:
            raise HTTPException(status_code=400, detail="first_innings is required when target is given")
        target = None
    else:
        _check_sides(first, aggregate)
        target = req.target if req.target is not None else first.total_runs + 1

    try:
        outcome = apply_delivery(aggregate, delivery, rules, target=target)
    except InningsCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if first is not None:
        match = decide_match_result(first, outcome.aggregate, target=target)
    else:
        match = decide_match_result(outcome.aggregate)

    return {
        "rules": rules.to_dict(),
        "input": req.model_dump(),
        "result": outcome.to_dict(),
        "match": {"status": match.status, "winner_team": match.winner},
    }


@app.post("/api/deliveries/display")
def delivery_display(delivery: DeliveryIn):
    rules = rules_for()
    return {"display": rules.display_text(delivery.to_delivery())}


# -----------------------
# Innings endpoints
# -----------------------
class RebuildInningsRequest(RulesIn):
    deliveries: List[DeliveryIn] = Field(default_factory=list)
    target: Optional[int] = Field(None, ge=1)
    batting_team: Optional[Side] = None


@app.post("/api/innings/rebuild")
def rebuild_innings(req: RebuildInningsRequest):
    rules = _resolve_rules(req)
    agg = rebuild_aggregate(
        [d.to_delivery() for d in req.deliveries],
        rules,
        target=req.target,
        batting_team=req.batting_team,
    )
    return {"rules": rules.to_dict(), "deliveries_count": len(req.deliveries), "aggregate": _aggregate_dict(agg)}


class InningsSummaryRequest(RulesIn):
    aggregate: AggregateIn
    overs: Optional[str] = Field(None, description="Overs notation, e.g. \"15.3\"; overrides aggregate.balls_bowled")
    target: Optional[int] = Field(None, ge=1)


@app.post("/api/innings/summary")
def innings_summary(req: InningsSummaryRequest):
    rules = _resolve_rules(req)
    agg = req.aggregate
    balls_bowled = agg.balls_bowled
    if req.overs is not None:
        try:
            balls_bowled = overs_to_balls(req.overs, balls_per_over=rules.balls_per_over)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    out: Dict[str, Any] = {
        "score": format_score(agg.total_runs, agg.wickets),
        "overs": balls_to_overs(balls_bowled, balls_per_over=rules.balls_per_over),
        "max_overs": rules.overs_per_innings,
        "balls_in_current_over": balls_in_current_over(balls_bowled, balls_per_over=rules.balls_per_over),
        "run_rate": format_run_rate(run_rate(agg.total_runs, balls_bowled, balls_per_over=rules.balls_per_over)),
    }

    if req.target is not None:
        balls_remaining = max(rules.max_legal_balls - balls_bowled, 0)
        out["target"] = req.target
        out["runs_needed"] = max(req.target - agg.total_runs, 0)
        out["balls_remaining"] = balls_remaining
        out["required_run_rate"] = format_run_rate(
            required_run_rate(req.target, agg.total_runs, balls_remaining, balls_per_over=rules.balls_per_over)
        )

    return out


class OverIn(BaseModel):
    over_number: int = Field(..., ge=0)
    bowler_id: Optional[str] = None
    deliveries: List[DeliveryIn] = Field(default_factory=list)


class ScorecardRequest(RulesIn):
    overs: List[OverIn] = Field(default_factory=list)
    player_names: Dict[str, str] = Field(default_factory=dict, description="player id -> display name")
    retirements: Dict[str, str] = Field(default_factory=dict, description="player id -> retirement reason")


@app.post("/api/innings/scorecard")
def innings_scorecard(req: ScorecardRequest):
    rules = _resolve_rules(req)
    overs = [
        OverRecord(
            over_number=o.over_number,
            bowler_id=o.bowler_id,
            deliveries=[d.to_delivery() for d in o.deliveries],
        )
        for o in req.overs
    ]
    return build_scorecard(
        overs,
        req.player_names,
        retirements=req.retirements,
        balls_per_over=rules.balls_per_over,
    )


# -----------------------
# Match result
# -----------------------
class MatchResultRequest(BaseModel):
    first_innings: AggregateIn
    second_innings: Optional[AggregateIn] = None
    team_a_name: str = "Team A"
    team_b_name: str = "Team B"
    max_wickets: int = Field(10, ge=1)


@app.post("/api/match/result")
def match_result(req: MatchResultRequest):
    first = req.first_innings.to_aggregate()
    second = req.second_innings.to_aggregate() if req.second_innings is not None else None

    _check_sides(first, second)
    result = decide_match_result(first, second)

    text = None
    if second is not None:
        text = result_text(
            result,
            first,
            second,
            team_names={"A": req.team_a_name, "B": req.team_b_name},
            max_wickets=req.max_wickets,
        )

    return {
        "status": result.status,
        "winner_team": result.winner,
        "is_tie": result.is_tie,
        "result_text": text,
    }


# -----------------------
# Interaction state (dialog-open flags)
# -----------------------
class DialogStateIn(BaseModel):
    is_open: bool
    ttl_seconds: Optional[int] = Field(None, ge=1)


def _interactions(request: Request) -> InteractionStore:
    return request.app.state.interactions


@app.put("/api/clients/{client_id}/dialog")
def set_dialog_state(client_id: str, body: DialogStateIn, request: Request):
    store = _interactions(request)
    try:
        store.set_dialog_open(client_id, body.is_open, ttl_seconds=body.ttl_seconds)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"client_id": client_id, "dialog_open": store.is_dialog_open(client_id)}


@app.get("/api/clients/{client_id}/refresh")
def should_refresh(client_id: str, request: Request):
    store = _interactions(request)
    try:
        refresh = store.should_refresh(client_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"client_id": client_id, "should_refresh": refresh}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
