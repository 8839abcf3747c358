# cricket_api/validation.py
from __future__ import annotations

from cricket_api.models import EXTRAS_TYPES, WICKET_TYPES, Delivery

MAX_RUNS_PER_BALL = 10


class DeliveryValidationError(ValueError):
    """Raised when a submitted delivery is not fit to be recorded."""
    pass


def validate_delivery(delivery: Delivery, *, require_dismissed_player: bool = True) -> None:
    """
    Checks a delivery before it is persisted. The scoring rules assume
    these already hold and do not re-check them.
    """
    if delivery.extras_type not in EXTRAS_TYPES:
        raise DeliveryValidationError(f"Unknown extras type: {delivery.extras_type}")

    if delivery.wicket_type not in WICKET_TYPES:
        raise DeliveryValidationError(f"Unknown wicket type: {delivery.wicket_type}")

    if delivery.runs_off_bat < 0 or delivery.runs_off_bat > MAX_RUNS_PER_BALL:
        raise DeliveryValidationError(f"Runs off bat must be between 0 and {MAX_RUNS_PER_BALL}")

    if delivery.extras_runs < 0 or delivery.extras_runs > MAX_RUNS_PER_BALL:
        raise DeliveryValidationError(
            f"{delivery.extras_type} runs must be between 0 and {MAX_RUNS_PER_BALL}"
        )

    if delivery.extras_type == "None" and delivery.extras_runs != 0:
        raise DeliveryValidationError("Extras runs must be 0 when there are no extras")

    if delivery.extras_type == "Wide" and delivery.runs_off_bat > 0:
        raise DeliveryValidationError("Cannot score runs off bat on a wide")

    if require_dismissed_player and delivery.is_wicket and not delivery.dismissed_player_id:
        raise DeliveryValidationError("Must select dismissed player for a wicket")
