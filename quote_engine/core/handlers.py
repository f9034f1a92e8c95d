"""
Reducer handlers for the rate rule set.

All handlers are deterministic and never mutate the incoming state.
"""

import logging

from .events import RATE_DEFINED, ZONE_DEFINED, RateDefined, ZoneDefined
from .state import ApplicationState, Rate, Zone

logger = logging.getLogger(__name__)


def register_handlers(reducer) -> None:
    reducer.register(ZONE_DEFINED, on_zone_defined)
    reducer.register(RATE_DEFINED, on_rate_defined)


def on_zone_defined(state: ApplicationState, ev: ZoneDefined) -> ApplicationState:
    if ev.name in state.zones:
        logger.info("Zone %s redefined, previous postcodes discarded", ev.name)

    next_state, moves = state.with_zone(Zone.of(ev.name, ev.postcodes))

    for move in moves:
        logger.warning(
            "Postcode %s listed by zone %s and zone %s; %s wins",
            move.postcode,
            move.previous_zone,
            move.zone,
            move.zone,
            extra={"postcode": move.postcode, "zones": [move.previous_zone, move.zone]},
        )
    return next_state


def on_rate_defined(state: ApplicationState, ev: RateDefined) -> ApplicationState:
    rate = Rate(
        id=ev.id,
        max_weight=ev.max_weight,
        cost=ev.cost,
        from_zone=ev.from_zone,
        to_zone=ev.to_zone,
    )
    return state.with_rate(rate)
