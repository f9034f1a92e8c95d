"""
Core rule set primitives.

This module provides:
- Events: ZoneDefined / RateDefined / UnknownEvent and their decoding
- State: immutable ApplicationState (zones, rates, postcode index)
- Reducer: handler registry for state transitions
- Quotes: RateRequest, PriceQuote, QuoteResult
- Canonical: deterministic serialization and state hashing
"""

from .events import (
    Event,
    ZoneDefined,
    RateDefined,
    UnknownEvent,
    decode_event,
    decode_events,
    encode_event,
)
from .state import ApplicationState, Zone, Rate, PostcodeMove
from .reducer import Reducer
from .handlers import register_handlers
from .quotes import RateRequest, PriceQuote, QuoteResult
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, compute_state_hash
from .errors import (
    QuoteEngineError,
    MalformedEventData,
    UnknownEventType,
    MalformedRequest,
    EventStoreError,
)

__all__ = [
    "Event",
    "ZoneDefined",
    "RateDefined",
    "UnknownEvent",
    "decode_event",
    "decode_events",
    "encode_event",
    "ApplicationState",
    "Zone",
    "Rate",
    "PostcodeMove",
    "Reducer",
    "register_handlers",
    "RateRequest",
    "PriceQuote",
    "QuoteResult",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "compute_state_hash",
    "QuoteEngineError",
    "MalformedEventData",
    "UnknownEventType",
    "MalformedRequest",
    "EventStoreError",
]
