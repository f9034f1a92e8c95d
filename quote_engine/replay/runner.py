"""
Replay runner: reconstruct the rule set from an event log.

Replay is a fold: the reducer is applied to each event in log order,
starting from an empty state.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..core.events import decode_events
from ..core.state import ApplicationState
from ..core.reducer import Reducer
from ..core.handlers import register_handlers
from ..core.errors import UnknownEventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying events
        applied: Number of events applied
        skipped: Number of events with an unknown tag
        event_counts: tag -> number of events seen
    """
    state: ApplicationState
    applied: int
    skipped: int = 0
    event_counts: Dict[str, int] = field(default_factory=dict)


def default_reducer() -> Reducer:
    reducer = Reducer()
    register_handlers(reducer)
    return reducer


def replay(events: Iterable[Any], reducer: Optional[Reducer] = None) -> ReplayResult:
    """
    Replay events to reconstruct state.

    The whole log is decoded before the fold starts, so a malformed event
    fails the replay without producing any state.

    Args:
        events: Log envelopes or already-decoded events, in log order
        reducer: Reducer with registered handlers (default: zone and rate handlers)

    Returns:
        ReplayResult with final state and counts

    Raises:
        MalformedEventData: If any event cannot be decoded
    """
    reducer = reducer or default_reducer()
    decoded = decode_events(events)

    st = ApplicationState.initial()
    applied = 0
    skipped = 0
    counts: Counter = Counter()

    for index, ev in enumerate(decoded):
        counts[ev.type] += 1
        try:
            st = reducer.apply(st, ev)
        except UnknownEventType as ex:
            logger.warning("Skipping event #%d: %s", index, ex, extra={"event_type": ex.tag})
            skipped += 1
            continue
        applied += 1

    logger.info(
        "Replayed %d events (%d skipped): %d zones, %d rates",
        applied,
        skipped,
        len(st.zones),
        len(st.rates),
    )
    return ReplayResult(state=st, applied=applied, skipped=skipped, event_counts=dict(counts))


def build(events: Iterable[Any]) -> ApplicationState:
    """
    Build the rule set from an event log.

    Raises:
        MalformedEventData: If any event cannot be decoded
    """
    return replay(events).state
