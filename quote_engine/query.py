"""
Read-only query helpers for a replayed rule set.
"""

from typing import Any, Dict, List, Optional

from .core.state import ApplicationState, Rate


def zone_for(state: ApplicationState, postcode: str) -> Optional[str]:
    return state.zone_of(postcode)


def zones_listing(state: ApplicationState, postcode: str) -> List[str]:
    """Every zone whose definition lists the postcode, in definition order."""
    return [name for name, zone in state.zones.items() if postcode in zone]


def shared_postcodes(state: ApplicationState) -> Dict[str, List[str]]:
    """
    Postcodes listed by more than one zone.

    The index resolves each of them to a single zone; this shows the
    overlap itself.
    """
    listed: Dict[str, List[str]] = {}
    for name, zone in state.zones.items():
        for code in zone.postcodes:
            listed.setdefault(code, []).append(name)
    return {code: names for code, names in sorted(listed.items()) if len(names) > 1}


def rates_between(state: ApplicationState, from_zone: str, to_zone: str) -> List[Rate]:
    return [r for r in state.rates if r.from_zone == from_zone and r.to_zone == to_zone]


def state_summary(state: ApplicationState) -> Dict[str, Any]:
    return {
        "zones": len(state.zones),
        "postcodes": len(state.postcode_index),
        "rates": len(state.rates),
        "shared_postcodes": len(shared_postcodes(state)),
    }
