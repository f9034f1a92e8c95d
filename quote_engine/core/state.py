"""
State model for the rate rule set.

ApplicationState is the single snapshot produced by replaying the event log.
It only exposes read-only containers, so one instance can be shared by every
resolver call (and every thread) in a run.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple


def _frozen_mapping(data: Optional[Mapping] = None) -> Mapping:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class Zone:
    """Named group of postcodes."""
    name: str
    postcodes: FrozenSet[str] = frozenset()

    @staticmethod
    def of(name: str, postcodes: Iterable[str]) -> "Zone":
        return Zone(name=name, postcodes=frozenset(postcodes))

    def __contains__(self, postcode: str) -> bool:
        return postcode in self.postcodes


@dataclass(frozen=True)
class Rate:
    """Cost of shipping up to max_weight from one zone to another."""
    id: str
    max_weight: float
    cost: float
    from_zone: str
    to_zone: str

    def matches(self, from_zone: str, to_zone: str, weight: float) -> bool:
        # inclusive: weight == max_weight qualifies
        return (
            weight <= self.max_weight
            and self.from_zone == from_zone
            and self.to_zone == to_zone
        )


@dataclass(frozen=True)
class PostcodeMove:
    """A postcode claimed by a zone while another zone already held it."""
    postcode: str
    previous_zone: str
    zone: str


@dataclass(frozen=True)
class ApplicationState:
    """
    Immutable rule set.

    Fields:
        zones: zone name -> Zone, in order of their latest definition
        rates: rates in log order (this is the output order of resolution)
        postcode_index: postcode -> name of the zone it resolves to

    Use with_zone() / with_rate() to derive a new state.
    """
    zones: Mapping[str, Zone] = field(default_factory=_frozen_mapping)
    rates: Tuple[Rate, ...] = ()
    postcode_index: Mapping[str, str] = field(default_factory=_frozen_mapping)

    @staticmethod
    def initial() -> "ApplicationState":
        return ApplicationState()

    def zone_of(self, postcode: str) -> Optional[str]:
        """Name of the zone a postcode resolves to, or None."""
        return self.postcode_index.get(postcode)

    def with_rate(self, rate: Rate) -> "ApplicationState":
        return ApplicationState(
            zones=self.zones,
            rates=self.rates + (rate,),
            postcode_index=self.postcode_index,
        )

    def with_zone(self, zone: Zone) -> Tuple["ApplicationState", List[PostcodeMove]]:
        """
        Create new state with zone inserted or replacing the zone of the same name.

        The replaced zone's postcodes are not merged. A postcode already indexed
        to another zone moves to this one; the moves are returned so the caller
        can report them. A postcode dropped by a redefinition falls back to the
        most recently defined zone still listing it.

        Returns:
            (new_state, moves)
        """
        zones: Dict[str, Zone] = dict(self.zones)
        previous = zones.pop(zone.name, None)
        zones[zone.name] = zone

        index = dict(self.postcode_index)
        moves: List[PostcodeMove] = []

        if previous is not None:
            for code in previous.postcodes - zone.postcodes:
                if index.get(code) == zone.name:
                    del index[code]
                    fallback = _latest_zone_listing(zones, code)
                    if fallback is not None:
                        index[code] = fallback

        for code in sorted(zone.postcodes):
            holder = index.get(code)
            if holder is not None and holder != zone.name:
                moves.append(PostcodeMove(postcode=code, previous_zone=holder, zone=zone.name))
            index[code] = zone.name

        new_state = ApplicationState(
            zones=_frozen_mapping(zones),
            rates=self.rates,
            postcode_index=_frozen_mapping(index),
        )
        return new_state, moves

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zones": {
                name: sorted(zone.postcodes) for name, zone in self.zones.items()
            },
            "rates": [
                {
                    "id": r.id,
                    "max_weight": r.max_weight,
                    "cost": r.cost,
                    "from_zone": r.from_zone,
                    "to_zone": r.to_zone,
                }
                for r in self.rates
            ],
            "postcode_index": dict(self.postcode_index),
        }


def _latest_zone_listing(zones: Mapping[str, Zone], postcode: str) -> Optional[str]:
    for name in reversed(list(zones)):
        if postcode in zones[name]:
            return name
    return None
