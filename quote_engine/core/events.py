"""
Event model for the rate rule set.

Events are immutable records decoded from the log envelope
{"Event": <tag>, "Data": <payload>}. Decoding is eager: every payload is
checked against its variant's shape before any state is built.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import MalformedEventData

ZONE_DEFINED = "ZoneDefined"
RATE_DEFINED = "RateDefined"


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise MalformedEventData(f"missing field {key!r}")
    value = data[key]
    if kind == "str":
        if not isinstance(value, str):
            raise MalformedEventData(f"field {key!r} must be a string, got {type(value).__name__}")
        return value
    if kind == "number":
        # bool is an int subclass but never a valid weight or cost
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedEventData(f"field {key!r} must be a number, got {type(value).__name__}")
        try:
            return float(value)
        except OverflowError as ex:
            raise MalformedEventData(f"field {key!r} is out of range") from ex
    raise ValueError(f"unknown field kind: {kind}")


def _require_object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise MalformedEventData(f"payload must be an object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class ZoneDefined:
    """
    A named group of postcodes.

    Postcodes keep the order they had in the log; duplicates collapse when
    the zone is built.
    """
    name: str
    postcodes: Tuple[str, ...]

    type = ZONE_DEFINED

    @classmethod
    def from_payload(cls, data: Any) -> "ZoneDefined":
        data = _require_object(data)
        name = _require(data, "Name", "str")
        if "Postcodes" not in data:
            raise MalformedEventData("missing field 'Postcodes'")
        postcodes = data["Postcodes"]
        if not isinstance(postcodes, list):
            raise MalformedEventData(
                f"field 'Postcodes' must be a list, got {type(postcodes).__name__}"
            )
        for code in postcodes:
            if not isinstance(code, str):
                raise MalformedEventData(
                    f"field 'Postcodes' must hold strings, got {type(code).__name__}"
                )
        return cls(name=name, postcodes=tuple(postcodes))

    def to_payload(self) -> Dict[str, Any]:
        return {"Name": self.name, "Postcodes": list(self.postcodes)}


@dataclass(frozen=True)
class RateDefined:
    """A cost row for shipments from one zone to another up to max_weight."""
    id: str
    max_weight: float
    cost: float
    from_zone: str
    to_zone: str

    type = RATE_DEFINED

    @classmethod
    def from_payload(cls, data: Any) -> "RateDefined":
        data = _require_object(data)
        return cls(
            id=_require(data, "ID", "str"),
            max_weight=_require(data, "MaxWeight", "number"),
            cost=_require(data, "Cost", "number"),
            from_zone=_require(data, "FromZone", "str"),
            to_zone=_require(data, "ToZone", "str"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "ID": self.id,
            "MaxWeight": self.max_weight,
            "Cost": self.cost,
            "FromZone": self.from_zone,
            "ToZone": self.to_zone,
        }


@dataclass(frozen=True)
class UnknownEvent:
    """Event with a tag this engine does not understand. Payload is kept as-is."""
    tag: str
    data: Any = None

    @property
    def type(self) -> str:
        return self.tag

    def to_payload(self) -> Any:
        return self.data


Event = Union[ZoneDefined, RateDefined, UnknownEvent]

EVENT_TYPES = {
    ZONE_DEFINED: ZoneDefined,
    RATE_DEFINED: RateDefined,
}


def decode_event(record: Any, index: Optional[int] = None) -> Event:
    """
    Decode one log envelope into its event variant.

    Raises:
        MalformedEventData: If the envelope or a known payload is malformed
    """
    if not isinstance(record, Mapping):
        raise MalformedEventData(
            f"envelope must be an object, got {type(record).__name__}", index=index
        )
    tag = record.get("Event")
    if not isinstance(tag, str):
        raise MalformedEventData("envelope is missing a string 'Event' tag", index=index)

    cls = EVENT_TYPES.get(tag)
    if cls is None:
        return UnknownEvent(tag=tag, data=record.get("Data"))

    if "Data" not in record:
        raise MalformedEventData("envelope is missing 'Data'", index=index, tag=tag)
    try:
        return cls.from_payload(record["Data"])
    except MalformedEventData as ex:
        raise MalformedEventData(str(ex), index=index, tag=tag) from ex


def decode_events(records: Iterable[Any]) -> List[Event]:
    """
    Decode a whole log. Fails on the first malformed event.

    Already-decoded events are passed through unchanged.
    """
    events: List[Event] = []
    for index, record in enumerate(records):
        if isinstance(record, (ZoneDefined, RateDefined, UnknownEvent)):
            events.append(record)
        else:
            events.append(decode_event(record, index=index))
    return events


def encode_event(event: Event) -> Dict[str, Any]:
    """Encode an event back into its log envelope."""
    return {"Event": event.type, "Data": event.to_payload()}
