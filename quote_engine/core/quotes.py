"""
Request and result records for price resolution.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .errors import MalformedRequest


@dataclass(frozen=True)
class RateRequest:
    """A shipment to price: origin postcode, destination postcode, weight."""
    from_postcode: str
    to_postcode: str
    weight: float

    @classmethod
    def from_dict(cls, data: Any) -> "RateRequest":
        """
        Decode a {"From", "To", "Weight"} object.

        Raises:
            MalformedRequest: If a field is missing or has the wrong JSON type
        """
        if not isinstance(data, Mapping):
            raise MalformedRequest(f"request must be an object, got {type(data).__name__}")
        for key in ("From", "To"):
            if not isinstance(data.get(key), str):
                raise MalformedRequest(f"request field {key!r} must be a string")
        weight = data.get("Weight")
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise MalformedRequest("request field 'Weight' must be a number")
        try:
            weight = float(weight)
        except OverflowError as ex:
            raise MalformedRequest("request field 'Weight' is out of range") from ex
        return cls(from_postcode=data["From"], to_postcode=data["To"], weight=weight)

    def to_dict(self) -> Dict[str, Any]:
        return {"From": self.from_postcode, "To": self.to_postcode, "Weight": self.weight}


@dataclass(frozen=True)
class PriceQuote:
    rate_id: str
    price: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriceQuote":
        return cls(rate_id=data["RateID"], price=float(data["Price"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"RateID": self.rate_id, "Price": self.price}


@dataclass(frozen=True)
class QuoteResult:
    """One request and every price that applies to it."""
    input: RateRequest
    output: List[PriceQuote] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Input": self.input.to_dict(),
            "Output": [q.to_dict() for q in self.output],
        }
