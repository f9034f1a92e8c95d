"""
Price resolution against a replayed rule set.

Resolution never fails: a request that matches nothing is a valid request
with an empty result.
"""

from typing import Iterable, List

from .core.quotes import PriceQuote, QuoteResult, RateRequest
from .core.state import ApplicationState


def resolve(request: RateRequest, state: ApplicationState) -> List[PriceQuote]:
    """
    Return every applicable price for a request, in rate log order.

    A rate applies when both postcodes resolve to zones, the zones match the
    rate's from/to zones, and the weight does not exceed max_weight.
    """
    from_zone = state.zone_of(request.from_postcode)
    to_zone = state.zone_of(request.to_postcode)
    if from_zone is None or to_zone is None:
        return []

    return [
        PriceQuote(rate_id=rate.id, price=rate.cost)
        for rate in state.rates
        if rate.matches(from_zone, to_zone, request.weight)
    ]


def resolve_batch(requests: Iterable[RateRequest], state: ApplicationState) -> List[QuoteResult]:
    """Resolve each request, keeping input order."""
    return [QuoteResult(input=req, output=resolve(req, state)) for req in requests]
