"""
JSON documents exchanged with the engine.

- Event log: [{"Event": tag, "Data": {...}}, ...]
- Request batch: [{"From", "To", "Weight"}, ...]
- Result batch / fixture: [{"Input": {...}, "Output": [{"RateID", "Price"}]}, ...]
"""

import json
from typing import Any, List, Tuple

from ..core.errors import EventStoreError, MalformedRequest
from ..core.quotes import PriceQuote, QuoteResult, RateRequest


def _load_json(data: bytes, what: str) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as ex:
        raise EventStoreError(f"{what} is not valid JSON: {ex}") from ex


def _load_array(data: bytes, what: str) -> List[Any]:
    doc = _load_json(data, what)
    if not isinstance(doc, list):
        raise EventStoreError(f"{what} must be a JSON array, got {type(doc).__name__}")
    return doc


def _plain_number(value: Any) -> Any:
    # 5.0 -> 5, so outputs read the same as the hand-written fixtures
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _plain(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_plain(x) for x in obj]
    return _plain_number(obj)


def dumps_pretty(obj: Any) -> bytes:
    """Two-space indented JSON with a trailing newline."""
    return (json.dumps(_plain(obj), indent=2, ensure_ascii=False) + "\n").encode("utf-8")


def decode_event_log(data: bytes) -> List[Any]:
    """
    Parse event log bytes into raw envelopes.

    Envelopes are decoded into events by replay, not here.
    """
    return _load_array(data, "event log")


def decode_requests(data: bytes) -> List[RateRequest]:
    """
    Parse a request batch.

    Raises:
        EventStoreError: If the document is not a JSON array
        MalformedRequest: If an entry is malformed
    """
    requests = []
    for index, item in enumerate(_load_array(data, "request batch")):
        try:
            requests.append(RateRequest.from_dict(item))
        except MalformedRequest as ex:
            raise MalformedRequest(f"request #{index}: {ex}") from ex
    return requests


def encode_results(results: List[QuoteResult]) -> bytes:
    return dumps_pretty([r.to_dict() for r in results])


def _iter_json_values(text: str):
    decoder = json.JSONDecoder()
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            return
        value, pos = decoder.raw_decode(text, pos)
        yield value


def decode_fixture(data: bytes) -> List[Tuple[RateRequest, List[PriceQuote]]]:
    """
    Parse an input/expected-output fixture.

    Accepts a JSON array of {"Input", "Output"} pairs or a stream of
    concatenated pair objects.
    """
    try:
        values = list(_iter_json_values(data.decode("utf-8")))
    except (UnicodeDecodeError, ValueError) as ex:
        raise EventStoreError(f"fixture is not valid JSON: {ex}") from ex

    if len(values) == 1 and isinstance(values[0], list):
        values = values[0]

    pairs = []
    for index, item in enumerate(values):
        if not isinstance(item, dict) or "Input" not in item:
            raise EventStoreError(f"fixture entry #{index} must be an object with 'Input'")
        try:
            request = RateRequest.from_dict(item["Input"])
        except MalformedRequest as ex:
            raise MalformedRequest(f"fixture entry #{index}: {ex}") from ex
        try:
            expected = [PriceQuote.from_dict(q) for q in (item.get("Output") or [])]
        except (KeyError, TypeError, ValueError, OverflowError) as ex:
            raise EventStoreError(f"fixture entry #{index} has a malformed Output: {ex}") from ex
        pairs.append((request, expected))
    return pairs
