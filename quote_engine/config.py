"""
Runtime settings read from the environment.

Environment Variables:
    QUOTES_EVENTS_PATH: Event log (default: testdata/events.json)
    QUOTES_REQUESTS_PATH: Request batch (default: testdata/requests.json)
    QUOTES_OUTPUT_PATH: Result file, "-" for stdout (default: -)
    QUOTES_FIXTURE_PATH: Input/expected-output fixture (default: testdata/input-output.json)
    QUOTES_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO, WARNING for the CLI)
    QUOTES_LOG_FORMAT: json, text (default: text)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_EVENTS_PATH = "testdata/events.json"
DEFAULT_REQUESTS_PATH = "testdata/requests.json"
DEFAULT_FIXTURE_PATH = "testdata/input-output.json"
STDOUT = "-"


@dataclass(frozen=True)
class Settings:
    events_path: str = DEFAULT_EVENTS_PATH
    requests_path: str = DEFAULT_REQUESTS_PATH
    output_path: str = STDOUT
    fixture_path: str = DEFAULT_FIXTURE_PATH
    log_level: Optional[str] = None
    log_format: str = "text"


def _env(env: Mapping[str, str], key: str, default: Optional[str]) -> Optional[str]:
    val = env.get(key)
    if not val or not val.strip():
        return default
    return val.strip()


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    log_level = _env(env, "QUOTES_LOG_LEVEL", None)
    return Settings(
        events_path=_env(env, "QUOTES_EVENTS_PATH", DEFAULT_EVENTS_PATH),
        requests_path=_env(env, "QUOTES_REQUESTS_PATH", DEFAULT_REQUESTS_PATH),
        output_path=_env(env, "QUOTES_OUTPUT_PATH", STDOUT),
        fixture_path=_env(env, "QUOTES_FIXTURE_PATH", DEFAULT_FIXTURE_PATH),
        log_level=log_level.upper() if log_level else None,
        log_format=_env(env, "QUOTES_LOG_FORMAT", "text").lower(),
    )
