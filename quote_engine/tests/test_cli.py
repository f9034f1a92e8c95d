"""
Tests for the quotes CLI.
"""

import json
import logging
import os
import tempfile

import pytest
from typer.testing import CliRunner

from cli.main import app

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
TESTDATA = os.path.join(ROOT, "testdata")
EVENTS = os.path.join(TESTDATA, "events.json")
REQUESTS = os.path.join(TESTDATA, "requests.json")
FIXTURE = os.path.join(TESTDATA, "input-output.json")

runner = CliRunner()


def invoke(args, **kwargs):
    # keep engine warnings off the captured output
    return runner.invoke(app, ["--log-level", "ERROR"] + args, **kwargs)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_quote_to_stdout_matches_fixture():
    result = invoke(["quote", "--events", EVENTS, "--requests", REQUESTS])

    assert result.exit_code == 0, result.output
    with open(FIXTURE) as f:
        expected = json.load(f)
    assert json.loads(result.stdout) == expected


def test_quote_to_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        out = os.path.join(tmpdir, "out", "results.json")
        result = invoke(["quote", "-e", EVENTS, "-r", REQUESTS, "-o", out])

        assert result.exit_code == 0, result.output
        with open(out) as f:
            doc = json.load(f)
        assert len(doc) == 8
        assert doc[3] == {"Input": {"From": "9999", "To": "2000", "Weight": 3}, "Output": []}


def test_quote_missing_events_file():
    result = invoke(["quote", "--events", "/nonexistent/events.json", "--requests", REQUESTS, "--json"])

    assert result.exit_code == 2
    assert json.loads(result.stdout)["path"] == "/nonexistent/events.json"


def test_quote_malformed_event_log_fails():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "events.json")
        with open(path, "w") as f:
            json.dump([{"Event": "RateDefined", "Data": {"ID": "R1", "MaxWeight": "heavy"}}], f)

        result = invoke(["quote", "-e", path, "-r", REQUESTS, "--json"])

        assert result.exit_code == 2
        assert "MaxWeight" in json.loads(result.stdout)["error"]


def test_quote_reads_paths_from_environment():
    env = {"QUOTES_EVENTS_PATH": EVENTS, "QUOTES_REQUESTS_PATH": REQUESTS}
    result = invoke(["quote"], env=env)

    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)) == 8


def test_check_passes_on_shipped_fixture():
    result = invoke(["check", "--events", EVENTS, "--fixture", FIXTURE, "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"checked": 8, "mismatches": []}


def test_check_reports_mismatch():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "fixture.json")
        with open(path, "w") as f:
            json.dump([{"Input": {"From": "1000", "To": "2000", "Weight": 3}, "Output": []}], f)

        result = invoke(["check", "-e", EVENTS, "-f", path, "--json"])

        assert result.exit_code == 1
        mismatch = json.loads(result.stdout)["mismatches"][0]
        assert mismatch["index"] == 0
        assert [q["RateID"] for q in mismatch["actual"]] == ["R1", "R2", "R1"]


def test_replay_json_summary():
    result = invoke(["replay", "--events", EVENTS, "--json"])

    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["events_applied"] == 8
    assert out["events_skipped"] == 1
    assert out["event_counts"] == {"ZoneDefined": 3, "RateDefined": 5, "ZoneRetired": 1}
    assert out["summary"]["rates"] == 5
    assert len(out["state_hash"]) == 64


def test_replay_rich_output():
    result = invoke(["replay", "--events", EVENTS])

    assert result.exit_code == 0, result.output
    assert "Replayed 8 events" in result.stdout


def test_zone_lookup():
    found = invoke(["zone", "2001", "--events", EVENTS, "--json"])
    missing = invoke(["zone", "9999", "--events", EVENTS, "--json"])

    assert found.exit_code == 0
    assert json.loads(found.stdout) == {"postcode": "2001", "zone": "B", "listed_by": ["B"]}
    assert missing.exit_code == 1
    assert json.loads(missing.stdout)["zone"] is None


def test_log_tail():
    result = invoke(["log", "tail", "--events", EVENTS, "--lines", "2", "--json"])

    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["count"] == 2
    assert [ev["seq"] for ev in out["events"]] == [7, 8]
    assert out["events"][0]["Event"] == "ZoneRetired"


def test_version():
    result = invoke(["version"])

    assert result.exit_code == 0
    assert "Quotes CLI" in result.stdout


def test_replay_oversized_number_reports_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "events.json")
        with open(path, "w") as f:
            f.write(
                '[{"Event": "RateDefined", "Data": {"ID": "R1", "MaxWeight": 1%s, '
                '"Cost": 1, "FromZone": "A", "ToZone": "B"}}]' % ("0" * 400)
            )

        result = invoke(["replay", "-e", path, "--json"])

        assert result.exit_code == 2
        assert "MaxWeight" in json.loads(result.stdout)["error"]


def test_quote_stdout_matches_file_output():
    with tempfile.TemporaryDirectory() as tmpdir:
        events = os.path.join(tmpdir, "events.json")
        requests = os.path.join(tmpdir, "requests.json")
        out = os.path.join(tmpdir, "results.json")
        with open(events, "w", encoding="utf-8") as f:
            json.dump([{"Event": "ZoneDefined", "Data": {"Name": "Z", "Postcodes": ["Zürich"]}}], f)
        with open(requests, "w", encoding="utf-8") as f:
            json.dump([{"From": "Zürich", "To": "Zürich", "Weight": 1}], f)

        to_stdout = invoke(["quote", "-e", events, "-r", requests])
        to_file = invoke(["quote", "-e", events, "-r", requests, "-o", out])

        assert to_stdout.exit_code == 0 and to_file.exit_code == 0
        assert "Zürich" in to_stdout.stdout
        assert to_stdout.stdout.endswith("]\n")
        with open(out, encoding="utf-8") as f:
            assert to_stdout.stdout == f.read()


def test_output_path_from_environment():
    with tempfile.TemporaryDirectory() as tmpdir:
        out = os.path.join(tmpdir, "results.json")
        env = {"QUOTES_EVENTS_PATH": EVENTS, "QUOTES_REQUESTS_PATH": REQUESTS, "QUOTES_OUTPUT_PATH": out}

        result = invoke(["quote"], env=env)

        assert result.exit_code == 0, result.output
        with open(out) as f:
            assert len(json.load(f)) == 8


def test_option_overrides_environment():
    env = {"QUOTES_EVENTS_PATH": "/nonexistent/events.json", "QUOTES_FIXTURE_PATH": "/nonexistent/fixture.json"}

    result = invoke(["check", "--events", EVENTS, "--fixture", FIXTURE, "--json"], env=env)

    assert result.exit_code == 0, result.output


def test_cli_logs_warnings_by_default(monkeypatch):
    monkeypatch.delenv("QUOTES_LOG_LEVEL", raising=False)

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert logging.getLogger().level == logging.WARNING
