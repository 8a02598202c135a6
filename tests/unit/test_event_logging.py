"""Unit tests for the export event log."""

import json

import pytest

from quill.utils.event_logging import get_recent_events, log_export_event, log_state_change


@pytest.mark.unit
def test_log_state_change(tmp_path):
    events_file = tmp_path / "logs" / "export_events.log"

    log_state_change("run1", "idle", "preparing", source="rendering", events_file=events_file)

    lines = events_file.read_text().splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["event_type"] == "state_change"
    assert event["export_id"] == "run1"
    assert event["old_state"] == "idle"
    assert event["new_state"] == "preparing"
    assert event["source"] == "rendering"
    assert "timestamp" in event


@pytest.mark.unit
def test_extra_fields_recorded(tmp_path):
    events_file = tmp_path / "events.log"
    log_export_event("export_skipped", "run1", source="cli", events_file=events_file, reason="busy")

    assert get_recent_events(events_file=events_file)[0]["reason"] == "busy"


@pytest.mark.unit
def test_get_recent_events_filters(tmp_path):
    events_file = tmp_path / "events.log"
    for run in ("a", "b"):
        log_state_change(run, "idle", "preparing", source="rendering", events_file=events_file)
        log_state_change(run, "preparing", "rendering", source="rendering", events_file=events_file)
    log_export_event("export_skipped", "a", source="rendering", events_file=events_file)

    assert len(get_recent_events(n=100, events_file=events_file)) == 5
    assert len(get_recent_events(n=100, export_id="a", events_file=events_file)) == 3
    assert len(get_recent_events(n=100, event_type="export_skipped", events_file=events_file)) == 1

    last_two = get_recent_events(n=2, events_file=events_file)
    assert [e["event_type"] for e in last_two] == ["state_change", "export_skipped"]


@pytest.mark.unit
def test_get_recent_events_skips_malformed_lines(tmp_path):
    events_file = tmp_path / "events.log"
    log_state_change("a", "idle", "preparing", source="rendering", events_file=events_file)
    with open(events_file, "a", encoding="utf-8") as f:
        f.write("{not json\n")

    assert len(get_recent_events(events_file=events_file)) == 1


@pytest.mark.unit
def test_get_recent_events_missing_file(tmp_path):
    assert get_recent_events(events_file=tmp_path / "none.log") == []
