"""
Export event logging utilities for QUILL (Tier 2 logging).

Appends export pipeline events to a JSON Lines file (one JSON object per
line), so runs can be audited after the session is gone.

For detailed within-context logging (Tier 1), use quill.utils.logger instead.

Usage:
    from quill.utils.event_logging import log_export_event, log_state_change

    log_state_change(
        export_id="20261017_134502",
        old_state="rendering",
        new_state="rasterizing",
        source="rendering",
    )
"""

import json
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from quill.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
EXPORT_EVENTS_FILE = Path(os.getenv("EXPORT_EVENTS_FILE", str(LOGS_PATH / "export_events.log")))


def log_export_event(
    event_type: str,
    export_id: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Append an event to the export event log.

    Args:
        event_type: Type of event (e.g., "state_change", "export_skipped")
        export_id: Identifier of the export run
        source: Event source (e.g., "rendering", "cli")
        events_file: Log file (default: EXPORT_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    events_file = Path(events_file or EXPORT_EVENTS_FILE)
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "export_id": export_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")


def log_state_change(
    export_id: str,
    old_state: str,
    new_state: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """Log an export state machine transition."""
    log_export_event(
        event_type="state_change",
        export_id=export_id,
        source=source,
        events_file=events_file,
        old_state=old_state,
        new_state=new_state,
        **extra_fields,
    )


def get_recent_events(
    n: int = 10,
    export_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> List[dict]:
    """
    Get the last n events from the export log, optionally filtered.

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file or EXPORT_EVENTS_FILE)
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if export_id:
        events = [e for e in events if e.get("export_id") == export_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
