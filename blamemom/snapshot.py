"""
Static Snapshot — JSON Export for Static Builds

Writes the suitable headlines of one processed batch to a JSON file the
web UI can load without a running server.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def build_snapshot(records: list[dict], generated_at: Optional[datetime] = None) -> dict:
    """Keep only suitable records and stamp the batch."""
    suitable = [r for r in records if r.get("suitable")]
    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        "generatedAt": generated_at.isoformat(),
        "count": len(suitable),
        "headlines": suitable,
    }


def write_snapshot(path: str | Path, snapshot: dict) -> Path:
    """Write a snapshot as pretty JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")
    logger.info("Snapshot written", extra={"count": snapshot["count"], "path": str(path)})
    return path
