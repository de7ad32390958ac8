"""Append-only JSONL records of engine operations."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from slotgrid.core.types import Window


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append a JSON record as a single line to the given path."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=str)
        handle.write("\n")


def operation_record(
    operation: str,
    *,
    inputs: Sequence[Window] = (),
    outputs: Sequence[Window] = (),
    **context: Any,
) -> dict[str, Any]:
    """Build the record logged for one merge/generate/check invocation."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "operation": operation,
        "input_count": len(inputs),
        "output_count": len(outputs),
        "outputs": [[w.start.isoformat(), w.end.isoformat()] for w in outputs],
        **context,
    }


__all__ = ["append_jsonl", "operation_record"]
