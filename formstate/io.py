"""Event logs (JSONL) and replay result files."""

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from formstate.session.replay import EventRecord, ReplayResult


def read_events(path: Path | str) -> Iterator[dict[str, Any]]:
    """Yield the event records of a JSONL event log.

    Blank lines and lines starting with ``#`` are skipped.

    Raises:
        ValueError: If a line is not valid JSON or not a JSON object.
    """
    with open(path, encoding="utf-8") as f:
        for line_num, raw in enumerate(f, 1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e
            if not isinstance(record, dict):
                raise ValueError(
                    f"Expected an event object on line {line_num}, got {type(record).__name__}"
                )
            yield record


def write_events(path: Path | str, records: Iterable[EventRecord | Mapping[str, Any]]) -> int:
    """Write event records as JSONL, one per line.

    ``EventRecord`` instances are written without their unset keys, so the
    log stays as terse as a hand-written one.

    Returns:
        Number of records written.
    """
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            if isinstance(record, EventRecord):
                data = record.model_dump(mode="json", exclude_unset=True)
            else:
                data = dict(record)
            f.write(json.dumps(data, ensure_ascii=False) + "\n")
            count += 1
    return count


def write_result(path: Path | str, result: ReplayResult) -> None:
    """Write a replay result as indented JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
        f.write("\n")
