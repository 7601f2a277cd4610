"""Diagnostic ingestion: turn raw console/log text into diagnostic records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from re import IGNORECASE, compile
from typing import Literal

logger = logging.getLogger(__name__)

Level = Literal["error", "warning", "log"]

# Assets/Scripts/Foo.cs(12) or Assets/Scripts/Foo.cs(12,34)
SOURCE_LOCATION_RE = compile(
    r"(?P<path>(?:Assets|Packages)/[^:\n\r('\"]+)\((?P<line>\d+)(?:,\d+)?\)"
)
ERROR_RE = compile(r"\berror\b|exception\b", IGNORECASE)
WARNING_RE = compile(r"\bwarning\b", IGNORECASE)
STACK_FRAME_RE = compile(r"^(?:\s|at\s|[\w.<>`]+:[\w.<>`]+\s*\()")


@dataclass(slots=True)
class DiagnosticRecord:
    """A single log/compile/runtime message with optional source location."""

    message: str
    stack: str = ""
    path: str = ""
    line: int = 0
    level: Level = "error"


def parse_record(message: str, stack: str = "", level: Level = "error") -> DiagnosticRecord:
    """Build a record, extracting the first ``<dir>/<file>(<line>)`` location."""
    path = ""
    line = 0
    match = SOURCE_LOCATION_RE.search(message or "")
    if match:
        path = match.group("path").strip()
        line = int(match.group("line"))
    return DiagnosticRecord(message=message or "", stack=stack, path=path, line=line, level=level)


def detect_level(text: str) -> Level:
    """Classify a raw line as error, warning, or plain log output."""
    if ERROR_RE.search(text):
        return "error"
    if WARNING_RE.search(text):
        return "warning"
    return "log"


def read_log_records(text: str) -> list[DiagnosticRecord]:
    """Split console or Editor.log text into diagnostic records.

    Each non-frame line starts a new record. Indented lines and stack frames
    following a record are collected into its stack. A blank line closes the
    current record.
    """
    records: list[DiagnosticRecord] = []
    message: str | None = None
    frames: list[str] = []

    def flush() -> None:
        if message is not None:
            records.append(parse_record(message, "\n".join(frames), detect_level(message)))

    for raw in text.splitlines():
        if not raw.strip():
            flush()
            message = None
            frames = []
            continue
        if message is not None and STACK_FRAME_RE.match(raw):
            frames.append(raw.strip())
            continue
        flush()
        message = raw.rstrip()
        frames = []
    flush()

    logger.debug("Read %d diagnostic record(s) from log text", len(records))
    return records


def filter_records(
    records: list[DiagnosticRecord],
    text: str = "",
    *,
    include_logs: bool = False,
) -> list[DiagnosticRecord]:
    """Keep records whose level or message contains ``text`` (case-insensitive)."""
    needle = text.strip().lower()
    kept: list[DiagnosticRecord] = []
    for record in records:
        if record.level == "log" and not include_logs:
            continue
        if needle and needle not in record.level and needle not in record.message.lower():
            continue
        kept.append(record)
    return kept


def latest_record(records: list[DiagnosticRecord]) -> DiagnosticRecord | None:
    """Return the most recent record, if any."""
    if not records:
        return None
    return records[-1]
