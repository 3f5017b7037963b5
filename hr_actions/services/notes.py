"""Reviewer notes history.

Notes are stored as one text blob of ``[timestamp] text`` blocks separated by
blank lines. New notes are appended; existing blocks are never rewritten.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from pydantic import BaseModel

NOTES_MIN_LENGTH = 5
NOTES_REQUIRED_MESSAGE = "Notes are required"
NOTES_TOO_SHORT_MESSAGE = f"Notes must be at least {NOTES_MIN_LENGTH} characters"

_BLOCK_SEPARATOR = "\n\n"
_TIMESTAMP = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[+-]\d{2}:\d{2}|Z)?"
# A block starts only at a blank line followed by a timestamp.
_SPLIT_RE = re.compile(rf"\n\s*\n(?=\[{_TIMESTAMP}\])")
_BLOCK_RE = re.compile(rf"^\[({_TIMESTAMP})\]\s*(.*)$", re.DOTALL)


class NoteEntry(BaseModel):
    """One block of the notes history. ``timestamp`` is None for legacy text."""

    timestamp: str | None = None
    text: str


def check_notes(text: str | None) -> str | None:
    """Return the error message for ``text``, or None when it is acceptable."""
    if text is None or not text.strip():
        return NOTES_REQUIRED_MESSAGE
    if len(text.strip()) < NOTES_MIN_LENGTH:
        return NOTES_TOO_SHORT_MESSAGE
    return None


def parse_notes(text: str | None) -> list[NoteEntry]:
    """Split a stored notes blob into entries, oldest first."""
    if not text or not text.strip():
        return []
    entries: list[NoteEntry] = []
    for block in _SPLIT_RE.split(text):
        block = block.strip()
        if not block:
            continue
        match = _BLOCK_RE.match(block)
        if match:
            entries.append(NoteEntry(timestamp=match.group(1), text=match.group(2).strip()))
        else:
            entries.append(NoteEntry(text=block))
    return entries


def format_note(text: str, at: datetime | None = None) -> str:
    stamp = (at or datetime.now(UTC)).isoformat(timespec="seconds")
    return f"[{stamp}] {text.strip()}"


def append_note(existing: str | None, text: str, at: datetime | None = None) -> str:
    """Return ``existing`` with a new timestamped block appended."""
    block = format_note(text, at)
    if not existing or not existing.strip():
        return block
    return f"{existing.rstrip()}{_BLOCK_SEPARATOR}{block}"
