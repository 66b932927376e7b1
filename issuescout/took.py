"""Ledger writer for recorded contributions.

The ledger is append-only line-delimited JSON, one entry per line, so two
ledgers can be merged by concatenation. Timestamps are ISO-8601 UTC with
second precision and a trailing ``Z``.
"""

from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

__all__ = [
    "DEFAULT_EVENT",
    "DROPPED_EVENT",
    "IssueRef",
    "ParseError",
    "MissingHashError",
    "MissingSlashError",
    "BadNumberError",
    "EmptySegmentError",
    "TookError",
    "NoConfigDirError",
    "parse_issue_ref",
    "default_ledger_path",
    "append_entry",
    "append_entry_with_event",
    "format_iso8601_z",
    "parse_iso8601_z",
    "now_iso8601_z",
    "run",
]

LEDGER_FILENAME = "ledger.jsonl"

#: Event tag for a contribution that was taken on.
DEFAULT_EVENT = "took"
#: Event tag for an issue investigated and then abandoned.
DROPPED_EVENT = "dropped"

_U32_MAX = 2**32 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ASCII_DIGITS = frozenset("0123456789")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass(frozen=True)
class IssueRef:
    """A parsed ``OWNER/REPO#N`` reference."""

    owner: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class ParseError(ValueError):
    """An issue reference that did not parse; ``text`` is the offending input."""

    template = "invalid issue reference {value}"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(self.template.format(value=_quote(text)))


class MissingHashError(ParseError):
    template = "missing '#': expected OWNER/REPO#N, got {value}"


class MissingSlashError(ParseError):
    template = "missing '/': expected OWNER/REPO#N, got {value}"


class BadNumberError(ParseError):
    template = "issue number must be a positive integer, got {value}"


class EmptySegmentError(ParseError):
    template = "owner or repo segment is empty in {value}"


class TookError(Exception):
    """Base error for ledger writing."""


class NoConfigDirError(TookError):
    """Neither ``$XDG_CONFIG_HOME`` nor ``$HOME`` is set."""

    def __init__(self) -> None:
        super().__init__(
            "cannot resolve default ledger dir: neither $XDG_CONFIG_HOME nor $HOME is set"
        )


def _parse_u32(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _ASCII_DIGITS:
        raise BadNumberError(text)
    value = int(digits)
    if value > _U32_MAX:
        raise BadNumberError(text)
    return value


def parse_issue_ref(text: str) -> IssueRef:
    """Parse ``OWNER/REPO#N``; owner and repo must be non-empty."""
    slug, hash_sep, num_str = text.partition("#")
    if not hash_sep:
        raise MissingHashError(text)
    owner, slash_sep, repo = slug.partition("/")
    if not slash_sep:
        raise MissingSlashError(text)
    if not owner or not repo:
        raise EmptySegmentError(text)
    return IssueRef(owner=owner, repo=repo, number=_parse_u32(num_str))


def _default_ledger_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg) / "scout"
    home = os.environ.get("HOME")
    if home is None:
        raise NoConfigDirError()
    return Path(home) / ".config" / "scout"


def default_ledger_path() -> Path:
    """``$XDG_CONFIG_HOME/scout/ledger.jsonl``, else ``$HOME/.config/scout/ledger.jsonl``."""
    return _default_ledger_dir() / LEDGER_FILENAME


def append_entry(ledger_path: str | os.PathLike[str], issue: IssueRef, timestamp_iso: str) -> None:
    """Append a ``took`` entry for ``issue`` to the ledger."""
    append_entry_with_event(ledger_path, issue, timestamp_iso, DEFAULT_EVENT)


def append_entry_with_event(
    ledger_path: str | os.PathLike[str],
    issue: IssueRef,
    timestamp_iso: str,
    event: str,
) -> None:
    """Append one JSONL line tagged with ``event``; creates parent dirs, never truncates."""
    path = Path(ledger_path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)

    entry = {
        "repo": f"{issue.owner}/{issue.repo}",
        "number": issue.number,
        "timestamp": timestamp_iso,
        "event": event,
    }
    line = json.dumps(entry, separators=(",", ":"), ensure_ascii=False) + "\n"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line)


def format_iso8601_z(unix_secs: int) -> str:
    """Format unix seconds as ``YYYY-MM-DDTHH:MM:SSZ``."""
    moment = _EPOCH + timedelta(seconds=unix_secs)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}Z"
    )


def parse_iso8601_z(text: str) -> int | None:
    """Parse the narrow ``YYYY-MM-DDTHH:MM:SSZ`` shape into unix seconds, or None."""
    if len(text) != 20:
        return None
    if (
        text[4] != "-"
        or text[7] != "-"
        or text[10] != "T"
        or text[13] != ":"
        or text[16] != ":"
        or text[19] != "Z"
    ):
        return None
    fields = (text[0:4], text[5:7], text[8:10], text[11:13], text[14:16], text[17:19])
    if not all(set(part) <= _ASCII_DIGITS for part in fields):
        return None
    year, month, day, hour, minute, second = (int(part) for part in fields)
    try:
        moment = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError:
        return None
    delta = moment - _EPOCH
    return delta.days * 86_400 + delta.seconds


def now_iso8601_z() -> str:
    """Current wall-clock time as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return format_iso8601_z(int(time.time()))


def run(ledger_override: str | None, issue_ref: str, event: str = DEFAULT_EVENT) -> int:
    """Record ``issue_ref`` in the ledger under ``event``; return a process exit code."""
    try:
        issue = parse_issue_ref(issue_ref)
        path = Path(ledger_override) if ledger_override is not None else default_ledger_path()
        timestamp = now_iso8601_z()
        append_entry_with_event(path, issue, timestamp, event)
    except ParseError as exc:
        print(f"scout {event}: invalid issue reference: {exc}", file=sys.stderr)
        return 1
    except TookError as exc:
        print(f"scout {event}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"scout {event}: filesystem error at {exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    print(f"recorded {issue.owner}/{issue.repo}#{issue.number} at {timestamp} -> {path}")
    return 0