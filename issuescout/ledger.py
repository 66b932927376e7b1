"""Loaders for the scan inputs: the contribution ledger and the watchlist.

The ledger is line-delimited JSON. Loading it yields a ``LedgerIndex`` that
maps each ``(owner, repo, number)`` to the unix-seconds timestamp of its most
recent entry, which drives the cooldown filter. A missing ledger file is an
empty index. Also resolves the GitHub auth token from a file or the
environment.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .took import parse_iso8601_z
from .watchlist import Watchlist, WatchlistError
from .watchlist import parse as parse_watchlist

__all__ = [
    "ScanError",
    "LedgerError",
    "LedgerIndex",
    "parse_ledger",
    "load_ledger",
    "load_watchlist",
    "resolve_token",
    "expand_tilde",
]

_U32_MAX = 2**32 - 1
_SECONDS_PER_DAY = 86_400


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class ScanError(Exception):
    """A failure loading one of the scan inputs; ``path`` is the file involved."""

    def __init__(self, path: str | os.PathLike[str], message: str) -> None:
        self.path = Path(path)
        super().__init__(message)

    @classmethod
    def from_os_error(cls, path: str | os.PathLike[str], exc: OSError) -> ScanError:
        reason = exc.strerror or str(exc)
        return cls(path, f"filesystem error at {Path(path)}: {reason}")


class LedgerError(ValueError):
    """A ledger line that did not parse; ``line`` is 1-based."""

    def __init__(self, line: int, detail: str) -> None:
        self.line = line
        self.detail = detail
        super().__init__(f"line {line}: {detail}")


@dataclass
class LedgerIndex:
    """Most recent take per issue, keyed by ``(owner, repo, number)``."""

    entries: Mapping[tuple[str, str, int], int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def last_taken(self, owner: str, repo: str, number: int) -> int | None:
        """Unix seconds of the latest entry for the issue, or None."""
        return self.entries.get((owner, repo, number))

    def in_cooldown(
        self, owner: str, repo: str, number: int, cooldown_days: int, now_unix: int
    ) -> bool:
        """True if the issue was taken less than ``cooldown_days`` before ``now_unix``.

        A cooldown of zero disables the check. Future-dated entries count as
        in cooldown.
        """
        if cooldown_days == 0:
            return False
        taken_at = self.last_taken(owner, repo, number)
        if taken_at is None:
            return False
        return now_unix - taken_at < cooldown_days * _SECONDS_PER_DAY


def _field(obj: dict, name: str, line: int) -> object:
    if name not in obj:
        raise LedgerError(line, f"missing field `{name}`")
    return obj[name]


def _parse_line(text: str, line: int) -> tuple[tuple[str, str, int], int]:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LedgerError(line, str(exc)) from exc
    if not isinstance(obj, dict):
        raise LedgerError(line, "expected a JSON object")

    repo_field = _field(obj, "repo", line)
    number = _field(obj, "number", line)
    timestamp = _field(obj, "timestamp", line)
    if not isinstance(repo_field, str):
        raise LedgerError(line, "invalid type for field `repo`: expected a string")
    if not isinstance(number, int) or isinstance(number, bool) or not 0 <= number <= _U32_MAX:
        raise LedgerError(line, "invalid value for field `number`: expected u32")
    if not isinstance(timestamp, str):
        raise LedgerError(line, "invalid type for field `timestamp`: expected a string")

    owner, sep, repo = repo_field.partition("/")
    if not sep or not owner or not repo:
        raise LedgerError(line, f"malformed repo {_quote(repo_field)}: expected OWNER/REPO")

    secs = parse_iso8601_z(timestamp)
    if secs is None:
        raise LedgerError(
            line, f"malformed timestamp {_quote(timestamp)}: expected YYYY-MM-DDTHH:MM:SSZ"
        )
    return (owner, repo, number), secs


def parse_ledger(body: str) -> LedgerIndex:
    """Parse JSONL ledger text; blank lines are skipped and the latest timestamp wins."""
    entries: dict[tuple[str, str, int], int] = {}
    for line_no, raw in enumerate(body.split("\n"), start=1):
        text = raw.removesuffix("\r")
        if not text.strip():
            continue
        key, secs = _parse_line(text, line_no)
        if secs > entries.get(key, secs - 1):
            entries[key] = secs
    return LedgerIndex(entries)


def load_ledger(path: str | os.PathLike[str]) -> LedgerIndex:
    """Read and parse the ledger at ``path``; a missing file is an empty index."""
    try:
        body = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return LedgerIndex()
    except OSError as exc:
        raise ScanError.from_os_error(path, exc) from exc
    try:
        return parse_ledger(body)
    except LedgerError as exc:
        raise ScanError(path, f"ledger {Path(path)}: {exc}") from exc


def load_watchlist(path: str | os.PathLike[str]) -> Watchlist:
    """Read and parse the watchlist at ``path``."""
    try:
        body = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ScanError.from_os_error(path, exc) from exc
    try:
        return parse_watchlist(body)
    except WatchlistError as exc:
        raise ScanError(path, f"watchlist {Path(path)}: {exc}") from exc


def expand_tilde(path: str) -> Path:
    """Expand a leading ``~/`` against ``$HOME``; anything else is returned as is."""
    home = os.environ.get("HOME")
    if path.startswith("~/") and home is not None:
        return Path(home) / path[2:]
    return Path(path)


def resolve_token(token_path: str | None) -> str | None:
    """The GitHub token from ``token_path`` if given, else ``$GITHUB_TOKEN``; trimmed."""
    if token_path is not None:
        expanded = expand_tilde(token_path)
        try:
            raw = expanded.read_text(encoding="utf-8")
        except OSError as exc:
            raise ScanError.from_os_error(expanded, exc) from exc
        return raw.strip() or None
    env_value = os.environ.get("GITHUB_TOKEN")
    if env_value is not None and env_value.strip():
        return env_value.strip()
    return None