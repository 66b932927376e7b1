"""Parser for the narrow YAML-shaped watchlist of GitHub repositories.

The accepted format is::

    repos:
      - owner1/repo1
      - owner2/repo2

plus ``# comment`` lines, inline comments and blank lines, which are ignored.
Unknown top-level content, missing list markers, whitespace inside an entry
and duplicates are all errors. Empty and comments-only input parse to an
empty watchlist.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

__all__ = [
    "WatchEntry",
    "Watchlist",
    "WatchlistError",
    "UnexpectedTopLevelError",
    "ExpectedDashError",
    "MalformedEntryError",
    "EmptySegmentError",
    "InvalidCharError",
    "DuplicateError",
    "parse",
]


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass(frozen=True)
class WatchEntry:
    """One ``owner/repo`` entry from the watchlist."""

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class Watchlist:
    """A parsed watchlist; entries are unique and keep source order."""

    repos: list[WatchEntry] = field(default_factory=list)


class WatchlistError(ValueError):
    """A watchlist parse failure at a 1-based source line."""

    template = "line {line}: invalid content {value}"

    def __init__(self, line: int, value: str) -> None:
        self.line = line
        self.value = value
        super().__init__(self.template.format(line=line, value=_quote(value)))


class UnexpectedTopLevelError(WatchlistError):
    template = "line {line}: unexpected top-level content {value}; expected `repos:`"

    @property
    def content(self) -> str:
        return self.value


class ExpectedDashError(WatchlistError):
    template = "line {line}: expected list entry starting with `-`, got {value}"

    @property
    def content(self) -> str:
        return self.value


class MalformedEntryError(WatchlistError):
    template = "line {line}: malformed entry {value}; expected `owner/repo`"

    @property
    def entry(self) -> str:
        return self.value


class EmptySegmentError(WatchlistError):
    template = "line {line}: owner or repo segment is empty in {value}"

    @property
    def entry(self) -> str:
        return self.value


class InvalidCharError(WatchlistError):
    template = "line {line}: whitespace not allowed inside entry {value}"

    @property
    def entry(self) -> str:
        return self.value


class DuplicateError(WatchlistError):
    template = "line {line}: duplicate entry {value}"

    @property
    def slug(self) -> str:
        return self.value


def _strip_comment(line: str) -> str:
    head, _, _ = line.partition("#")
    return head


def _parse_entry(trimmed: str, line: int) -> WatchEntry:
    if not trimmed.startswith("-"):
        raise ExpectedDashError(line, trimmed)
    body = trimmed[1:].strip()

    if not body:
        raise MalformedEntryError(line, body)
    if any(ch.isspace() for ch in body):
        raise InvalidCharError(line, body)

    parts = body.split("/")
    if len(parts) != 2:
        raise MalformedEntryError(line, body)
    owner, repo = parts
    if not owner or not repo:
        raise EmptySegmentError(line, body)
    return WatchEntry(owner=owner, repo=repo)


def parse(text: str) -> Watchlist:
    """Parse watchlist text, raising a ``WatchlistError`` subclass on bad input."""
    repos: list[WatchEntry] = []
    seen_repos_key = False

    for line_no, raw_line in enumerate(text.split("\n"), start=1):
        trimmed = _strip_comment(raw_line.removesuffix("\r")).strip()
        if not trimmed:
            continue
        if not seen_repos_key:
            if trimmed != "repos:":
                raise UnexpectedTopLevelError(line_no, trimmed)
            seen_repos_key = True
            continue
        entry = _parse_entry(trimmed, line_no)
        if entry in repos:
            raise DuplicateError(line_no, entry.slug)
        repos.append(entry)

    return Watchlist(repos=repos)