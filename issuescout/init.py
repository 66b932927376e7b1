"""Write a starter config and watchlist into the user's config directory.

Default paths follow the XDG base-directory convention: ``$XDG_CONFIG_HOME``
when it is absolute, otherwise ``$HOME/.config``. Existing files are kept
unless ``force`` is set.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "CONFIG_TEMPLATE",
    "WATCHLIST_TEMPLATE",
    "WriteOutcome",
    "InitSummary",
    "InitError",
    "NoConfigDirError",
    "default_config_path",
    "default_watchlist_path",
    "write_starter_files",
    "run",
]

CONFIG_TEMPLATE = """\
# scout configuration

[auth]
# Path to a file holding a GitHub token. When unset, $GITHUB_TOKEN is used.
# token_path = "~/.config/scout/token"

[weights]
root_cause         = 0.30
no_pr              = 0.20
recent             = 0.15
contributing_ok    = 0.15
reproducer         = 0.10
effort_ok          = 0.10
maintainer_touched = 0.05
active_repo        = 0.00

[filters]
max_age_days   = 30
min_score      = 0.50
cooldown_days  = 14
exclude_labels = ["wontfix", "invalid", "duplicate"]

[output]
color = "auto"
limit = 20
"""

WATCHLIST_TEMPLATE = """\
# scout watchlist: the repositories to scan for issues.
# List one OWNER/REPO per line under `repos:`, for example:
#
#   - owner/repo
#   - another-owner/another-repo

repos:
"""


class WriteOutcome(Enum):
    """What happened to one starter file."""

    CREATED = "created"
    PRESERVED = "preserved"
    OVERWRITTEN = "overwritten"


@dataclass(frozen=True)
class InitSummary:
    """Paths written and the outcome for each."""

    config_path: Path
    config: WriteOutcome
    watchlist_path: Path
    watchlist: WriteOutcome


class InitError(Exception):
    """Base error for writing starter files."""


class NoConfigDirError(InitError):
    """Neither ``$XDG_CONFIG_HOME`` nor ``$HOME`` is set."""

    def __init__(self) -> None:
        super().__init__(
            "cannot resolve default config dir: neither $XDG_CONFIG_HOME nor $HOME is set"
        )


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg) / "scout"
    home = os.environ.get("HOME")
    if home is None:
        raise NoConfigDirError()
    return Path(home) / ".config" / "scout"


def default_config_path() -> Path:
    """Default location of the TOML config."""
    return _default_config_dir() / "config.toml"


def default_watchlist_path() -> Path:
    """Default location of the YAML watchlist."""
    return _default_config_dir() / "watchlist.yaml"


def _write_one(path: Path, contents: str, force: bool) -> WriteOutcome:
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        if not force:
            return WriteOutcome.PRESERVED
        outcome = WriteOutcome.OVERWRITTEN
    else:
        outcome = WriteOutcome.CREATED
    path.write_text(contents, encoding="utf-8")
    return outcome


def write_starter_files(
    config_path: str | os.PathLike[str],
    watchlist_path: str | os.PathLike[str],
    force: bool = False,
) -> InitSummary:
    """Write both templates, creating parent directories; keep existing files unless forced."""
    config_path = Path(config_path)
    watchlist_path = Path(watchlist_path)
    config = _write_one(config_path, CONFIG_TEMPLATE, force)
    watchlist = _write_one(watchlist_path, WATCHLIST_TEMPLATE, force)
    return InitSummary(config_path, config, watchlist_path, watchlist)


_OUTCOME_LINES = {
    WriteOutcome.CREATED: "created {path}",
    WriteOutcome.PRESERVED: "kept    {path} (use --force to overwrite)",
    WriteOutcome.OVERWRITTEN: "wrote   {path}",
}


def run(config_override: str | None, watchlist_override: str | None, force: bool = False) -> int:
    """Write the starter files and report each; return a process exit code."""
    try:
        config_path = Path(config_override) if config_override is not None else default_config_path()
        watchlist_path = (
            Path(watchlist_override) if watchlist_override is not None else default_watchlist_path()
        )
        summary = write_starter_files(config_path, watchlist_path, force)
    except InitError as exc:
        print(f"scout init: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"scout init: filesystem error at {exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    print(_OUTCOME_LINES[summary.config].format(path=summary.config_path))
    print(_OUTCOME_LINES[summary.watchlist].format(path=summary.watchlist_path))
    return 0