import json
from pathlib import Path

import pytest

from issuescout.ledger import (
    LedgerError,
    LedgerIndex,
    ScanError,
    expand_tilde,
    load_ledger,
    load_watchlist,
    parse_ledger,
    resolve_token,
)
from issuescout.took import IssueRef, append_entry, parse_iso8601_z
from issuescout.watchlist import WatchEntry

DAY = 86_400


def _line(repo="o/r", number=1, timestamp="2026-04-25T07:30:00Z", **extra):
    return json.dumps({"repo": repo, "number": number, "timestamp": timestamp, **extra})


def test_empty_body_yields_empty_index():
    index = parse_ledger("")
    assert len(index) == 0
    assert index == LedgerIndex()


def test_blank_lines_only_yield_empty_index():
    assert len(parse_ledger("\n  \n\n")) == 0


def test_single_entry_is_indexed():
    index = parse_ledger(_line(event="took") + "\n")
    assert len(index) == 1
    assert index.last_taken("o", "r", 1) == parse_iso8601_z("2026-04-25T07:30:00Z")
    assert index.last_taken("o", "r", 2) is None


def test_latest_timestamp_wins_in_either_order():
    early = _line(timestamp="2026-04-01T00:00:00Z")
    late = _line(timestamp="2026-04-20T00:00:00Z")
    forward = parse_ledger(f"{early}\n{late}\n")
    backward = parse_ledger(f"{late}\n{early}\n")
    assert forward == backward
    assert len(forward) == 1
    assert forward.last_taken("o", "r", 1) == parse_iso8601_z("2026-04-20T00:00:00Z")


def test_legacy_lines_without_event_parse():
    index = parse_ledger(_line(repo="a/b", number=3))
    assert len(index) == 1
    assert index.last_taken("a", "b", 3) == parse_iso8601_z("2026-04-25T07:30:00Z")


def test_malformed_json_reports_line_number():
    body = _line() + "\n\nnot json\n"
    with pytest.raises(LedgerError) as info:
        parse_ledger(body)
    assert info.value.line == 3
    assert str(info.value).startswith("line 3:")


@pytest.mark.parametrize("repo", ["noslash", "/r", "o/"])
def test_malformed_repo_rejected(repo):
    with pytest.raises(LedgerError) as info:
        parse_ledger(_line(repo=repo))
    assert info.value.line == 1
    assert "malformed repo" in str(info.value)


def test_malformed_timestamp_rejected():
    with pytest.raises(LedgerError) as info:
        parse_ledger(_line(timestamp="2026-04-25"))
    assert "malformed timestamp" in str(info.value)


@pytest.mark.parametrize("number", [-1, 1.5, "7", True, 2**32])
def test_bad_number_rejected(number):
    with pytest.raises(LedgerError) as info:
        parse_ledger(_line(number=number))
    assert info.value.line == 1


def test_missing_field_rejected():
    with pytest.raises(LedgerError) as info:
        parse_ledger(json.dumps({"repo": "o/r", "number": 1}))
    assert "timestamp" in str(info.value)


def test_cooldown_zero_disables():
    index = parse_ledger(_line())
    now = parse_iso8601_z("2026-04-25T07:30:00Z")
    assert index.in_cooldown("o", "r", 1, 0, now) is False


def test_cooldown_unknown_issue_is_false():
    index = parse_ledger(_line())
    now = parse_iso8601_z("2026-04-25T07:30:00Z")
    assert index.in_cooldown("o", "r", 99, 14, now) is False


def test_cooldown_window_boundaries():
    index = parse_ledger(_line())
    taken = parse_iso8601_z("2026-04-25T07:30:00Z")
    assert index.in_cooldown("o", "r", 1, 14, taken) is True
    assert index.in_cooldown("o", "r", 1, 14, taken + 14 * DAY - 1) is True
    assert index.in_cooldown("o", "r", 1, 14, taken + 14 * DAY) is False


def test_future_dated_take_is_in_cooldown():
    index = parse_ledger(_line())
    taken = parse_iso8601_z("2026-04-25T07:30:00Z")
    assert index.in_cooldown("o", "r", 1, 14, taken - DAY) is True


def test_load_missing_ledger_is_empty(tmp_path):
    assert len(load_ledger(tmp_path / "missing.jsonl")) == 0


def test_load_ledger_directory_is_scan_error(tmp_path):
    with pytest.raises(ScanError) as info:
        load_ledger(tmp_path)
    assert info.value.path == tmp_path


def test_load_ledger_round_trips_appended_entries(tmp_path):
    ledger = tmp_path / "ledger.jsonl"
    issue = IssueRef(owner="a", repo="b", number=7)
    append_entry(ledger, issue, "2026-04-01T00:00:00Z")
    append_entry(ledger, issue, "2026-04-02T00:00:00Z")
    index = load_ledger(ledger)
    assert len(index) == 1
    assert index.last_taken("a", "b", 7) == parse_iso8601_z("2026-04-02T00:00:00Z")


def test_load_ledger_parse_error_carries_path(tmp_path):
    ledger = tmp_path / "ledger.jsonl"
    ledger.write_text("garbage\n")
    with pytest.raises(ScanError) as info:
        load_ledger(ledger)
    assert str(info.value).startswith(f"ledger {ledger}: line 1:")
    assert isinstance(info.value.__cause__, LedgerError)


def test_load_watchlist_parses_file(tmp_path):
    path = tmp_path / "watchlist.yaml"
    path.write_text("repos:\n  - a/b\n")
    assert load_watchlist(path).repos == [WatchEntry(owner="a", repo="b")]


def test_load_watchlist_bad_content(tmp_path):
    path = tmp_path / "watchlist.yaml"
    path.write_text("weights:\n")
    with pytest.raises(ScanError) as info:
        load_watchlist(path)
    assert str(info.value).startswith(f"watchlist {path}: line 1")


def test_load_watchlist_missing_file(tmp_path):
    with pytest.raises(ScanError) as info:
        load_watchlist(tmp_path / "nope.yaml")
    assert "filesystem error" in str(info.value)


def test_resolve_token_from_file_is_trimmed(tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    token_file = tmp_path / "token"
    token_file.write_text("token\n")
    assert resolve_token(str(token_file)) == "token"


def test_resolve_token_empty_file_is_none(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "token")
    token_file = tmp_path / "token"
    token_file.write_text("  \n")
    assert resolve_token(str(token_file)) is None


def test_resolve_token_missing_file_is_error(tmp_path):
    with pytest.raises(ScanError):
        resolve_token(str(tmp_path / "absent"))


def test_resolve_token_falls_back_to_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "token")
    assert resolve_token(None) == "token"


def test_resolve_token_none_without_sources(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    assert resolve_token(None) is None


def test_resolve_token_expands_tilde(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "tok").write_text("token")
    assert resolve_token("~/tok") == "token"


def test_expand_tilde(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert expand_tilde("~/a/b") == tmp_path / "a" / "b"
    assert expand_tilde("~a") == Path("~a")
    assert expand_tilde("/abs/path") == Path("/abs/path")


def test_expand_tilde_without_home(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    assert expand_tilde("~/x") == Path("~/x")