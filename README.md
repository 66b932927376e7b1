# issuescout

Building blocks for ranking open-source issues by how likely they are to be
worth contributing to, plus a small command line for setting up a config
directory and keeping a local ledger of issues you have engaged with.

An issue's score is a weighted sum of eight heuristics: whether the body
names a root cause, whether no open pull request links to it, how recently it
was updated (decaying linearly over 14 days), whether the project's
contributing guide is friendly, whether there is a reproducer, whether the
issue looks like low-effort work, whether a maintainer has commented, and how
recently the repository was pushed (decaying linearly over 30 days). The
total is capped at 1.0 and every heuristic's contribution is kept, so a score
can always be explained.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

Write a starter `config.toml` and `watchlist.yaml` under
`$XDG_CONFIG_HOME/scout/` (or `$HOME/.config/scout/` when `XDG_CONFIG_HOME`
is unset or not an absolute path). Existing files are kept unless `--force`
is given:

```
issuescout init
issuescout init --force
```

Record that you took on an issue:

```
issuescout took owner/repo#42
```

Record that you investigated an issue and walked away from it. The ledger
line is the same, but tagged `dropped` instead of `took`:

```
issuescout dropped owner/repo#42
```

The options `--config PATH` and `--watchlist PATH` (used by `init`) and
`--ledger PATH` (used by `took` and `dropped`) point at files other than the
defaults. They may be given before or after the subcommand:

```
issuescout --ledger ./ledger.jsonl took owner/repo#42
issuescout init --config ./config.toml --watchlist ./watchlist.yaml
```

Each command prints a one-line summary per file on success. On failure it
prints the error to standard error and exits with status 1. `--version`
prints the version.

## Watchlist format

The watchlist is a small YAML-shaped list of repositories:

```yaml
repos:
  - owner1/repo1
  - owner2/repo2   # inline comments are fine
```

Blank lines and `#` comments are ignored. Unknown top-level content, entries
without a leading `-`, whitespace inside an entry, anything other than exactly
one `/`, empty owner or repo segments and duplicates raise a subclass of
`issuescout.watchlist.WatchlistError` carrying the 1-based line number.

## Ledger format

One JSON object per line, appended and never truncated:

```
{"repo":"owner/repo","number":42,"timestamp":"2026-04-25T07:30:00Z","event":"took"}
```

`issuescout.ledger.load_ledger` reads a ledger into a `LedgerIndex`. A
missing file gives an empty index, blank lines are skipped, and a malformed
line raises `ScanError` naming the file and line. When an issue appears more
than once the latest timestamp wins, so ledgers can be merged with
`cat a b > c`. The `event` field is not read; `took` and `dropped` lines
count the same. `LedgerIndex.in_cooldown` answers whether an issue was
recorded less than a given number of days ago (zero days disables it).

## Library use

```python
from issuescout import render, score, took, watchlist

wl = watchlist.parse("repos:\n  - owner/repo\n")
print([(e.owner, e.repo) for e in wl.repos])      # [('owner', 'repo')]

factors = score.Factors(has_root_cause=True, updated_days_ago=365.0, pushed_days_ago=365.0)
breakdown = score.score(factors, score.Weights())
print(breakdown.total)                            # about 0.30
for name, value in breakdown.parts:
    print(name, value)

row = render.RankedRow("owner/repo", 42, "Crash on start", "https://example.com/42", breakdown)
print(render.table_markdown(render.sort_rows([row]), limit=20))
print(render.render_json([row]))

print(took.format_iso8601_z(1_234_567_890))       # 2009-02-13T23:31:30Z
print(took.parse_iso8601_z("2009-02-13T23:31:30Z"))  # 1234567890
print(took.parse_issue_ref("owner/repo#42"))      # owner/repo#42
```

`issuescout.ledger` also provides `load_watchlist` (read and parse a
watchlist file) and `resolve_token` (a GitHub token from a file, with `~/`
expanded, or else from `$GITHUB_TOKEN`).

## What it does not do

The package does not talk to GitHub. There is no command that scans the
watchlist, fetches issues and prints a ranking, and none that explains one
issue's score: the heuristic inputs in `Factors` must be supplied by the
caller. The `config.toml` written by `init` is not read by anything in the
package; its weights and filters are applied only if you pass matching
`Weights` yourself.