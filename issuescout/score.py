"""Weighted scoring of issue heuristics.

Eight heuristics feed the score. Six are binary and two decay linearly:
``recent`` over 14 days and ``active_repo`` over 30 days. The total is the
weighted sum, capped at 1.0 for display. Each heuristic's contribution is
kept in the breakdown so it can be explained.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["Factors", "Weights", "Breakdown", "score"]

RECENT_HORIZON_DAYS = 14.0
ACTIVE_HORIZON_DAYS = 30.0


@dataclass(frozen=True)
class Factors:
    """Observed properties of one issue and the repository it belongs to."""

    has_root_cause: bool = False
    no_crosslinked_pr: bool = False
    updated_days_ago: float = 0.0
    contributing_ok: bool = False
    has_reproducer: bool = False
    effort_ok: bool = False
    maintainer_touched: bool = False
    pushed_days_ago: float = 0.0


@dataclass(frozen=True)
class Weights:
    """Weight of each heuristic; the defaults are the reference weighting."""

    root_cause: float = 0.30
    no_pr: float = 0.20
    recent: float = 0.15
    contributing_ok: float = 0.15
    reproducer: float = 0.10
    effort_ok: float = 0.10
    maintainer_touched: float = 0.05
    active_repo: float = 0.00


@dataclass(frozen=True)
class Breakdown:
    """A capped total plus each heuristic's ``(name, contribution)``, in order."""

    total: float
    parts: list[tuple[str, float]] = field(default_factory=list)


def _decay(days: float, horizon: float) -> float:
    return min(max(1.0 - days / horizon, 0.0), 1.0)


def score(factors: Factors, weights: Weights) -> Breakdown:
    """Weighted sum of the heuristics, capped at 1.0."""
    recent = _decay(factors.updated_days_ago, RECENT_HORIZON_DAYS)
    active = _decay(factors.pushed_days_ago, ACTIVE_HORIZON_DAYS)

    binary = [
        ("root_cause", weights.root_cause, factors.has_root_cause),
        ("no_pr", weights.no_pr, factors.no_crosslinked_pr),
        ("contributing_ok", weights.contributing_ok, factors.contributing_ok),
        ("reproducer", weights.reproducer, factors.has_reproducer),
        ("effort_ok", weights.effort_ok, factors.effort_ok),
        ("maintainer_touched", weights.maintainer_touched, factors.maintainer_touched),
    ]
    contributions = {name: weight if hit else 0.0 for name, weight, hit in binary}
    contributions["recent"] = weights.recent * recent
    contributions["active_repo"] = weights.active_repo * active

    order = (
        "root_cause",
        "no_pr",
        "recent",
        "contributing_ok",
        "reproducer",
        "effort_ok",
        "maintainer_touched",
        "active_repo",
    )
    parts = [(name, contributions[name]) for name in order]
    total = min(sum(value for _, value in parts), 1.0)
    return Breakdown(total=total, parts=parts)