import logging
import math
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Sequence, TypeVar

from prstats.domain.models import DurationStat, FilterField, PullRequest, TimeToMergeStats
from prstats.exceptions import EmptyDatasetError

log = logging.getLogger(__name__)

T = TypeVar("T")


def filter_by_window(
    prs: Iterable[PullRequest],
    start: datetime,
    end: datetime,
    field: FilterField = FilterField.MERGED_AT,
) -> List[PullRequest]:
    """Keep PRs whose `field` timestamp lies strictly between start and end, in input order."""
    field = FilterField(field)
    return [pr for pr in prs if start < getattr(pr, field.value) < end]


def median(values: Sequence):
    """Median of numbers or timedeltas; the two middle values are averaged for even counts."""
    if not values:
        raise EmptyDatasetError("Cannot compute the median of an empty sample")
    ordered = sorted(values)
    half = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[half]
    return (ordered[half - 1] + ordered[half]) / 2


def nearest_rank(items: Sequence[T], pct: float, key: Callable[[T], object]) -> T:
    """
    Nearest-rank percentile: the item at rank ceil(pct/100 * n) once sorted by key.

    Returns the original item rather than the bare value so callers keep track of
    which record produced it. Ties keep their input order.
    """
    if not items:
        raise EmptyDatasetError("Cannot compute a percentile of an empty sample")
    if not 0 <= pct <= 100:
        raise ValueError(f"Percentile must be within [0, 100], got {pct}")
    ordered = sorted(items, key=key)
    idx = math.ceil(pct * len(ordered) / 100) - 1
    return ordered[min(max(idx, 0), len(ordered) - 1)]


def count_by_author(prs: Iterable[PullRequest]) -> Dict[str, int]:
    """Merged PR count per author login, in order of first appearance."""
    counts: Dict[str, int] = {}
    for pr in prs:
        login = pr.author.login
        counts[login] = counts.get(login, 0) + 1
    return counts


def time_to_merge(prs: Sequence[PullRequest]) -> TimeToMergeStats:
    if not prs:
        raise EmptyDatasetError("No merged pull requests to compute time to merge over")

    for pr in prs:
        if pr.open_duration < timedelta(0):
            log.warning("PR #%s was merged before it was created (%s -> %s)", pr.number, pr.created_at, pr.merged_at)

    # min/max return the first of several equal candidates.
    shortest = min(prs, key=lambda pr: pr.open_duration)
    longest = max(prs, key=lambda pr: pr.open_duration)
    durations = [pr.open_duration for pr in prs]
    total = sum(durations, timedelta(0))
    p90 = nearest_rank(prs, 90, key=lambda pr: pr.open_duration)

    return TimeToMergeStats(
        count=len(prs),
        shortest=DurationStat(duration=shortest.open_duration, pull_request=shortest),
        longest=DurationStat(duration=longest.open_duration, pull_request=longest),
        mean=DurationStat(duration=total / len(prs)),
        median=DurationStat(duration=median(durations)),
        p90=DurationStat(duration=p90.open_duration, pull_request=p90),
    )
