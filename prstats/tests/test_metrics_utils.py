from datetime import datetime, timezone, timedelta

import pytest

from prstats.domain.models import Author, FilterField, PullRequest
from prstats.exceptions import EmptyDatasetError
from prstats.metrics.utils import count_by_author, filter_by_window, median, nearest_rank, time_to_merge

START = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _make_pr(number: int, login: str = "alice", created_delta: float = 0, open_hours: float = 1) -> PullRequest:
    created = START + timedelta(hours=created_delta)
    return PullRequest(
        number=number,
        title=f"PR {number}",
        author=Author(login=login),
        created_at=created,
        merged_at=created + timedelta(hours=open_hours),
    )


def test_median_odd_and_even():
    assert median([1, 2, 3]) == 2
    assert median([1, 2, 3, 4]) == 2.5
    assert median([3, 1, 2]) == 2


def test_median_does_not_reorder_input():
    values = [3, 1, 2]
    median(values)
    assert values == [3, 1, 2]


def test_median_of_timedeltas():
    values = [timedelta(hours=4), timedelta(hours=1), timedelta(hours=2), timedelta(hours=3)]
    assert median(values) == timedelta(hours=2, minutes=30)


def test_median_empty_raises():
    with pytest.raises(EmptyDatasetError):
        median([])


def test_nearest_rank_keeps_item():
    items = [{"id": i, "v": v} for i, v in enumerate([15, 20, 35, 40, 50])]
    assert nearest_rank(items, 90, key=lambda i: i["v"])["id"] == 4
    assert nearest_rank(items, 40, key=lambda i: i["v"])["id"] == 1
    assert nearest_rank(items, 0, key=lambda i: i["v"])["id"] == 0
    assert nearest_rank(items, 100, key=lambda i: i["v"])["id"] == 4


def test_nearest_rank_ten_items():
    items = list(range(10, 0, -1))
    # rank ceil(0.9 * 10) = 9 -> ninth smallest
    assert nearest_rank(items, 90, key=lambda v: v) == 9


def test_nearest_rank_rejects_bad_input():
    with pytest.raises(EmptyDatasetError):
        nearest_rank([], 90, key=lambda v: v)
    with pytest.raises(ValueError):
        nearest_rank([1], 120, key=lambda v: v)


def test_count_by_author_keeps_first_seen_order():
    prs = [_make_pr(1, "A"), _make_pr(2, "B"), _make_pr(3, "A")]
    counts = count_by_author(prs)
    assert counts == {"A": 2, "B": 1}
    assert list(counts) == ["A", "B"]


def test_count_by_author_empty():
    assert count_by_author([]) == {}


def test_shortest_and_longest_tie_break():
    prs = [_make_pr(1, open_hours=5), _make_pr(2, open_hours=1), _make_pr(3, open_hours=9), _make_pr(4, open_hours=1)]
    stats = time_to_merge(prs)
    assert stats.shortest.pull_request.number == 2
    assert stats.longest.pull_request.number == 3
    assert stats.shortest.duration == timedelta(hours=1)
    assert stats.longest.duration == timedelta(hours=9)


def test_time_to_merge_aggregates():
    prs = [_make_pr(1, open_hours=5), _make_pr(2, open_hours=1), _make_pr(3, open_hours=9), _make_pr(4, open_hours=1)]
    stats = time_to_merge(prs)
    assert stats.count == 4
    assert stats.mean.duration == timedelta(hours=4)
    assert stats.mean.pull_request is None
    assert stats.median.duration == timedelta(hours=3)
    assert stats.p90.pull_request.number == 3


def test_time_to_merge_tolerates_negative_duration():
    prs = [_make_pr(1, open_hours=-2), _make_pr(2, open_hours=4)]
    stats = time_to_merge(prs)
    assert stats.shortest.pull_request.number == 1
    assert stats.mean.duration == timedelta(hours=1)


def test_time_to_merge_empty_raises():
    with pytest.raises(EmptyDatasetError):
        time_to_merge([])


def test_filter_excludes_boundaries():
    start = START
    end = START + timedelta(days=1)
    on_start = _make_pr(1, created_delta=0, open_hours=2)
    inside = _make_pr(2, created_delta=1, open_hours=2)
    on_end = _make_pr(3, created_delta=24, open_hours=2)

    kept = filter_by_window([on_start, inside, on_end], start, end, FilterField.CREATED_AT)
    assert [pr.number for pr in kept] == [2]


def test_filter_by_merged_at():
    start = START + timedelta(hours=3)
    end = START + timedelta(hours=10)
    merged_on_start = _make_pr(1, created_delta=0, open_hours=3)
    merged_inside = _make_pr(2, created_delta=0, open_hours=5)
    created_inside_merged_late = _make_pr(3, created_delta=4, open_hours=10)

    prs = [merged_on_start, merged_inside, created_inside_merged_late]
    assert [pr.number for pr in filter_by_window(prs, start, end, FilterField.MERGED_AT)] == [2]
    assert [pr.number for pr in filter_by_window(prs, start, end, FilterField.CREATED_AT)] == [3]


def test_filter_preserves_order_and_allows_empty():
    prs = [_make_pr(n, created_delta=n) for n in (5, 3, 4)]
    kept = filter_by_window(prs, START, START + timedelta(days=1), "created_at")
    assert [pr.number for pr in kept] == [5, 3, 4]
    assert filter_by_window(prs, START + timedelta(days=2), START + timedelta(days=3)) == []
