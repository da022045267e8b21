from typing import Dict

from prstats.common.time_utils import format_distance
from prstats.metrics.base import Metric
from prstats.metrics.utils import time_to_merge
from prstats.domain.models import MetricContext, MetricResult


class TimeToMerge(Metric):
    @property
    def slug(self) -> str:
        return "time_to_merge"

    @property
    def name(self) -> str:
        return "Time to merge"

    def run(self, context: MetricContext) -> MetricResult:
        # Raises EmptyDatasetError when the window holds no PRs.
        stats = time_to_merge(context.pull_requests)

        summary = (
            f"{stats.count} merged PRs. Median: {format_distance(stats.median.duration)}, "
            f"p90: {format_distance(stats.p90.duration)} (#{stats.p90.pull_request.number})."
        )
        details: Dict[str, object] = {
            "stats": stats,
            "merged_count": stats.count,
        }

        return MetricResult(
            metric_slug=self.slug,
            summary=summary,
            details=details,
        )
