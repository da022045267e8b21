from typing import Dict

from prstats.metrics.base import Metric
from prstats.metrics.utils import count_by_author
from prstats.domain.models import MetricContext, MetricResult


class CountByAuthor(Metric):
    @property
    def slug(self) -> str:
        return "count_by_author"

    @property
    def name(self) -> str:
        return "Count by author"

    def run(self, context: MetricContext) -> MetricResult:
        counts = count_by_author(context.pull_requests)

        top = max(counts.items(), key=lambda item: item[1]) if counts else None
        if top:
            summary = f"{len(counts)} authors merged {len(context.pull_requests)} PRs. Most active: {top[0]} ({top[1]})."
        else:
            summary = "No merged PRs in window."
        details: Dict[str, object] = {
            "authors": len(counts),
            "counts": counts,
        }

        return MetricResult(
            metric_slug=self.slug,
            summary=summary,
            details=details,
        )
