from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from prstats.common.time_utils import format_distance
from prstats.config import ReportConfig
from prstats.domain.models import DurationStat, MetricContext, MetricResult, PullRequest
from prstats.exceptions import EmptyDatasetError
from prstats.metrics import get_metrics
from prstats.report.renderer import LogBlock

DATE_FORMAT = "%Y-%m-%d"

log = logging.getLogger(__name__)


def _with_number(stat: DurationStat, unit: Optional[str] = None) -> List[str]:
    values = [format_distance(stat.duration, unit=unit)]
    if stat.pull_request is not None:
        values.append(f"(#{stat.pull_request.number})")
    return values


def info_block(cfg: ReportConfig, prs: List[PullRequest]) -> LogBlock:
    block = LogBlock("Info")
    block.log("Owner", cfg.repo_owner)
    block.log("Repository name", cfg.repo_name)
    block.log("Base branch", cfg.base_branch or "any")
    block.log("Filter field", cfg.filter_field.value)
    block.log("From", cfg.start_date.strftime(DATE_FORMAT))
    block.log("To", cfg.end_date.strftime(DATE_FORMAT))
    block.log("Total", len(prs))
    return block


def pull_requests_block(prs: List[PullRequest]) -> LogBlock:
    block = LogBlock("Pull requests")
    for pr in sorted(prs, key=lambda p: p.open_duration):
        block.log_plain(pr.title, f"- {format_distance(pr.open_duration)}", f"(#{pr.number})")
    return block


def author_block(result: MetricResult) -> LogBlock:
    block = LogBlock("Count by author")
    for login, count in result.details["counts"].items():
        block.log(login, count)
    return block


def time_to_merge_block(result: MetricResult) -> LogBlock:
    stats = result.details["stats"]
    block = LogBlock("Time to merge")
    block.log("Shortest", *_with_number(stats.shortest))
    block.log("Longest", *_with_number(stats.longest))
    block.log("Mean (days)", *_with_number(stats.mean))
    block.log("Mean (hours)", *_with_number(stats.mean, unit="h"))
    block.log("Median", *_with_number(stats.median))
    block.log("p90", *_with_number(stats.p90))
    return block


# Metric slug -> block renderer, in report order.
METRIC_BLOCKS = {
    "count_by_author": author_block,
    "time_to_merge": time_to_merge_block,
}


def build_report(cfg: ReportConfig, prs: List[PullRequest], out: Optional[TextIO] = None) -> None:
    """
    Render the full report for already-filtered pull requests.

    Raises:
        EmptyDatasetError: After printing the info block, when `prs` is empty.
    """
    out = out or sys.stdout
    info_block(cfg, prs).render(out)

    if not prs:
        print(
            f"No merged pull requests between {cfg.start_date.strftime(DATE_FORMAT)} "
            f"and {cfg.end_date.strftime(DATE_FORMAT)}.",
            file=out,
        )
        raise EmptyDatasetError(f"No pull requests matched the {cfg.filter_field.value} window")

    context = MetricContext(pull_requests=prs, start_date=cfg.start_date, end_date=cfg.end_date)
    available_metrics = get_metrics()
    # Compute everything before printing so a failure never leaves a partial report.
    blocks = [pull_requests_block(prs)]
    for slug, render_block in METRIC_BLOCKS.items():
        metric = available_metrics[slug]()
        result = metric.run(context)
        log.info("%s: %s", metric.name, result.summary)
        blocks.append(render_block(result))
    for block in blocks:
        block.render(out)
