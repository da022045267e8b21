#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, TextIO

from prstats.config import DEFAULT_BASE_BRANCH, DEFAULT_WINDOW_DAYS, ReportConfig, parse_date, resolve_token
from prstats.domain.models import FilterField
from prstats.exceptions import ConfigError, PRStatsError
from prstats.ingestion.base import Ingestion
from prstats.ingestion.github_live import GitHubLiveIngestion
from prstats.ingestion.response_file import ResponseFileIngestion
from prstats.metrics.utils import filter_by_window
from prstats.providers.github.client import DEFAULT_GRAPHQL_URL
from prstats.report.builder import build_report

log = logging.getLogger("prstats")

FILTER_FIELDS = {
    "merged": FilterField.MERGED_AT,
    "created": FilterField.CREATED_AT,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarise merged pull requests of a GitHub repository.")
    parser.add_argument("--repo-owner", required=True, help="Repository owner (user or organisation)")
    parser.add_argument("--repo-name", required=True, help="Repository name")
    parser.add_argument("--base-branch", default=DEFAULT_BASE_BRANCH, help=f"Target branch (default: {DEFAULT_BASE_BRANCH})")
    parser.add_argument("--any-branch", action="store_true", help="Include PRs merged into any base branch")
    parser.add_argument("--start-date", help=f"ISO start date, exclusive (default: {DEFAULT_WINDOW_DAYS} days ago)")
    parser.add_argument("--end-date", help="ISO end date, exclusive (default: now)")
    parser.add_argument(
        "--filter-field",
        choices=sorted(FILTER_FIELDS),
        default="merged",
        help="Timestamp the date window applies to (default: merged)",
    )
    parser.add_argument("--token", help="GitHub token (or set GH_TOKEN / GITHUB_TOKEN)")
    parser.add_argument("--api-url", default=DEFAULT_GRAPHQL_URL, help="GraphQL endpoint")
    parser.add_argument("--timeout", type=float, default=15.0, help="HTTP timeout in seconds (default 15)")
    parser.add_argument("--max-attempts", type=int, default=3, help="Attempts on connection errors (default 3)")
    parser.add_argument("--from-file", help="Read a saved GraphQL response instead of calling the API")
    parser.add_argument("--save-response", help="Write the raw GraphQL response to this path (not with --from-file)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, environ=None) -> ReportConfig:
    environ = os.environ if environ is None else environ
    if args.from_file and args.save_response:
        raise ConfigError("--save-response cannot be combined with --from-file", option="save-response")
    now = datetime.now(timezone.utc)
    return ReportConfig(
        repo_owner=args.repo_owner,
        repo_name=args.repo_name,
        start_date=parse_date(args.start_date, now - timedelta(days=DEFAULT_WINDOW_DAYS), option="start-date"),
        end_date=parse_date(args.end_date, now, option="end-date"),
        base_branch=None if args.any_branch else args.base_branch,
        filter_field=FILTER_FIELDS[args.filter_field],
        token=resolve_token(args.token, environ),
        api_url=args.api_url,
        timeout=args.timeout,
        max_attempts=args.max_attempts,
        save_path=Path(args.save_response) if args.save_response else None,
    )


def run(cfg: ReportConfig, ingestion: Ingestion, out: Optional[TextIO] = None) -> None:
    prs = ingestion.ingest()
    in_window = filter_by_window(prs, cfg.start_date, cfg.end_date, cfg.filter_field)
    log.info("%s of %s pull requests have %s inside the window", len(in_window), len(prs), cfg.filter_field.value)
    build_report(cfg, in_window, out=out)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = build_config(args)
        if args.from_file:
            ingestion: Ingestion = ResponseFileIngestion(args.from_file)
        else:
            ingestion = GitHubLiveIngestion(cfg)
        run(cfg, ingestion)
    except PRStatsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
