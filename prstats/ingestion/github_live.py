from __future__ import annotations

import json
import logging
from typing import List, Optional

from prstats.adapters.github import GitHubAdapter
from prstats.config import ReportConfig
from prstats.domain.models import PullRequest
from prstats.ingestion.base import Ingestion
from prstats.providers.github.client import GitHubGraphQLClient
from prstats.providers.github.fetcher import GitHubPRFetcher, nodes_from_response

log = logging.getLogger(__name__)


class GitHubLiveIngestion(Ingestion):
    """
    Fetches merged pull requests for the configured repository with one
    GraphQL call, optionally saves the raw response, and parses it.
    """

    def __init__(self, cfg: ReportConfig, client: Optional[GitHubGraphQLClient] = None):
        self.cfg = cfg
        self.client = client

    def _make_client(self) -> GitHubGraphQLClient:
        return GitHubGraphQLClient(
            self.cfg.token,
            url=self.cfg.api_url,
            timeout=self.cfg.timeout,
            max_attempts=self.cfg.max_attempts,
        )

    def ingest(self) -> List[PullRequest]:
        client = self.client or self._make_client()
        fetcher = GitHubPRFetcher(client)
        log.info(
            "Fetching merged pull requests for %s/%s (base branch: %s)",
            self.cfg.repo_owner,
            self.cfg.repo_name,
            self.cfg.base_branch or "any",
        )
        try:
            data = fetcher.fetch_response(
                self.cfg.repo_owner,
                self.cfg.repo_name,
                base_branch=self.cfg.base_branch,
                order_field=self.cfg.filter_field.order_field,
            )
        finally:
            # Only close clients we created.
            if self.client is None:
                client.close()

        if self.cfg.save_path:
            self.cfg.save_path.parent.mkdir(parents=True, exist_ok=True)
            self.cfg.save_path.write_text(json.dumps({"data": data}, indent=2))
            log.info("Saved raw response to %s", self.cfg.save_path)

        prs = GitHubAdapter().parse_nodes(nodes_from_response(data))
        log.info("Fetched %s merged pull requests", len(prs))
        return prs
