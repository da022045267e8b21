from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from prstats.exceptions import NetworkError
from prstats.providers.github.client import GitHubGraphQLClient

log = logging.getLogger(__name__)

PULL_REQUESTS_QUERY = """
query getPullRequests($name: String!, $owner: String!, $baseBranch: String, $orderField: IssueOrderField!) {
  repository(name: $name, owner: $owner) {
    pullRequests(first: 100, orderBy: {field: $orderField, direction: DESC}, baseRefName: $baseBranch, states: [MERGED]) {
      nodes {
        number
        author {
          login
        }
        state
        mergedAt
        createdAt
        title
        changedFiles
      }
    }
  }
}
"""


class GitHubPRFetcher:
    """
    Fetches the 100 most relevant merged pull requests of one repository.
    Outputs the raw GraphQL payload; parsing happens downstream in the adapter.
    """

    def __init__(self, client: GitHubGraphQLClient):
        self.client = client

    def fetch_response(
        self,
        owner: str,
        name: str,
        base_branch: Optional[str] = None,
        order_field: str = "UPDATED_AT",
    ) -> Dict[str, Any]:
        variables = {
            "name": name,
            "owner": owner,
            "baseBranch": base_branch,
            "orderField": order_field,
        }
        log.debug("Querying merged pull requests with %s", variables)
        data = self.client.request(PULL_REQUESTS_QUERY, variables)
        if not data.get("repository"):
            raise NetworkError(f"Repository {owner}/{name} not found or not visible", provider="github")
        return data

    def list_merged_prs(
        self,
        owner: str,
        name: str,
        base_branch: Optional[str] = None,
        order_field: str = "UPDATED_AT",
    ) -> List[Dict[str, Any]]:
        data = self.fetch_response(owner, name, base_branch=base_branch, order_field=order_field)
        return nodes_from_response(data)


def nodes_from_response(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Pull the PR node list out of a `data` payload."""
    repository = data.get("repository") or {}
    return list((repository.get("pullRequests") or {}).get("nodes") or [])


__all__ = ["GitHubPRFetcher", "PULL_REQUESTS_QUERY", "nodes_from_response"]
