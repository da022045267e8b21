from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log
from tenacity.wait import wait_base

from prstats.exceptions import AuthError, NetworkError

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_ACCEPT = "application/vnd.github+json"
PROVIDER = "github"

# GraphQL error types GitHub uses for rejected or insufficient credentials.
AUTH_ERROR_TYPES = {"FORBIDDEN", "UNAUTHORIZED", "INSUFFICIENT_SCOPES"}

log = logging.getLogger(__name__)


def _headers(token: Optional[str], accept: str = DEFAULT_ACCEPT) -> Dict[str, str]:
    h = {"Accept": accept}
    if token:
        h["Authorization"] = f"Bearer {token}"
    return h


class GitHubGraphQLClient:
    """
    Thin GitHub GraphQL client. Transport failures (connection errors, timeouts)
    are retried with backoff; HTTP and GraphQL level failures are not.
    Synchronous interface via httpx.Client for CLI use.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        url: str = DEFAULT_GRAPHQL_URL,
        timeout: float = 15.0,
        max_attempts: int = 3,
        transport: Optional[httpx.BaseTransport] = None,
        retry_wait: Optional[wait_base] = None,
    ):
        self.url = url
        self.max_attempts = max(1, max_attempts)
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=30)
        self.client = httpx.Client(timeout=timeout, headers=_headers(token), transport=transport)

    def close(self):
        self.client.close()

    def __enter__(self) -> "GitHubGraphQLClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        poster = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=self.retry_wait,
            stop=stop_after_attempt(self.max_attempts),
            before_sleep=before_sleep_log(log, logging.WARNING),
            reraise=True,
        )(self.client.post)
        try:
            return poster(self.url, json=payload)
        except httpx.TransportError as exc:
            raise NetworkError(
                f"GitHub API unreachable after {self.max_attempts} attempt(s): {exc}", provider=PROVIDER
            ) from exc

    def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL query and return its `data` member."""
        resp = self._post({"query": query, "variables": variables or {}})

        if resp.status_code == 401:
            raise AuthError("GitHub API rejected the credentials (401)", provider=PROVIDER, status_code=401)
        if resp.status_code == 403:
            if "rate limit" in resp.text.lower():
                raise NetworkError(
                    f"GitHub API rate limit exceeded: {resp.text}", provider=PROVIDER, status_code=403
                )
            raise AuthError(
                "GitHub API refused access (403); check the token and its scopes",
                provider=PROVIDER,
                status_code=403,
            )
        if resp.is_error:
            raise NetworkError(
                f"GitHub API answered {resp.status_code}: {resp.text[:200]}",
                provider=PROVIDER,
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise NetworkError(
                "GitHub API returned a non-JSON body", provider=PROVIDER, status_code=resp.status_code
            ) from exc

        errors = body.get("errors") or []
        if errors:
            first = errors[0]
            message = first.get("message", "unknown GraphQL error")
            if first.get("type") in AUTH_ERROR_TYPES:
                raise AuthError(message, provider=PROVIDER, status_code=resp.status_code)
            raise NetworkError(f"GraphQL error: {message}", provider=PROVIDER, status_code=resp.status_code)

        return body.get("data") or {}


__all__ = ["GitHubGraphQLClient", "DEFAULT_GRAPHQL_URL"]
