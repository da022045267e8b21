import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from prstats.domain.models import PullRequest, PullRequestState
from prstats.exceptions import MalformedDataError

log = logging.getLogger(__name__)

# Login GitHub shows for pull requests whose author account was deleted.
GHOST_LOGIN = "ghost"


def parse_timestamp(value: Any, field: str) -> datetime:
    if not value or not isinstance(value, str):
        raise MalformedDataError(f"Missing or invalid {field}", field=field, value=value)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise MalformedDataError(f"Unparseable {field}: {value!r}", field=field, value=value) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class GitHubAdapter:
    """
    Parse pull request nodes from the GitHub GraphQL API into PullRequest
    models, keeping the order the API returned them in.
    """

    def parse_node(self, node: Dict[str, Any]) -> PullRequest:
        if not isinstance(node, dict):
            raise MalformedDataError("Pull request node is not an object", field="node", value=node)

        number = node.get("number")
        if number is None:
            raise MalformedDataError("Pull request node without a number", field="number", value=node)

        if "author" not in node:
            raise MalformedDataError(f"PR #{number} has no author field", field="author", value=node)
        author = node["author"] or {"login": GHOST_LOGIN}
        if not isinstance(author, dict) or not author.get("login"):
            raise MalformedDataError(f"PR #{number} author has no login", field="author.login", value=author)

        created_at = parse_timestamp(node.get("createdAt"), "createdAt")
        merged_at = parse_timestamp(node.get("mergedAt"), "mergedAt")

        state = node.get("state") or PullRequestState.MERGED.value
        try:
            state = PullRequestState(state)
        except ValueError as exc:
            raise MalformedDataError(f"PR #{number} has unknown state {state!r}", field="state", value=state) from exc

        try:
            pr = PullRequest.model_validate({
                "number": number,
                "title": node.get("title") or "",
                "author": {"login": author["login"]},
                "state": state,
                "createdAt": created_at,
                "mergedAt": merged_at,
                "changedFiles": node.get("changedFiles"),
            })
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise MalformedDataError(
                f"PR #{number} has invalid {field}: {error['msg']}", field=field, value=error.get("input")
            ) from exc

        if merged_at < created_at:
            log.warning("PR #%s has mergedAt %s before createdAt %s", number, merged_at, created_at)
        return pr

    def parse_nodes(self, nodes: Iterable[Dict[str, Any]]) -> List[PullRequest]:
        return [self.parse_node(node) for node in nodes]
