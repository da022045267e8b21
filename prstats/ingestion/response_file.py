import json
import logging
from pathlib import Path
from typing import List

from prstats.adapters.github import GitHubAdapter
from prstats.domain.models import PullRequest
from prstats.exceptions import ResponseFileError
from prstats.ingestion.base import Ingestion
from prstats.providers.github.fetcher import nodes_from_response

log = logging.getLogger(__name__)


class ResponseFileIngestion(Ingestion):
    """Ingests a GraphQL response previously saved with --save-response."""

    def __init__(self, path):
        self.path = Path(path)

    def ingest(self) -> List[PullRequest]:
        """
        Load and parse a saved response. Both the full body ({"data": ...})
        and the bare data object are accepted.

        Raises:
            ResponseFileError: If the file is missing, unreadable or is not a JSON object.
        """
        if not self.path.exists():
            raise ResponseFileError(f"Response file not found at {self.path}", path=str(self.path))

        try:
            body = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ResponseFileError(
                f"Invalid JSON in response file: {e}",
                path=str(self.path)
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ResponseFileError(
                f"Cannot read response file: {e}",
                path=str(self.path)
            ) from e

        if not isinstance(body, dict):
            raise ResponseFileError("Response file must hold a JSON object", path=str(self.path))

        data = body.get("data", body)
        if not isinstance(data, dict) or "repository" not in data:
            raise ResponseFileError(
                "Response file has no 'repository' member",
                path=str(self.path)
            )

        log.info("Ingesting saved response from %s", self.path)
        return GitHubAdapter().parse_nodes(nodes_from_response(data))
