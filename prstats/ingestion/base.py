from abc import ABC, abstractmethod
from typing import List

from prstats.domain.models import PullRequest


class Ingestion(ABC):
    @abstractmethod
    def ingest(self) -> List[PullRequest]:
        """Ingest merged pull requests from the source, in source order."""
        pass
