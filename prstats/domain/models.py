from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timedelta
from typing import Optional, List, Any, Dict
from enum import Enum


class PullRequestState(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


class FilterField(str, Enum):
    """Timestamp a pull request is windowed on."""

    MERGED_AT = "merged_at"
    CREATED_AT = "created_at"

    @property
    def order_field(self) -> str:
        # GraphQL PullRequestOrderField used to pick the most relevant 100 PRs.
        return "UPDATED_AT" if self is FilterField.MERGED_AT else "CREATED_AT"


class Author(BaseModel):
    login: str


class PullRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: int
    title: str = ""
    author: Author
    state: PullRequestState = PullRequestState.MERGED
    created_at: datetime = Field(alias="createdAt")
    merged_at: datetime = Field(alias="mergedAt")
    changed_files: Optional[int] = Field(default=None, alias="changedFiles")

    @property
    def open_duration(self) -> timedelta:
        """Time between creation and merge. Negative only for corrupt data."""
        return self.merged_at - self.created_at


class DurationStat(BaseModel):
    duration: timedelta
    pull_request: Optional[PullRequest] = None


class TimeToMergeStats(BaseModel):
    count: int
    shortest: DurationStat
    longest: DurationStat
    mean: DurationStat
    median: DurationStat
    p90: DurationStat


class MetricContext(BaseModel):
    pull_requests: List[PullRequest]
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MetricResult(BaseModel):
    metric_slug: str
    summary: str
    details: Dict[str, Any]
