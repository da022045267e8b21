from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Mapping, Optional

from prstats.domain.models import FilterField
from prstats.exceptions import ConfigError
from prstats.providers.github.client import DEFAULT_GRAPHQL_URL

TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")
DEFAULT_BASE_BRANCH = "master"
DEFAULT_WINDOW_DAYS = 7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReportConfig:
    repo_owner: str
    repo_name: str
    start_date: datetime = field(default_factory=lambda: _utcnow() - timedelta(days=DEFAULT_WINDOW_DAYS))
    end_date: datetime = field(default_factory=_utcnow)
    base_branch: Optional[str] = DEFAULT_BASE_BRANCH  # None lists every base branch
    filter_field: FilterField = FilterField.MERGED_AT
    token: Optional[str] = None
    api_url: str = DEFAULT_GRAPHQL_URL
    timeout: float = 15.0
    max_attempts: int = 3
    save_path: Optional[Path] = None

    def __post_init__(self):
        self.filter_field = FilterField(self.filter_field)
        if self.start_date >= self.end_date:
            raise ConfigError(
                f"Start date {self.start_date.isoformat()} must be before end date {self.end_date.isoformat()}",
                option="start-date",
            )


def parse_date(val: Optional[str], default: datetime, option: str = None) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    if not val:
        return default
    try:
        parsed = datetime.fromisoformat(val.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ConfigError(f"Invalid date {val!r}; expected ISO format such as 2024-05-01", option=option) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def resolve_token(cli_token: Optional[str], environ: Mapping[str, str]) -> Optional[str]:
    if cli_token:
        return cli_token
    for name in TOKEN_ENV_VARS:
        if environ.get(name):
            return environ[name]
    return None
