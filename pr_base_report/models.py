"""Data models for the open PR report."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Tuple

UNKNOWN_AUTHOR = 'Unknown'


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO 8601 timestamp (``2024-01-31T12:00:00Z``)."""
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def _login(user) -> str:
    if not user:
        return UNKNOWN_AUTHOR
    return user.get('login') or UNKNOWN_AUTHOR


@dataclass(frozen=True)
class Repository:
    """A repository of the organization."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_api(cls, data: Dict) -> 'Repository':
        return cls(owner=data['owner']['login'], name=data['name'])


@dataclass(frozen=True)
class PullRequest:
    """An open pull request as returned by the pulls endpoint."""
    number: int
    title: str
    author: str
    draft: bool
    base_label: str
    updated_at: datetime
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    labels: Tuple[str, ...] = ()
    html_url: str = ''

    @classmethod
    def from_api(cls, data: Dict) -> 'PullRequest':
        """Build a pull request from a pulls list or pull detail payload.

        The list endpoint does not return line counts, so they default to 0
        until the detail payload is merged in with ``with_details``.
        """
        return cls(
            number=data['number'],
            title=data.get('title', ''),
            author=_login(data.get('user')),
            draft=bool(data.get('draft', False)),
            base_label=data['base']['label'],
            updated_at=parse_timestamp(data['updated_at']),
            additions=data.get('additions', 0) or 0,
            deletions=data.get('deletions', 0) or 0,
            changed_files=data.get('changed_files', 0) or 0,
            labels=tuple(label['name'] for label in data.get('labels', [])),
            html_url=data.get('html_url', ''),
        )

    def with_details(self, details: Dict) -> 'PullRequest':
        """Return a copy carrying the line counts of a pull detail payload."""
        return PullRequest(
            number=self.number,
            title=self.title,
            author=self.author,
            draft=self.draft,
            base_label=self.base_label,
            updated_at=self.updated_at,
            additions=details.get('additions', 0) or 0,
            deletions=details.get('deletions', 0) or 0,
            changed_files=details.get('changed_files', 0) or 0,
            labels=self.labels,
            html_url=self.html_url,
        )


@dataclass(frozen=True)
class Review:
    """A single review submitted on a pull request."""
    author: str
    pr_number: int
    state: str = ''

    @classmethod
    def from_api(cls, data: Dict, pr_number: int) -> 'Review':
        return cls(author=_login(data.get('user')), pr_number=pr_number, state=data.get('state', ''))


@dataclass(frozen=True)
class ReviewSummary:
    """Review activity of one pull request."""
    review_count: int = 0
    distinct_reviewer_count: int = 0


@dataclass(frozen=True)
class AggregateRecord:
    """A repository, one of its open pull requests and that pull request's reviews."""
    repository: Repository
    pull_request: PullRequest
    reviews: Tuple[Review, ...] = field(default_factory=tuple)

    @property
    def summary(self) -> ReviewSummary:
        """Review count and number of distinct reviewer logins."""
        return ReviewSummary(
            review_count=len(self.reviews),
            distinct_reviewer_count=len({review.author for review in self.reviews})
        )


# Canonical base label -> records, ranked oldest update first
Grouping = Dict[str, List[AggregateRecord]]
