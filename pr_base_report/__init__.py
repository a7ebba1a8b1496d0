"""Open PR Base Report - open pull requests of an organization, grouped by base branch."""

from .errors import ReportError, TransportError, ConfigurationError
from .models import Repository, PullRequest, Review, ReviewSummary, AggregateRecord
from .api_client import GitHubAPIClient
from .aliases import BaseAliasTable, DEFAULT_BASE_ALIASES
from .enumerator import enumerate_repositories
from .grouping import add_to_grouping, rank
from .summary import summarize
from .collector import PullRequestCollector
from .report import OpenPRReport
from .output import ReportFormatter

__all__ = [
    'ReportError',
    'TransportError',
    'ConfigurationError',
    'Repository',
    'PullRequest',
    'Review',
    'ReviewSummary',
    'AggregateRecord',
    'GitHubAPIClient',
    'BaseAliasTable',
    'DEFAULT_BASE_ALIASES',
    'enumerate_repositories',
    'add_to_grouping',
    'rank',
    'summarize',
    'PullRequestCollector',
    'OpenPRReport',
    'ReportFormatter',
]
