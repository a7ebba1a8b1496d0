"""Main open PR report runner."""

import logging

from .aliases import BaseAliasTable
from .api_client import GitHubAPIClient
from .collector import PullRequestCollector
from .enumerator import enumerate_repositories
from .grouping import rank
from .models import Grouping


class OpenPRReport:
    """Builds the grouped, ranked open PR report of a GitHub organization."""

    def __init__(
        self,
        token: str = None,
        aliases: BaseAliasTable = None,
        max_workers: int = 1,
        max_pages: int = 0,
        fetch_details: bool = True,
        client=None
    ):
        """Initialize the report.

        Args:
            token: GitHub personal access token
            aliases: Base label alias table
            max_workers: Repositories fetched concurrently
            max_pages: Page limit per pull request and review listing (0 = all)
            fetch_details: Fetch line and file counts per pull request
            client: API client to use instead of a new GitHubAPIClient
        """
        self.api_client = client or GitHubAPIClient(token)
        self.aliases = aliases or BaseAliasTable()
        self.collector = PullRequestCollector(
            self.api_client,
            self.aliases,
            max_workers=max_workers,
            max_pages=max_pages,
            fetch_details=fetch_details
        )

    @classmethod
    def from_config(cls, config) -> 'OpenPRReport':
        """Create a report from a ReportConfig."""
        if config.aliases_file:
            aliases = BaseAliasTable.from_file(config.aliases_file)
        else:
            aliases = BaseAliasTable()
        return cls(
            config.token,
            aliases,
            max_workers=config.max_workers,
            max_pages=config.max_pages,
            fetch_details=config.fetch_details
        )

    def whoami(self) -> str:
        """Return the login the token authenticates as."""
        return self.api_client.get_authenticated_user().get('login', '')

    def run(self, org: str) -> Grouping:
        """List the organization's repositories, collect their open PRs and rank them.

        Raises:
            TransportError: If any API call fails. No partial report is built.
        """
        print("Listing repos...")
        repositories = enumerate_repositories(self.api_client, org)
        print(f"{len(repositories)} repos")

        print("Listing PRs per repo...")
        grouping = self.collector.collect_by_base(repositories)

        logging.info("Collection complete, ranking PRs per base...")
        return rank(grouping)
