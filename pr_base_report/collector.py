"""Collection of open pull requests and their reviews, grouped by base label."""

import logging
from threading import Event
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Sequence

from .aliases import BaseAliasTable
from .api_client import DEFAULT_PER_PAGE
from .errors import TransportError
from .grouping import add_to_grouping
from .models import AggregateRecord, Grouping, PullRequest, Repository, Review

# What a payload of the wrong shape raises while being parsed
MALFORMED_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


class PullRequestCollector:
    """Fetches open pull requests and reviews for a list of repositories."""

    def __init__(
        self,
        client,
        aliases: BaseAliasTable = None,
        max_workers: int = 1,
        max_pages: int = 0,
        fetch_details: bool = True,
        per_page: int = DEFAULT_PER_PAGE
    ):
        """Initialize the collector.

        Args:
            client: GitHub API client
            aliases: Base label alias table (defaults to the built-in aliases)
            max_workers: Repositories fetched concurrently (1 = sequential)
            max_pages: Pages fetched per pull request and review listing (0 = all)
            fetch_details: Fetch each pull request to get its line and file counts
            per_page: Page size requested from the API
        """
        self.client = client
        self.aliases = aliases or BaseAliasTable()
        self.max_workers = max(1, max_workers)
        self.max_pages = max_pages
        self.fetch_details = fetch_details
        self.per_page = per_page

    def _drain(self, list_page: Callable, *args) -> List[Dict]:
        """Follow a paginated listing until its last page or ``max_pages``."""
        items = []
        page = 1
        pages_fetched = 0

        while True:
            data, next_page = list_page(*args, page=page, per_page=self.per_page)
            items.extend(data)
            pages_fetched += 1

            if not next_page:
                break
            if self.max_pages and pages_fetched >= self.max_pages:
                logging.warning(f"Stopped after {pages_fetched} page(s) for {'/'.join(map(str, args))}, "
                                f"further items are not reported")
                break
            page = next_page

        return items

    def collect_repository(self, repo: Repository, cancelled: Event = None) -> List[AggregateRecord]:
        """Build one record per open pull request of a repository.

        Args:
            repo: Repository to scan
            cancelled: Set by the pool on the first failure elsewhere; stops before the next PR

        Raises:
            TransportError: If any listing fails or returns malformed items
        """
        pull_requests = self._drain(self.client.list_open_pull_requests, repo.owner, repo.name)
        logging.debug(f"{repo.full_name}: {len(pull_requests)} open PRs")

        records = []
        for pr_data in pull_requests:
            if cancelled is not None and cancelled.is_set():
                logging.debug(f"{repo.full_name}: collection cancelled")
                break

            try:
                pr = PullRequest.from_api(pr_data)
            except MALFORMED_ERRORS as e:
                raise TransportError(f"Malformed pull request in {repo.full_name}: {e}") from e

            review_data = self._drain(self.client.list_reviews, repo.owner, repo.name, pr.number)
            try:
                reviews = tuple(Review.from_api(review, pr.number) for review in review_data)
            except MALFORMED_ERRORS as e:
                raise TransportError(f"Malformed review on {repo.full_name}#{pr.number}: {e}") from e

            if self.fetch_details:
                details = self.client.get_pull_request(repo.owner, repo.name, pr.number)
                try:
                    pr = pr.with_details(details)
                except MALFORMED_ERRORS as e:
                    raise TransportError(f"Malformed details of {repo.full_name}#{pr.number}: {e}") from e

            records.append(AggregateRecord(repository=repo, pull_request=pr, reviews=reviews))

        return records

    @staticmethod
    def _report_progress(repo: Repository, records: List[AggregateRecord]):
        if records:
            print(f"* {len(records):02d} PR: {repo.name}", flush=True)

    def _collect_sequential(self, repositories: Sequence[Repository]) -> List[List[AggregateRecord]]:
        results = []
        for repo in repositories:
            records = self.collect_repository(repo)
            self._report_progress(repo, records)
            results.append(records)
        return results

    def _collect_parallel(self, repositories: Sequence[Repository]) -> List[List[AggregateRecord]]:
        """Collect repositories on a bounded pool, results in input order."""
        max_workers = min(self.max_workers, len(repositories))
        cancelled = Event()

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_repo = {
                executor.submit(self.collect_repository, repo, cancelled): repo
                for repo in repositories
            }
            try:
                for future in as_completed(future_to_repo):
                    self._report_progress(future_to_repo[future], future.result())
            except Exception:
                # Pending repositories are dropped, running ones stop at their next PR
                cancelled.set()
                for future in future_to_repo:
                    future.cancel()
                raise

        return [future.result() for future in future_to_repo]

    def collect_by_base(self, repositories: Sequence[Repository]) -> Grouping:
        """Collect every open pull request and group it by canonical base label.

        Args:
            repositories: Repositories to scan, in report order

        Returns:
            Canonical base label -> records in collection order (not yet ranked)

        Raises:
            TransportError: On the first failure. No partial grouping is returned.
        """
        if self.max_workers > 1 and len(repositories) > 1:
            results = self._collect_parallel(repositories)
        else:
            results = self._collect_sequential(repositories)

        grouping: Grouping = {}
        total = 0
        for records in results:
            total += len(records)
            for record in records:
                add_to_grouping(grouping, record, self.aliases)

        print(f"TOTAL PR: {total}")
        logging.info(f"Collected {total} open PRs under {len(grouping)} base label(s)")
        return grouping
