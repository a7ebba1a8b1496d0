"""GitHub API client for listing repositories, pull requests and reviews."""

import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import TransportError

API_URL = 'https://api.github.com'
DEFAULT_PER_PAGE = 100

# (items, next page number or None)
Page = Tuple[List[Dict], Optional[int]]


def next_page_from_links(links: Dict) -> Optional[int]:
    """Extract the page number of the ``rel="next"`` link, if any."""
    next_url = (links or {}).get('next', {}).get('url')
    if not next_url:
        return None
    page = parse_qs(urlparse(next_url).query).get('page')
    if not page:
        return None
    try:
        return int(page[0])
    except ValueError:
        return None


class GitHubAPIClient:
    """Thin adapter over the GitHub REST API.

    Every list call returns a single page plus the next page number.
    Failures are raised as ``TransportError``; the only retries are the
    ones the session's HTTP adapter performs on 5xx responses.
    """

    def __init__(self, token: str = None, api_url: str = API_URL):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            api_url: Base URL of the REST API
        """
        self.token = token
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()

        # Room for the collector's worker pool
        adapter = HTTPAdapter(
            pool_connections=20,
            pool_maxsize=20,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")

    def _request(self, url: str, params: Dict = None) -> Tuple[requests.Response, object]:
        """GET a URL and decode its JSON body.

        Raises:
            TransportError: On network errors, error statuses or invalid JSON
        """
        logging.debug(f"GET {url} {params or ''}")
        try:
            response = self.session.get(url, params=params)
        except requests.exceptions.RequestException as e:
            logging.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        if response.status_code == 403:
            logging.error(f"Forbidden or rate limit exceeded for {url}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logging.error(f"GitHub API returned {response.status_code} for {url}")
            raise TransportError(
                f"GitHub API returned {response.status_code} for {url}",
                status_code=response.status_code,
                url=url
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Malformed response from {url}: {e}")
            raise TransportError(
                f"Malformed response from {url}",
                status_code=response.status_code,
                url=url
            ) from e

        return response, data

    def get_page(self, url: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE,
                 params: Dict = None) -> Page:
        """Fetch one page of a paginated endpoint.

        Args:
            url: The API endpoint URL
            page: Page number, starting at 1
            per_page: Items per page (GitHub caps this at 100)
            params: Extra query parameters

        Returns:
            Tuple of (items on this page, next page number or None)
        """
        query = dict(params or {})
        query['page'] = page
        query['per_page'] = per_page

        response, data = self._request(url, query)
        if not isinstance(data, list):
            raise TransportError(f"Expected a list from {url}", status_code=response.status_code, url=url)

        next_page = next_page_from_links(response.links)
        logging.debug(f"Fetched {len(data)} items from {url} (page {page}, next {next_page})")
        return data, next_page

    def list_org_repositories(self, org: str, page: int = 1,
                              per_page: int = DEFAULT_PER_PAGE) -> Page:
        """List one page of an organization's repositories."""
        return self.get_page(f"{self.api_url}/orgs/{org}/repos", page, per_page)

    def list_open_pull_requests(self, owner: str, repo: str, page: int = 1,
                                per_page: int = DEFAULT_PER_PAGE) -> Page:
        """List one page of a repository's open pull requests."""
        return self.get_page(f"{self.api_url}/repos/{owner}/{repo}/pulls", page, per_page,
                             params={'state': 'open'})

    def list_reviews(self, owner: str, repo: str, pr_number: int, page: int = 1,
                     per_page: int = DEFAULT_PER_PAGE) -> Page:
        """List one page of the reviews submitted on a pull request."""
        return self.get_page(f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}/reviews",
                             page, per_page)

    def _get_object(self, url: str) -> Dict:
        response, data = self._request(url)
        if not isinstance(data, dict):
            raise TransportError(f"Expected an object from {url}", status_code=response.status_code, url=url)
        return data

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """Fetch a single pull request, including its line and file counts."""
        return self._get_object(f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}")

    def get_authenticated_user(self) -> Dict:
        """Fetch the user the token belongs to."""
        return self._get_object(f"{self.api_url}/user")
