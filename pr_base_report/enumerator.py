"""Repository enumeration for an organization."""

import logging
from typing import List

from .api_client import DEFAULT_PER_PAGE
from .errors import TransportError
from .models import Repository


def enumerate_repositories(client, org: str, per_page: int = DEFAULT_PER_PAGE) -> List[Repository]:
    """Drain every page of an organization's repository listing.

    Args:
        client: GitHub API client
        org: Organization login
        per_page: Page size requested from the API

    Returns:
        All repositories, in the order the API lists them

    Raises:
        TransportError: On the first failed page. Nothing already fetched is returned.
    """
    repositories = []
    page = 1

    while True:
        items, next_page = client.list_org_repositories(org, page=page, per_page=per_page)
        try:
            repositories.extend(Repository.from_api(item) for item in items)
        except (AttributeError, KeyError, TypeError) as e:
            raise TransportError(f"Malformed repository listing for {org}: {e}") from e
        if not next_page:
            break
        page = next_page

    logging.info(f"Found {len(repositories)} repositories in {org}")
    return repositories
