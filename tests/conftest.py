"""Shared pytest fixtures: GitHub payload factories and a fake API client."""

import pytest
from unittest.mock import Mock

from pr_base_report.errors import TransportError

DEFAULT_DETAILS = {'additions': 10, 'deletions': 4, 'changed_files': 2}


@pytest.fixture
def repo_payload():
    """Factory for a repository item of the org repos listing."""
    def _make(name, owner='acme'):
        return {'name': name, 'owner': {'login': owner}, 'full_name': f"{owner}/{name}"}
    return _make


@pytest.fixture
def pr_payload():
    """Factory for a pull request item of the pulls listing."""
    def _make(number, base='acme:main', updated_at='2024-01-10T12:00:00Z', login='author',
              title=None, draft=False, labels=()):
        return {
            'number': number,
            'title': title or f"PR {number}",
            'user': {'login': login} if login else None,
            'draft': draft,
            'base': {'label': base, 'ref': base.split(':')[-1]},
            'updated_at': updated_at,
            'labels': [{'name': name} for name in labels],
            'html_url': f"https://github.com/acme/repo/pull/{number}",
        }
    return _make


@pytest.fixture
def review_payload():
    """Factory for a review item of the reviews listing."""
    def _make(login, state='COMMENTED'):
        return {'user': {'login': login}, 'state': state, 'submitted_at': '2024-01-10T12:00:00Z'}
    return _make


@pytest.fixture
def fake_client():
    """Factory for a Mock API client serving canned single-page listings.

    Args (of the factory):
        repos: Repository payloads of the org listing
        pulls: repo name -> pull request payloads
        reviews: (repo name, PR number) -> review payloads
        failing_reviews: (repo name, PR number) pairs whose review listing fails
    """
    def _make(repos=(), pulls=None, reviews=None, failing_reviews=()):
        pulls = pulls or {}
        reviews = reviews or {}
        client = Mock()

        def list_org_repositories(org, page=1, per_page=100):
            return list(repos), None

        def list_open_pull_requests(owner, repo, page=1, per_page=100):
            return list(pulls.get(repo, [])), None

        def list_reviews(owner, repo, pr_number, page=1, per_page=100):
            if (repo, pr_number) in failing_reviews:
                raise TransportError(f"reviews of {repo}#{pr_number} failed", status_code=502)
            return list(reviews.get((repo, pr_number), [])), None

        client.list_org_repositories.side_effect = list_org_repositories
        client.list_open_pull_requests.side_effect = list_open_pull_requests
        client.list_reviews.side_effect = list_reviews
        client.get_pull_request.return_value = dict(DEFAULT_DETAILS)
        client.get_authenticated_user.return_value = {'login': 'octocat'}
        return client
    return _make
