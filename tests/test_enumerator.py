"""
Unit tests for organization repository enumeration
"""

import pytest
from unittest.mock import Mock, call

from pr_base_report.enumerator import enumerate_repositories
from pr_base_report.errors import TransportError
from pr_base_report.models import Repository


class TestEnumerateRepositories:
    """Test cases for enumerate_repositories."""

    def test_drains_all_pages_in_order(self, repo_payload):
        client = Mock()
        client.list_org_repositories.side_effect = [
            ([repo_payload('a'), repo_payload('b')], 2),
            ([repo_payload('c')], None),
        ]

        repos = enumerate_repositories(client, 'acme')

        assert repos == [Repository('acme', 'a'), Repository('acme', 'b'), Repository('acme', 'c')]
        assert client.list_org_repositories.call_args_list == [
            call('acme', page=1, per_page=100),
            call('acme', page=2, per_page=100),
        ]

    def test_follows_reported_next_page(self, repo_payload):
        client = Mock()
        client.list_org_repositories.side_effect = [
            ([repo_payload('a')], 5),
            ([repo_payload('b')], None),
        ]

        enumerate_repositories(client, 'acme', per_page=1)

        assert client.list_org_repositories.call_args_list[1] == call('acme', page=5, per_page=1)

    def test_empty_organization(self):
        client = Mock()
        client.list_org_repositories.return_value = ([], None)
        assert enumerate_repositories(client, 'acme') == []

    def test_error_on_later_page_returns_nothing(self, repo_payload):
        client = Mock()
        client.list_org_repositories.side_effect = [
            ([repo_payload('a')], 2),
            TransportError("rate limited", status_code=403),
        ]

        with pytest.raises(TransportError):
            enumerate_repositories(client, 'acme')

    def test_malformed_repository(self):
        client = Mock()
        client.list_org_repositories.return_value = ([{'name': 'no-owner'}], None)

        with pytest.raises(TransportError):
            enumerate_repositories(client, 'acme')
