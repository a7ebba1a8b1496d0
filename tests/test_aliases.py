"""
Unit tests for base branch alias normalization
"""

import json

import pytest

from pr_base_report.aliases import BaseAliasTable, DEFAULT_BASE_ALIASES
from pr_base_report.errors import ConfigurationError


class TestNormalize:
    """Test cases for BaseAliasTable.normalize."""

    @pytest.fixture
    def table(self):
        return BaseAliasTable()

    def test_known_alias(self, table):
        assert table.normalize('symphonics:dev') == 'symphonics:development'

    def test_canonical_label_unchanged(self, table):
        assert table.normalize('symphonics:development') == 'symphonics:development'

    def test_unknown_label_unchanged(self, table):
        assert table.normalize('acme:main') == 'acme:main'

    @pytest.mark.parametrize('label', ['symphonics:dev', 'symphonics:development', 'acme:main', ''])
    def test_idempotent(self, table, label):
        assert table.normalize(table.normalize(label)) == table.normalize(label)

    def test_substitute_table(self):
        table = BaseAliasTable({'acme:master': 'acme:main'})
        assert table.normalize('acme:master') == 'acme:main'
        assert table.normalize('symphonics:dev') == 'symphonics:dev'
        assert 'acme:master' in table
        assert len(table) == 1


class TestImmutability:
    """Test cases for the fixed alias mapping."""

    def test_mapping_is_read_only(self):
        table = BaseAliasTable()
        with pytest.raises(TypeError):
            table.aliases['x'] = 'y'

    def test_default_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_BASE_ALIASES['x'] = 'y'

    def test_source_dict_changes_not_seen(self):
        source = {'acme:master': 'acme:main'}
        table = BaseAliasTable(source)
        source['acme:dev'] = 'acme:development'
        assert table.normalize('acme:dev') == 'acme:dev'


class TestFromFile:
    """Test cases for loading aliases from JSON."""

    def test_merges_over_defaults(self, tmp_path):
        path = tmp_path / 'aliases.json'
        path.write_text(json.dumps({'acme:master': 'acme:main'}))

        table = BaseAliasTable.from_file(str(path))

        assert table.normalize('acme:master') == 'acme:main'
        assert table.normalize('symphonics:dev') == 'symphonics:development'

    def test_file_overrides_default(self, tmp_path):
        path = tmp_path / 'aliases.json'
        path.write_text(json.dumps({'symphonics:dev': 'symphonics:main'}))

        table = BaseAliasTable.from_file(str(path))

        assert table.normalize('symphonics:dev') == 'symphonics:main'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            BaseAliasTable.from_file(str(tmp_path / 'missing.json'))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'aliases.json'
        path.write_text('{not json')
        with pytest.raises(ConfigurationError):
            BaseAliasTable.from_file(str(path))

    def test_not_a_string_mapping(self, tmp_path):
        path = tmp_path / 'aliases.json'
        path.write_text(json.dumps({'acme:master': 1}))
        with pytest.raises(ConfigurationError):
            BaseAliasTable.from_file(str(path))
