"""
Base branch alias table.

Pull requests targeting renamed or synonymous base branches are reported
under one canonical label. The table is fixed once built and is handed to
the collector explicitly.
"""

import json
import logging
from types import MappingProxyType
from typing import Dict, Mapping

from .errors import ConfigurationError

# Raw base label -> canonical base label
DEFAULT_BASE_ALIASES: Mapping[str, str] = MappingProxyType({
    'symphonics:dev': 'symphonics:development',
})


class BaseAliasTable:
    """Immutable mapping of base branch labels to their canonical label."""

    def __init__(self, aliases: Mapping[str, str] = None):
        """
        Args:
            aliases: Raw label to canonical label pairs (defaults to DEFAULT_BASE_ALIASES)
        """
        if aliases is None:
            aliases = DEFAULT_BASE_ALIASES
        self._aliases = MappingProxyType(dict(aliases))

    @classmethod
    def from_file(cls, path: str, defaults: Mapping[str, str] = DEFAULT_BASE_ALIASES) -> 'BaseAliasTable':
        """
        Load alias pairs from a JSON object file, merged over the defaults.

        Args:
            path: Path to a JSON file such as ``{"org:dev": "org:development"}``
            defaults: Pairs the file extends or overrides

        Raises:
            ConfigurationError: If the file cannot be read or is not a string mapping
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise ConfigurationError(f"Could not load base aliases from {path}: {e}") from e

        if not isinstance(data, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
            raise ConfigurationError(f"Base aliases in {path} must be a JSON object of strings")

        merged: Dict[str, str] = dict(defaults)
        merged.update(data)
        logging.info(f"Loaded {len(data)} base alias(es) from {path}")
        return cls(merged)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def normalize(self, raw_label: str) -> str:
        """Return the canonical label for ``raw_label``, or ``raw_label`` itself."""
        return self._aliases.get(raw_label, raw_label)

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, raw_label: str) -> bool:
        return raw_label in self._aliases
