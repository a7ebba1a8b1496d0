"""
Report configuration.

Settings come from command line overrides first, then environment
variables (optionally loaded from a ``.env`` file by the CLI).
"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

TRUE_VALUES = ('true', '1', 'yes')


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        number = int(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {name} value '{value}', expected an integer") from e
    if number < minimum:
        raise ConfigurationError(f"Invalid {name} value '{value}', must be at least {minimum}")
    return number


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one report run."""
    org: str
    token: str
    log_level: str = 'INFO'
    max_workers: int = 1
    max_pages: int = 0
    fetch_details: bool = True
    aliases_file: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        org: str = None,
        token: str = None,
        max_workers: int = None,
        max_pages: int = None,
        aliases_file: str = None
    ) -> 'ReportConfig':
        """Build the configuration from arguments and the environment.

        Arguments that are not None win over the matching variable:
        GITHUB_ORG, GITHUB_TOKEN, MAX_WORKERS, MAX_PAGES, BASE_ALIASES_FILE.
        FETCH_PR_DETAILS and LOG_LEVEL are read from the environment only.

        Raises:
            ConfigurationError: If the organization or token is missing, or a number is invalid
        """
        org = (org or os.environ.get('GITHUB_ORG', '')).strip()
        token = (token or os.environ.get('GITHUB_TOKEN', '')).strip()

        if not org:
            raise ConfigurationError("Organization name is required (--org or GITHUB_ORG)")
        if not token:
            raise ConfigurationError("GitHub token is required (--token or GITHUB_TOKEN)")

        if max_workers is None:
            max_workers = _env_int('MAX_WORKERS', 1, minimum=1)
        elif max_workers < 1:
            raise ConfigurationError(f"Invalid worker count {max_workers}, must be at least 1")

        if max_pages is None:
            max_pages = _env_int('MAX_PAGES', 0)
        elif max_pages < 0:
            raise ConfigurationError(f"Invalid page limit {max_pages}, must be 0 or more")

        return cls(
            org=org,
            token=token,
            log_level=os.environ.get('LOG_LEVEL', 'INFO').strip().upper() or 'INFO',
            max_workers=max_workers,
            max_pages=max_pages,
            fetch_details=_env_bool('FETCH_PR_DETAILS', True),
            aliases_file=aliases_file or os.environ.get('BASE_ALIASES_FILE') or None,
        )
