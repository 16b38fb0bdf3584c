"""Configuration management for pr-sheriff."""
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli
import tomli_w
from pydantic import BaseModel, Field, field_validator

from .models import ValidationConfig

DEFAULT_CONFIG_FILENAME = ".prsheriff.toml"
CONFIG_SECTION = "prsheriff"
DEFAULT_IGNORE_FILE = ".github/ignored-authors.txt"

DEFAULT_TYPES = [
    "feat", "fix", "docs", "style", "refactor", "perf",
    "test", "build", "ci", "chore", "revert",
]
DEFAULT_SCOPES = [
    "core", "api", "cli", "config", "deps", "docs", "ci", "release", "tests",
]

TRUE_VALUES = ['true', '1', 'yes', 'on']
FALSE_VALUES = ['false', '0', 'no', 'off']


def parse_list(value: Any) -> List[str]:
    """Parse a list input given as a list, JSON array, or delimited string.

    Pipe-separated strings split on ``|``; anything else splits on newlines
    and commas. Entries are trimmed and stripped of surrounding quotes.
    """
    if not value:
        return []

    if isinstance(value, (list, tuple, set, frozenset)):
        items = [str(item) for item in value]
    else:
        text = str(value).strip()
        items = None
        if text.startswith('[') and text.endswith(']'):
            try:
                loaded = json.loads(text)
                items = [str(item) for item in loaded] if isinstance(loaded, list) else None
            except json.JSONDecodeError:
                text = text[1:-1]
        if items is None:
            items = text.split('|') if '|' in text else re.split(r'[\n,]+', text)

    cleaned = [re.sub(r'^["\']|["\']$', '', item.strip()).strip() for item in items]
    return [item for item in cleaned if item]


def parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


class Config(BaseModel):
    """Configuration settings for pr-sheriff.

    Values come from, lowest precedence first: defaults, the ``[prsheriff]``
    table of ``.prsheriff.toml``, ``PR_SHERIFF_*`` environment variables,
    GitHub Action ``INPUT_*`` variables, and explicit keyword arguments.
    """

    types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TYPES),
        description="Allowed commit types"
    )

    scopes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="Allowed commit scopes (checked only when enforce_scopes is set)"
    )

    enforce_scopes: bool = Field(
        default=False,
        description="Whether scopes must come from the scopes list"
    )

    allow_breaking: bool = Field(
        default=True,
        description="Whether the '!' breaking-change marker is accepted"
    )

    ignore_authors: Optional[str] = Field(
        default=None,
        description="Ignore-authors source: a path, an http(s) URL, or true/false for the default file"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to a log file that check events are appended to"
    )

    @field_validator('types', 'scopes', mode='before')
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return parse_list(value)

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        return True

    @staticmethod
    def _env_data() -> Dict[str, Any]:
        """Collect settings from the environment, action inputs last."""
        env_mapping = [
            ('PR_SHERIFF_TYPES', 'types'),
            ('PR_SHERIFF_SCOPES', 'scopes'),
            ('PR_SHERIFF_ENFORCE_SCOPES', 'enforce_scopes'),
            ('PR_SHERIFF_ALLOW_BREAKING', 'allow_breaking'),
            ('PR_SHERIFF_IGNORE_AUTHORS', 'ignore_authors'),
            ('PR_SHERIFF_LOG_FILE', 'log_file'),
            ('INPUT_TYPES', 'types'),
            ('INPUT_SCOPES', 'scopes'),
            ('INPUT_ENFORCE_SCOPES', 'enforce_scopes'),
            ('INPUT_ALLOW_BREAKING', 'allow_breaking'),
            ('INPUT_IGNORE-AUTHORS', 'ignore_authors'),
        ]

        env_data: Dict[str, Any] = {}
        for env_var, field_name in env_mapping:
            value = os.environ.get(env_var, '').strip()
            if not value:
                continue

            if field_name in ['enforce_scopes', 'allow_breaking']:
                flag = parse_bool(value)
                if flag is None:
                    continue
                env_data[field_name] = flag
            elif field_name in ['types', 'scopes']:
                items = parse_list(value)
                if items:
                    env_data[field_name] = items
            else:
                env_data[field_name] = value

        return env_data

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        merged_data = {**self._env_data(), **data}
        super().__init__(**merged_data)

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the repository root

        Returns:
            Config: Configuration object with values from file, environment or defaults
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            section = config_data.get(CONFIG_SECTION, {})
            if not isinstance(section, dict):
                raise ValueError(f"[{CONFIG_SECTION}] must be a table")

            # Environment wins over the file
            env_keys = cls._env_data().keys()
            file_data = {k: v for k, v in section.items() if k not in env_keys}

            if file_data.get('log_file') and not cls._is_safe_path(file_data['log_file']):
                print(f"Warning: Unsafe log file path '{file_data['log_file']}', ignoring it")
                file_data['log_file'] = None

            return cls(**file_data)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the repository root
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        with config_path.open('wb') as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file, or None if file logging is disabled."""
        if self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            print(f"Warning: Unsafe log file path '{self.log_file}', file logging disabled")
        return None

    def resolve_ignore_source(self) -> Optional[str]:
        """Resolve ``ignore_authors`` into a path or URL, or None when disabled."""
        if not self.ignore_authors or not self.ignore_authors.strip():
            return None
        flag = parse_bool(self.ignore_authors)
        if flag is True:
            return DEFAULT_IGNORE_FILE
        if flag is False:
            return None
        return self.ignore_authors.strip()

    def to_validation_config(self) -> ValidationConfig:
        return ValidationConfig(
            types=frozenset(self.types),
            scopes=frozenset(self.scopes),
            enforce_scopes=self.enforce_scopes,
            allow_breaking=self.allow_breaking,
        )
