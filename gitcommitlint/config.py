"""Configuration management for git-commit-lint."""
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
import tomli
import tomli_w
import os
import re

from .errors import ConfigurationError
from .models import RuleLevel
from .rules import HEADER_FORMAT, ISSUE_REFERENCE
from .tracker import DEFAULT_API_URL

DEFAULT_CONFIG_FILENAME = ".gitcommitlint.toml"
CONFIG_SECTION = "gitcommitlint"

DEFAULT_RULES: Dict[str, RuleLevel] = {
    HEADER_FORMAT: RuleLevel.ERROR,
    ISSUE_REFERENCE: RuleLevel.ERROR,
}


class Config(BaseModel):
    """Configuration settings for git-commit-lint.

    Values come from the [gitcommitlint] section of .gitcommitlint.toml,
    from GIT_COMMIT_LINT_* environment variables, or from command line
    arguments. The repository and token used for issue lookups are not
    part of this file; see RepositoryContext.from_env.
    """

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Base URL of the GitHub REST API"
    )

    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the issue tracker before giving up"
    )

    rules: Dict[str, RuleLevel] = Field(
        default_factory=lambda: dict(DEFAULT_RULES),
        description="Rule severity: 0 disables, 1 warns, 2 fails the commit"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @field_validator("rules", mode="before")
    @classmethod
    def _merge_rule_levels(cls, value):
        if value is None:
            return dict(DEFAULT_RULES)
        unknown = sorted(set(value) - set(DEFAULT_RULES))
        if unknown:
            raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
        return {**DEFAULT_RULES, **value}

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and surrounding whitespace."""
        if not value:
            return value
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)
        if len(value) > 1000:
            value = value[:1000]
        return value.strip()

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

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults

        Raises:
            ConfigurationError: If the file or a GIT_COMMIT_LINT_* variable
                names unknown rules or holds values of the wrong type
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            print(f"Warning: Error reading config file: {e}")
            return cls()

        section = dict(config_data.get(CONFIG_SECTION, {}))

        for key in ['api_url', 'log_file']:
            if key in section and isinstance(section[key], str):
                section[key] = cls._sanitize_string(section[key])

        if section.get('log_file') and not cls._is_safe_path(section['log_file']):
            print(f"Warning: Unsafe log file path '{section['log_file']}', using default")
            section['log_file'] = None

        try:
            return cls(**section)
        except ConfigurationError as e:
            raise ConfigurationError(f"{config_path}: {e}") from e.__cause__

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}
        config_dict['rules'] = {name: int(level) for name, level in self.rules.items()}

        if config_dict.get('log_file') and not self._is_safe_path(config_dict['log_file']):
            print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
            del config_dict['log_file']

        with config_path.open('wb') as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)

    def level_of(self, rule: str) -> RuleLevel:
        return self.rules.get(rule, RuleLevel.DISABLED)

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"gcl_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        env_data = {}

        env_mapping = {
            'GIT_COMMIT_LINT_API_URL': 'api_url',
            'GIT_COMMIT_LINT_TIMEOUT': 'timeout',
            'GIT_COMMIT_LINT_ALWAYS_LOG': 'always_log',
            'GIT_COMMIT_LINT_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = self._sanitize_string(os.environ[env_var])

                if field_name == 'always_log':
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Explicit arguments win over the environment
        merged_data = {**env_data, **data}

        try:
            super().__init__(**merged_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
