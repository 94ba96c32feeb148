"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from idea_scoreboard.core.errors import ConfigurationError

MAX_PAGE_SIZE = 100


@dataclass
class GitHubConfig:
    """GitHub API settings."""
    api_base: str = "https://api.github.com"
    label: str = "template-idea"
    per_page: int = MAX_PAGE_SIZE
    timeout: float = 30.0
    user_agent: str = "idea-scoreboard"


@dataclass
class PathsConfig:
    """Path settings."""
    summary_path: Path = Path("data/summary.json")


@dataclass
class DashboardConfig:
    """Dashboard settings."""
    source: Optional[str] = None
    default_filter: str = "all"


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    github_token: str = ""
    github_repository: str = ""

    # Config sections
    github: GitHubConfig = field(default_factory=GitHubConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)

    @property
    def summary_path(self) -> Path:
        return self.paths.summary_path

    @property
    def page_size(self) -> int:
        return max(1, min(int(self.github.per_page), MAX_PAGE_SIZE))

    @property
    def repository_parts(self) -> tuple[str, str]:
        owner, _, name = self.github_repository.partition("/")
        return owner, name

    def require_feed_credentials(self) -> None:
        """Fail before any network call if the feed cannot be addressed."""
        if not self.github_token:
            raise ConfigurationError("Missing GITHUB_TOKEN")
        if not self.github_repository:
            raise ConfigurationError("Missing GITHUB_REPOSITORY")

        owner, name = self.repository_parts
        if not owner or not name or "/" in name:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like 'owner/repo', got '{self.github_repository}'"
            )


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping of sections")
    return config


def _section(config: dict, name: str) -> dict:
    """Return a config section; an empty section counts as no overrides."""
    values = config.get(name)
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")
    return values


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        github_token=os.getenv("GITHUB_TOKEN", ""),
        github_repository=os.getenv("GITHUB_REPOSITORY", "").strip(),
    )

    for key, value in _section(config, "github").items():
        setattr(settings.github, key, value)

    for key, value in _section(config, "paths").items():
        try:
            setattr(settings.paths, key, Path(value))
        except TypeError as e:
            raise ConfigurationError(f"Invalid path for paths.{key}: {value!r}") from e

    for key, value in _section(config, "dashboard").items():
        setattr(settings.dashboard, key, value)

    return settings
