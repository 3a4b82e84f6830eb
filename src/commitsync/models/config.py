"""Configuration models."""

import os
import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from commitsync.errors import ConfigError

PROFILE_FILENAME = "config.toml"


class TicketProviderName(str, Enum):
    """Supported ticket trackers."""

    JIRA = "jira"


class AuthType(str, Enum):
    """How the ticket tracker credential is sent."""

    BASIC = "basic"
    BEARER = "bearer"


class ProjectManagementConfig(BaseModel):
    """The ``[project_management]`` section of the profile file."""

    provider: TicketProviderName = Field(TicketProviderName.JIRA, description="Ticket tracker")
    url: str = Field(..., description="Issue URL template containing a :ticket_id placeholder")
    credential_env_var_name: str = Field(..., description="Environment variable holding the credential")
    ticket_id_regex: str = Field(..., description="Regex with one capture group for the ticket id")
    auth_type: Optional[AuthType] = Field(AuthType.BASIC, description="basic or bearer")

    # Resolved from the environment at load time, never read from the file
    credential: Optional[str] = Field(None, exclude=True)

    def ticket_pattern(self) -> "re.Pattern[str]":
        """Compile ``ticket_id_regex``.

        Raises:
            ConfigError: If the regex is invalid or does not have exactly one group
        """
        try:
            pattern = re.compile(self.ticket_id_regex)
        except re.error as e:
            raise ConfigError(f"Invalid ticket_id_regex {self.ticket_id_regex!r}: {e}") from e
        if pattern.groups != 1:
            raise ConfigError(
                f"ticket_id_regex must have exactly one capture group, got {pattern.groups}"
            )
        return pattern


class Profile(BaseModel):
    """User profile loaded from ``<config_dir>/config.toml``."""

    project_management: Optional[ProjectManagementConfig] = None

    def require_project_management(self) -> ProjectManagementConfig:
        """Return the project management section or fail if it is absent."""
        if self.project_management is None:
            raise ConfigError("Missing [project_management] section in profile file")
        return self.project_management


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with COMMITSYNC_ (e.g., COMMITSYNC_GIT_TIMEOUT).
    """

    model_config = SettingsConfigDict(
        env_prefix="COMMITSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"

    # Seconds before a git subprocess is killed and treated as failed
    git_timeout: float = 60.0
    http_timeout: float = 10.0

    config_dir: Path = Field(default_factory=lambda: Path.home() / ".commitsync")

    @property
    def profile_path(self) -> Path:
        return self.config_dir / PROFILE_FILENAME


def load_profile(path: Path) -> Profile:
    """Read and validate a profile file, resolving its credential.

    Args:
        path: Path to the TOML profile

    Returns:
        Profile with ``project_management.credential`` filled from the environment

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"IO error: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"TOML error: {e}") from e

    try:
        profile = Profile(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid profile {path}: {e}") from e

    pm = profile.project_management
    if pm is not None:
        pm.credential = os.environ.get(pm.credential_env_var_name)

    return profile
