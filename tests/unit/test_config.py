"""Tests for settings and profile loading."""

from pathlib import Path

import pytest

from commitsync.errors import ConfigError
from commitsync.models import AuthType, Profile, Settings, TicketProviderName, load_profile

PROFILE = """
[project_management]
provider = "jira"
url = "https://jira.example.com/rest/api/2/issue/:ticket_id"
credential_env_var_name = "COMMITSYNC_TEST_JIRA_AUTH"
ticket_id_regex = '^\\[(\\w+-\\d+)\\]'
auth_type = "bearer"
"""


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(PROFILE)
    return path


class TestLoadProfile:
    """Test reading the profile file."""

    def test_reads_profile_and_credential(self, profile_file, monkeypatch):
        monkeypatch.setenv("COMMITSYNC_TEST_JIRA_AUTH", "token-xyz")

        profile = load_profile(profile_file)
        pm = profile.require_project_management()

        assert pm.provider == TicketProviderName.JIRA
        assert pm.auth_type == AuthType.BEARER
        assert pm.credential == "token-xyz"
        assert pm.ticket_pattern().match("[ABC-12] msg").group(1) == "ABC-12"

    def test_missing_env_var_leaves_credential_empty(self, profile_file, monkeypatch):
        monkeypatch.delenv("COMMITSYNC_TEST_JIRA_AUTH", raising=False)

        pm = load_profile(profile_file).require_project_management()

        assert pm.credential is None

    def test_credential_is_not_serialized(self, profile_file, monkeypatch):
        monkeypatch.setenv("COMMITSYNC_TEST_JIRA_AUTH", "token-xyz")

        data = load_profile(profile_file).model_dump()

        assert "credential" not in data["project_management"]

    def test_file_not_found(self, tmp_path):
        with pytest.raises(ConfigError, match="IO error"):
            load_profile(tmp_path / "missing.toml")

    def test_wrong_toml_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[project_management\nurl = ")

        with pytest.raises(ConfigError, match="TOML error"):
            load_profile(path)

    def test_schema_error(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[project_management]\nprovider = "linear"\n')

        with pytest.raises(ConfigError, match="Invalid profile"):
            load_profile(path)

    def test_empty_profile_has_no_project_management(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("")

        profile = load_profile(path)

        assert profile.project_management is None
        with pytest.raises(ConfigError, match="project_management"):
            profile.require_project_management()

    def test_ticket_pattern_needs_one_group(self):
        profile = Profile(
            project_management={
                "url": "https://x/:ticket_id",
                "credential_env_var_name": "X",
                "ticket_id_regex": r"\w+-\d+",
            }
        )

        with pytest.raises(ConfigError, match="exactly one capture group"):
            profile.require_project_management().ticket_pattern()


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "GIT_TIMEOUT", "HTTP_TIMEOUT", "CONFIG_DIR"):
            monkeypatch.delenv(f"COMMITSYNC_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.git_timeout == 60.0
        assert settings.config_dir == Path.home() / ".commitsync"
        assert settings.profile_path == Path.home() / ".commitsync" / "config.toml"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COMMITSYNC_GIT_TIMEOUT", "5")
        monkeypatch.setenv("COMMITSYNC_CONFIG_DIR", str(tmp_path))

        settings = Settings(_env_file=None)

        assert settings.git_timeout == 5.0
        assert settings.profile_path == tmp_path / "config.toml"
