"""
Tests for settings defaults and the user .env writer.
"""

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings(_env_file=None)

        assert settings.page_cap == 4
        assert settings.page_size == 100
        assert settings.max_result_keys == 1000

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("JQL_RELATIONS_PAGE_CAP", "2")
        monkeypatch.setenv("JQL_RELATIONS_JIRA_BASE_URL", "https://acme.atlassian.net")

        settings = AppSettings(_env_file=None)

        assert settings.page_cap == 2
        assert settings.jira_base_url == "https://acme.atlassian.net"

    def test_page_size_is_bounded(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, page_size=500)


class TestWriteUserEnvVars:

    def test_merges_with_existing_file(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        env_path.parent.mkdir()
        env_path.write_text("# comment\nJQL_RELATIONS_JIRA_EMAIL='old@example.com'\nOTHER=1\n", encoding="utf-8")

        write_user_env_vars(
            {"JQL_RELATIONS_JIRA_EMAIL": "new@example.com", "JQL_RELATIONS_JIRA_API_TOKEN": "t"},
            env_path=env_path,
        )

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("#")
        assert "JQL_RELATIONS_JIRA_EMAIL=new@example.com" in lines
        assert "JQL_RELATIONS_JIRA_API_TOKEN=t" in lines
        assert "OTHER=1" in lines
