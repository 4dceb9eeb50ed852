"""Tests for draft2jira init wizard."""

from pathlib import Path
from unittest.mock import patch

import tomlkit
from typer.testing import CliRunner

import draft2jira.settings as settings_module
from draft2jira.main import app

runner = CliRunner()


class TestInitProjectUrl:
    def test_writes_url_profile(self) -> None:
        result = runner.invoke(
            app,
            ["init"],
            # profile, url, issue type, tags as labels, labels, set default, store creds
            input="work\nhttps://acme.atlassian.net/jira/software/projects/PROJ\nBug\ny\ndrafts,inbox\ny\nn\n",
        )

        assert result.exit_code == 0, result.output
        config = tomlkit.load(settings_module.CONFIG_PATH.open())
        assert config["default_profile"] == "work"
        profile = config["work"]
        assert profile["jira_project_url"] == "https://acme.atlassian.net/jira/software/projects/PROJ"
        assert profile["jira_issue_type"] == "Bug"
        assert profile["include_tags_as_labels"] is True
        assert profile["jira_labels"] == "drafts,inbox"
        assert "jira_site_url" not in profile

    def test_keeps_other_profiles(self) -> None:
        settings_module.CONFIG_PATH.write_text(
            tomlkit.dumps({"default_profile": "old", "old": {"jira_site_url": "old.atlassian.net"}})
        )
        result = runner.invoke(
            app,
            ["init"],
            input="work\nhttps://acme.atlassian.net/jira/software/projects/PROJ\n\ny\n\nn\nn\n",
        )

        assert result.exit_code == 0, result.output
        config = tomlkit.load(settings_module.CONFIG_PATH.open())
        assert config["default_profile"] == "old"
        assert config["old"]["jira_site_url"] == "old.atlassian.net"
        assert "work" in config


class TestInitDiscreteFallback:
    def test_unparseable_url_asks_for_site_and_key(self) -> None:
        result = runner.invoke(
            app,
            ["init"],
            input="personal\nhttps://example.com/whatever\nme.atlassian.net\nME\n\nn\n\nn\nn\n",
        )

        assert result.exit_code == 0, result.output
        assert "Could not read that URL" in result.output
        profile = tomlkit.load(settings_module.CONFIG_PATH.open())["personal"]
        assert profile["jira_site_url"] == "me.atlassian.net"
        assert profile["jira_project_key"] == "ME"
        assert profile["jira_issue_type"] == "Task"
        assert profile["include_tags_as_labels"] is False
        assert profile["jira_labels"] == "sent-from-drafts"

    def test_blank_site_exits(self) -> None:
        result = runner.invoke(app, ["init"], input="work\n\n  \nPROJ\n")
        assert result.exit_code != 0
        assert not settings_module.CONFIG_PATH.exists()


class TestInitCredentials:
    def test_stores_credentials(self, tmp_path: Path) -> None:
        creds_path = tmp_path / "credentials.toml"
        with patch("draft2jira.hosts.credentials.CREDENTIALS_PATH", creds_path):
            result = runner.invoke(
                app,
                ["init"],
                input=(
                    "work\nhttps://acme.atlassian.net/jira/software/projects/PROJ\n\ny\n\ny\n"
                    "y\njane@example.com\ntok-123\n"
                ),
            )

        assert result.exit_code == 0, result.output
        creds = tomlkit.load(creds_path.open())
        assert creds["draft2jira"]["email"] == "jane@example.com"
        assert creds["draft2jira"]["token"] == "tok-123"
