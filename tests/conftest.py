"""Shared test fixtures."""

from pathlib import Path

import pytest

import draft2jira.settings as settings_module
from draft2jira.models import Credentials, JiraConfig, TransportResponse

_ENV_VARS = (
    "D2J_DEFAULT_PROFILE",
    "D2J_JIRA_PROJECT_URL",
    "D2J_JIRA_SITE_URL",
    "D2J_JIRA_PROJECT_KEY",
    "D2J_JIRA_ISSUE_TYPE",
    "D2J_INCLUDE_TAGS_AS_LABELS",
    "D2J_INCLUDE_JIRA_LABELS",
    "D2J_JIRA_LABELS",
    "D2J_CREDENTIAL_NAME",
    "D2J_JIRA_EMAIL",
    "D2J_JIRA_API_TOKEN",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """No real config file, env vars or .env leak into a test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "CONFIG_PATH", tmp_path / "config.toml")
    settings_module._load_toml.cache_clear()
    yield
    settings_module._load_toml.cache_clear()


@pytest.fixture
def jira_config() -> JiraConfig:
    return JiraConfig(site="acme.atlassian.net", project_key="PROJ")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(email="jane@example.com", token="api-token-123")  # type: ignore[arg-type]


@pytest.fixture
def created_response() -> TransportResponse:
    return TransportResponse(
        status_code=201,
        success=True,
        response_text='{"id":"10001","key":"PROJ-12","self":"https://acme.atlassian.net/rest/api/3/issue/10001"}',
    )
