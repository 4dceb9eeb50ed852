"""Settings resolution with named profile support.

Values come from a profile block in ~/.config/draft2jira/config.toml, then
D2J_* environment variables and a .env file in cwd, which always win over
the profile. The sentinel string "undefined" counts as unset everywhere.
"""

import logging
import os
import re
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from draft2jira.errors import ConfigurationError
from draft2jira.labels import split_labels
from draft2jira.models import JiraConfig, ProjectLocation

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "draft2jira" / "config.toml"

UNDEFINED = "undefined"

# https://acme.atlassian.net/jira/software/projects/PROJ/boards/1
_PROJECT_URL = re.compile(
    r"^https://(?P<domain>[A-Za-z0-9-]+\.atlassian\.net)/jira/"
    r"(?:[^?#]*/)?projects/(?P<key>[A-Z][A-Z0-9]*)(?:[/?#]|$)"
)


class Draft2JiraSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="D2J_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_profile: str | None = None

    # Either a project URL, or site + key
    jira_project_url: str | None = None
    jira_site_url: str | None = None  # acme.atlassian.net
    jira_project_key: str | None = None

    jira_issue_type: str = "Task"
    include_tags_as_labels: bool = True
    include_jira_labels: bool = True
    jira_labels: str = "sent-from-drafts"  # comma-separated

    # Credentials: tier one, checked before the cached credential store
    credential_name: str = "draft2jira"
    jira_email: str | None = None
    jira_api_token: SecretStr | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Profile values arrive as init kwargs; env and .env must beat them
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @model_validator(mode="before")
    @classmethod
    def _drop_undefined(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if not (isinstance(v, str) and v.strip() == UNDEFINED)}
        return data

    @field_validator("jira_labels", mode="before")
    @classmethod
    def _join_label_list(cls, value: Any) -> Any:
        # TOML profiles may give a list instead of a comma-separated string
        if isinstance(value, list | tuple):
            return ",".join(str(v) for v in value)
        return value


def _read_toml() -> tomlkit.TOMLDocument:
    """Load ~/.config/draft2jira/config.toml, returning empty document if missing."""
    if not CONFIG_PATH.exists():
        return tomlkit.document()
    return tomlkit.load(CONFIG_PATH.open())


@lru_cache(maxsize=1)
def _load_toml() -> tomlkit.TOMLDocument:
    return _read_toml()


def _write_toml(doc: tomlkit.TOMLDocument) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(tomlkit.dumps(doc))
    _load_toml.cache_clear()


def _list_profiles(config: Mapping) -> list[str]:
    # tomlkit Table implements MutableMapping but not dict, so check Mapping
    return [k for k, v in config.items() if isinstance(v, Mapping)]


def _profile_not_found(name: str, config: Mapping) -> ConfigurationError:
    profiles = _list_profiles(config)
    return ConfigurationError(f"Profile '{name}' not found in {CONFIG_PATH}. Available: {profiles or '(none)'}")


def parse_project_url(url: str) -> ProjectLocation | None:
    """Return the site and project key of a Jira Cloud project URL, or None."""
    match = _PROJECT_URL.match(url.strip())
    if not match:
        return None
    return ProjectLocation(domain=match["domain"].lower(), project_key=match["key"])


def _clean_site(site: str | None) -> str | None:
    if not site:
        return None
    site = site.strip()
    for prefix in ("https://", "http://"):
        site = site.removeprefix(prefix)
    return site.rstrip("/") or None


def get_settings(profile: str | None = None) -> Draft2JiraSettings:
    """Resolve the active profile and return populated settings.

    Precedence for the profile name (highest to lowest):
    1. profile argument (--profile CLI flag)
    2. D2J_DEFAULT_PROFILE env var
    3. default_profile key in ~/.config/draft2jira/config.toml
    4. First profile defined in ~/.config/draft2jira/config.toml
    """
    toml_config = _load_toml()

    active = (
        profile
        or os.environ.get("D2J_DEFAULT_PROFILE")
        or toml_config.get("default_profile")
        or ((_profiles := _list_profiles(toml_config)) and _profiles[0] or None)
    )

    profile_defaults: dict = {}
    if active:
        if active in toml_config and isinstance(toml_config[active], Mapping):
            profile_defaults = {k: _unwrap(v) for k, v in toml_config[active].items()}
        else:
            raise _profile_not_found(active, toml_config)

    logger.debug("Active profile: %s", active or "(none)")
    try:
        # env vars + .env always override profile defaults
        return Draft2JiraSettings(**profile_defaults)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in profile '{active or 'env'}': {exc}") from exc


def _unwrap(value: Any) -> Any:
    # tomlkit items carry formatting; hand plain values to pydantic
    return value.unwrap() if hasattr(value, "unwrap") else value


def resolve_config(settings: Draft2JiraSettings) -> JiraConfig:
    """Turn loose settings into a validated JiraConfig.

    A project URL wins over the discrete site/key values when it parses. When it
    doesn't, resolution falls back to jira_site_url and jira_project_key.
    """
    site, project_key = settings.jira_site_url, settings.jira_project_key
    if settings.jira_project_url:
        location = parse_project_url(settings.jira_project_url)
        if location:
            site, project_key = location.domain, location.project_key
        else:
            logger.warning(
                "jira_project_url %r is not a Jira project URL, using jira_site_url / jira_project_key",
                settings.jira_project_url,
            )

    site = _clean_site(site)
    project_key = project_key.strip() if project_key else None

    missing = [name for name, value in (("jira_site_url", site), ("jira_project_key", project_key)) if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required setting: {', '.join(missing)}. Set D2J_{missing[0].upper()} or "
            f"{missing[0]} (or jira_project_url) in your profile in {CONFIG_PATH}"
        )

    return JiraConfig(
        site=site,  # type: ignore[arg-type]
        project_key=project_key,  # type: ignore[arg-type]
        issue_type=settings.jira_issue_type,
        include_tags_as_labels=settings.include_tags_as_labels,
        include_jira_labels=settings.include_jira_labels,
        static_labels=[label.strip() for label in split_labels(settings.jira_labels) if label.strip()],
        credential_name=settings.credential_name,
    )


def load_config(profile: str | None = None) -> JiraConfig:
    return resolve_config(get_settings(profile))


def set_default_profile(profile: str) -> Path:
    """Write default_profile. Once a config file exists, the profile must be in it."""
    doc = _read_toml()
    if CONFIG_PATH.exists() and profile not in _list_profiles(doc):
        raise _profile_not_found(profile, doc)
    doc["default_profile"] = profile
    _write_toml(doc)
    return CONFIG_PATH


def save_profile(name: str, values: Mapping[str, Any], make_default: bool = False) -> Path:
    """Add or replace a profile block (round-trip preserves any existing comments)."""
    doc = _read_toml()
    doc[name] = dict(values)
    if make_default:
        doc["default_profile"] = name
    _write_toml(doc)
    return CONFIG_PATH
