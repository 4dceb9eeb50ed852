"""Cached Jira credentials.

Two tiers: an email + API token given through settings (D2J_JIRA_EMAIL,
D2J_JIRA_API_TOKEN or the profile) is used as-is. Otherwise the values come
from ~/.config/draft2jira/credentials.toml, prompting once and caching the
answers under the credential name.
"""

import logging
from collections.abc import Callable
from pathlib import Path

import tomlkit
import typer

from draft2jira.errors import ConfigurationError
from draft2jira.hosts.base import CredentialStore, FieldKind
from draft2jira.models import Credentials
from draft2jira.settings import Draft2JiraSettings

logger = logging.getLogger(__name__)

CREDENTIALS_PATH = Path.home() / ".config" / "draft2jira" / "credentials.toml"


class TomlCredentialStore(CredentialStore):
    def __init__(
        self,
        name: str,
        description: str = "",
        path: Path | None = None,
        prompt: Callable[..., str] = typer.prompt,
    ) -> None:
        self.name = name
        self.description = description
        self._path = path or CREDENTIALS_PATH
        self._prompt = prompt
        self._fields: dict[str, tuple[str, FieldKind]] = {}
        self._values: dict[str, str] = {}

    def add_field(self, name: str, label: str, kind: FieldKind = "text") -> None:
        self._fields[name] = (label, kind)

    def _load(self) -> tomlkit.TOMLDocument:
        if not self._path.exists():
            return tomlkit.document()
        return tomlkit.load(self._path.open())

    def _save(self, doc: tomlkit.TOMLDocument) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only before any secret is written; an existing file may have been wider
        self._path.touch(mode=0o600, exist_ok=True)
        self._path.chmod(0o600)
        self._path.write_text(tomlkit.dumps(doc))

    def authorize(self) -> None:
        doc = self._load()
        cached = doc.get(self.name) or {}
        self._values = {k: str(v) for k, v in cached.items() if k in self._fields and str(v)}

        missing = [name for name in self._fields if name not in self._values]
        if not missing:
            logger.debug("Using cached credential '%s'", self.name)
            return

        if self.description:
            typer.echo(self.description)
        for name in missing:
            label, kind = self._fields[name]
            value = self._prompt(label, hide_input=kind == "password").strip()
            if not value:
                raise ConfigurationError(f"{label} cannot be empty.")
            self._values[name] = value

        table = tomlkit.table()
        for name, value in self._values.items():
            table[name] = value
        doc[self.name] = table
        self._save(doc)
        logger.debug("Cached credential '%s' in %s", self.name, self._path)

    def get_value(self, name: str) -> str | None:
        return self._values.get(name)

    def forget(self) -> bool:
        """Drop the cached values. Returns False if nothing was cached."""
        self._values = {}
        doc = self._load()
        if self.name not in doc:
            return False
        del doc[self.name]
        self._save(doc)
        return True


def credential_store_for(settings: Draft2JiraSettings) -> TomlCredentialStore:
    store = TomlCredentialStore(settings.credential_name, "Jira credentials: email and API token")
    store.add_field("email", "Email Address", "text")
    store.add_field("token", "API Token", "password")
    return store


def get_credentials(settings: Draft2JiraSettings, store: CredentialStore | None = None) -> Credentials:
    if settings.jira_email and settings.jira_api_token:
        logger.debug("Using credentials from settings")
        return Credentials(email=settings.jira_email, token=settings.jira_api_token)

    store = store or credential_store_for(settings)
    store.authorize()
    email, token = store.get_value("email"), store.get_value("token")
    if not email or not token:
        raise ConfigurationError("Failed to get Jira credentials.")
    return Credentials(email=email, token=token)  # type: ignore[arg-type]
