"""Abstract host collaborators the pipeline is written against."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Literal

from draft2jira.models import JiraRequest, TransportResponse

FieldKind = Literal["text", "password", "url"]


class CredentialStore(ABC):
    @abstractmethod
    def add_field(self, name: str, label: str, kind: FieldKind = "text") -> None: ...

    @abstractmethod
    def authorize(self) -> None:
        """Make every declared field available, prompting for missing ones."""

    @abstractmethod
    def get_value(self, name: str) -> str | None: ...

    @abstractmethod
    def forget(self) -> bool: ...


class HttpTransport(ABC):
    @abstractmethod
    def request(self, request: JiraRequest) -> TransportResponse: ...


class DraftStore(ABC):
    @property
    @abstractmethod
    def content(self) -> str: ...

    @property
    @abstractmethod
    def tags(self) -> Sequence[str]: ...

    @abstractmethod
    def prepend(self, text: str, separator: str = "\n") -> None: ...

    @abstractmethod
    def update(self) -> None:
        """Persist pending changes."""


class Notifier(ABC):
    @abstractmethod
    def display_success_message(self, text: str) -> None: ...

    @abstractmethod
    def display_error_message(self, text: str) -> None: ...

    @abstractmethod
    def set_clipboard(self, text: str) -> bool: ...
