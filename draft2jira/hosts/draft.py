"""A draft backed by a markdown file on disk."""

from collections.abc import Iterable, Sequence
from pathlib import Path

from draft2jira.errors import ConfigurationError
from draft2jira.hosts.base import DraftStore


class FileDraft(DraftStore):
    def __init__(self, path: Path, tags: Iterable[str] = ()) -> None:
        self._path = path
        try:
            self._content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigurationError(f"Draft {path} is not UTF-8 text: {exc.reason} at byte {exc.start}") from exc
        except OSError as exc:
            raise ConfigurationError(f"Cannot read draft {path}: {exc.strerror or exc}") from exc
        self._tags = tuple(tags)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def content(self) -> str:
        return self._content

    @property
    def tags(self) -> Sequence[str]:
        return self._tags

    def prepend(self, text: str, separator: str = "\n") -> None:
        self._content = f"{text}{separator}{self._content}"

    def update(self) -> None:
        self._path.write_text(self._content, encoding="utf-8")
