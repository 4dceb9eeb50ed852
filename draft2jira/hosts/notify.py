"""Terminal notifications and clipboard access."""

import logging
import shutil
import subprocess

from rich import print as rprint
from rich.markup import escape

from draft2jira.hosts.base import Notifier

logger = logging.getLogger(__name__)

# First one found on PATH wins
_CLIPBOARD_COMMANDS = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
)


class ConsoleNotifier(Notifier):
    def display_success_message(self, text: str) -> None:
        rprint(f"[green]✓[/green] {escape(text)}")

    def display_error_message(self, text: str) -> None:
        rprint(f"[red]{escape(text)}[/red]")

    def set_clipboard(self, text: str) -> bool:
        for cmd in _CLIPBOARD_COMMANDS:
            if shutil.which(cmd[0]) is None:
                continue
            result = subprocess.run(cmd, input=text, text=True, capture_output=True)
            if result.returncode == 0:
                return True
            logger.debug("%s failed: %s", cmd[0], result.stderr.strip())
        logger.debug("No clipboard command available")
        return False
