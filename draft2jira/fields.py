"""Split draft text into a Jira summary and an ADF description."""

import re

from draft2jira.models import AdfDocument, AdfParagraph, AdfText

UNTITLED = "Untitled"
NO_DESCRIPTION = "No description."

# Only real line breaks; str.splitlines would also split on \f, \v, \x85, \u2028 ...
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def make_adf_description(body: str) -> AdfDocument:
    """Wrap body text in a single-paragraph ADF document. No markdown parsing."""
    text = body if body.strip() else NO_DESCRIPTION
    return AdfDocument(content=[AdfParagraph(content=[AdfText(text=text)])])


def extract_fields(text: str) -> tuple[str, AdfDocument]:
    """Return (summary, description) for the draft text.

    The first line of the trimmed text is the summary; every following line is
    the description body, rejoined with newlines.
    """
    trimmed = text.strip()
    lines = _LINE_BREAK.split(trimmed) if trimmed else []
    summary = lines[0] if lines else ""
    body = "\n".join(lines[1:])
    return summary or UNTITLED, make_adf_description(body)
