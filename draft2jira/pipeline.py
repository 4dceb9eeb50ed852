"""Draft to Jira issue, end to end: one note, one request, one draft update."""

import json
import logging

from draft2jira.errors import Draft2JiraError
from draft2jira.fields import extract_fields
from draft2jira.hosts.base import DraftStore, HttpTransport, Notifier
from draft2jira.labels import resolve_labels
from draft2jira.models import CreatedIssue, Credentials, IssueFields, JiraConfig, JiraRequest
from draft2jira.request import build_request
from draft2jira.response import format_issue_link, interpret_response

logger = logging.getLogger(__name__)

LINK_SEPARATOR = "\n\n"


def make_issue_fields(draft: DraftStore, config: JiraConfig) -> IssueFields:
    summary, description = extract_fields(draft.content)
    return IssueFields(summary=summary, description=description, labels=resolve_labels(draft.tags, config))


def _log_request(request: JiraRequest) -> None:
    headers = {k: ("Basic <redacted>" if k == "Authorization" else v) for k, v in request.headers.items()}
    logger.debug("%s %s", request.method, request.url)
    logger.debug("Request headers:\n%s", json.dumps(headers, indent=2))
    logger.debug("Request body:\n%s", json.dumps(request.data, indent=2))


def send_draft(
    config: JiraConfig,
    credentials: Credentials,
    draft: DraftStore,
    transport: HttpTransport,
    notifier: Notifier,
) -> CreatedIssue:
    """Create a Jira issue from the draft and prepend a link to it.

    Any failure is reported through the notifier and re-raised; the draft is
    only touched once Jira has confirmed the issue.
    """
    fields = make_issue_fields(draft, config)
    request = build_request(config, fields, credentials)
    _log_request(request)

    try:
        created = interpret_response(transport.request(request), config)
    except Draft2JiraError as exc:
        notifier.display_error_message(f"Failed to create Jira issue. {exc}")
        raise

    draft.prepend(format_issue_link(created), LINK_SEPARATOR)
    draft.update()

    notifier.display_success_message(f"Created {created.key} in Jira")
    if not notifier.set_clipboard(created.browse_url):
        logger.debug("Clipboard unavailable, issue URL: %s", created.browse_url)
    return created
