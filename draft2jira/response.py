"""Map a Jira response onto a created issue or a terminal error."""

import json
import logging

from draft2jira.errors import AuthorizationError, UnknownTransportError, ValidationError
from draft2jira.models import CreatedIssue, JiraConfig, TransportResponse

logger = logging.getLogger(__name__)


def browse_url(site: str, key: str) -> str:
    return f"https://{site}/browse/{key}"


def format_issue_link(created: CreatedIssue) -> str:
    """Markdown back-reference written at the top of the draft."""
    return f"Jira Issue: [{created.key}]({created.browse_url})"


def _jira_error_detail(response_text: str) -> str:
    """Pull errorMessages / errors out of a Jira error body, if it has any."""
    try:
        body = json.loads(response_text)
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    messages = list(body.get("errorMessages") or [])
    errors = body.get("errors") or {}
    if isinstance(errors, dict):
        messages += [f"{field}: {message}" for field, message in errors.items()]
    return "; ".join(str(m) for m in messages)


def interpret_response(response: TransportResponse, config: JiraConfig) -> CreatedIssue:
    logger.debug("Jira API response: %s -- %s", response.status_code, response.response_text or "(empty)")

    if response.status_code == 403:
        raise AuthorizationError(
            "Access denied. Check your Jira permissions. Forget credentials and rerun: draft2jira forget-credentials"
        )
    if response.status_code == 400:
        detail = _jira_error_detail(response.response_text)
        message = "Bad request. Check project key or required fields."
        raise ValidationError(f"{message} {detail}" if detail else message)
    if response.success and response.status_code == 201:
        try:
            body = json.loads(response.response_text)
            key = body["key"]
            return CreatedIssue(
                key=key,
                id=str(body["id"]) if body.get("id") is not None else None,
                self_url=body.get("self"),
                browse_url=browse_url(config.site, key),
            )
        except (ValueError, KeyError, TypeError) as exc:  # JSONDecodeError and pydantic ValidationError are ValueErrors
            raise UnknownTransportError(
                f"Jira returned 201 with an unreadable body: {response.response_text!r}",
                status_code=response.status_code,
                response_text=response.response_text,
            ) from exc

    raise UnknownTransportError(
        f"ERROR {response.status_code}: {response.response_text or 'No response text'}",
        status_code=response.status_code,
        response_text=response.response_text,
    )
