"""Build the Jira issue-creation request. No network I/O happens here."""

import base64

from draft2jira.models import Credentials, IssueFields, JiraConfig, JiraRequest

TIMEOUT_SECONDS = 30.0


def issue_endpoint(site: str) -> str:
    return f"https://{site}/rest/api/3/issue"


def basic_auth_header(credentials: Credentials) -> str:
    pair = f"{credentials.email}:{credentials.token.get_secret_value()}"
    return "Basic " + base64.b64encode(pair.encode("utf-8")).decode("ascii")


def build_payload(config: JiraConfig, fields: IssueFields) -> dict:
    return {
        "fields": {
            "project": {"key": config.project_key},
            "issuetype": {"name": config.issue_type},
            "summary": fields.summary,
            "description": fields.description.model_dump(),
            "labels": list(fields.labels),
        }
    }


def build_request(config: JiraConfig, fields: IssueFields, credentials: Credentials) -> JiraRequest:
    return JiraRequest(
        method="POST",
        url=issue_endpoint(config.site),
        headers={
            "Authorization": basic_auth_header(credentials),
            "Accept": "application/json",
            "Content-Type": "application/json",
        },
        data=build_payload(config, fields),
        timeout=TIMEOUT_SECONDS,
    )
