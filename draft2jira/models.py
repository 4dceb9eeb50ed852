"""Shared pydantic models: the contract between the pipeline stages and the hosts."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, SecretStr


class JiraConfig(BaseModel):
    """Resolved configuration. Built once per run by settings.resolve_config."""

    model_config = ConfigDict(frozen=True)

    site: str  # acme.atlassian.net, no scheme
    project_key: str
    issue_type: str = "Task"
    include_tags_as_labels: bool = True
    include_jira_labels: bool = True
    static_labels: list[str] = ["sent-from-drafts"]
    credential_name: str = "draft2jira"


class ProjectLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: str
    project_key: str


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    token: SecretStr


class AdfText(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class AdfParagraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["paragraph"] = "paragraph"
    content: list[AdfText]


class AdfDocument(BaseModel):
    """Atlassian Document Format envelope: one paragraph, one text run."""

    model_config = ConfigDict(frozen=True)

    type: Literal["doc"] = "doc"
    version: int = 1
    content: list[AdfParagraph]

    @property
    def text(self) -> str:
        return self.content[0].content[0].text


class IssueFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    description: AdfDocument
    labels: list[str] = []


class JiraRequest(BaseModel):
    """Fully formed request, handed to an HttpTransport."""

    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    url: str
    headers: dict[str, str]
    data: dict[str, Any]
    timeout: float = 30.0


class TransportResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int  # 0 when the request never completed
    success: bool
    response_text: str = ""


class CreatedIssue(BaseModel):
    """Returned by interpret_response: just what the caller needs."""

    model_config = ConfigDict(frozen=True)

    key: str
    id: str | None = None
    self_url: str | None = None  # REST self link, not the browse page
    browse_url: str
