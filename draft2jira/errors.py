"""Error taxonomy. Every error is terminal for the run."""


class Draft2JiraError(Exception):
    """Base class for failures surfaced to the user."""


class ConfigurationError(Draft2JiraError):
    """Missing or invalid settings. Raised before any network call."""


class AuthorizationError(Draft2JiraError):
    """Jira answered 403."""


class ValidationError(Draft2JiraError):
    """Jira answered 400."""


class UnknownTransportError(Draft2JiraError):
    """Any other non-201 answer, or the request never completed."""

    def __init__(self, message: str, status_code: int = 0, response_text: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
