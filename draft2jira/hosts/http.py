"""httpx-backed transport."""

import logging

import httpx

from draft2jira.hosts.base import HttpTransport
from draft2jira.models import JiraRequest, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(HttpTransport):
    def request(self, request: JiraRequest) -> TransportResponse:
        try:
            response = httpx.request(
                request.method,
                request.url,
                headers=request.headers,
                json=request.data,
                timeout=request.timeout,
            )
        except httpx.HTTPError as exc:
            # Timeouts and connection failures become an unknown failure downstream
            logger.debug("%s %s failed: %r", request.method, request.url, exc)
            return TransportResponse(status_code=0, success=False, response_text=str(exc) or type(exc).__name__)

        return TransportResponse(
            status_code=response.status_code,
            success=response.is_success,
            response_text=response.text,
        )
