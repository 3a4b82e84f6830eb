"""Jira ticket provider."""

from typing import Any, Optional

import httpx
import structlog

from commitsync.errors import ConfigError, ProviderUnavailable
from commitsync.models.config import AuthType

logger = structlog.get_logger(__name__)

TICKET_ID_PLACEHOLDER = ":ticket_id"


class JiraTicketProvider:
    """Fetches issue status from the Jira REST API.

    Expects ``fields.status.name`` in the JSON body of a 200 response.
    """

    def __init__(
        self,
        url_template: str,
        credential: Optional[str] = None,
        auth_type: Optional[AuthType] = AuthType.BASIC,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            url_template: Issue URL containing a ``:ticket_id`` placeholder
            credential: ``username:password`` for basic auth, a token for bearer
            auth_type: How the credential is sent; None sends no credential
            timeout: Request timeout in seconds
            client: Optional pre-configured httpx client

        Raises:
            ConfigError: If a basic credential has no ``:`` separator
        """
        self.url_template = url_template
        self.auth_type = auth_type
        headers = {"Accept": "application/json"}
        auth = None

        if credential is not None and auth_type == AuthType.BASIC:
            username, sep, password = credential.partition(":")
            if not sep:
                raise ConfigError("Basic credential must have the form 'username:password'")
            auth = httpx.BasicAuth(username, password)
        elif credential is not None and auth_type == AuthType.BEARER:
            headers["Authorization"] = f"Bearer {credential}"

        self.client = client or httpx.Client(timeout=timeout)
        self._headers = headers
        self._auth = auth

    def ticket_url(self, ticket_id: str) -> str:
        return self.url_template.replace(TICKET_ID_PLACEHOLDER, ticket_id)

    def fetch_status(self, ticket_id: str) -> str:
        url = self.ticket_url(ticket_id)
        try:
            response = self.client.get(url, headers=self._headers, auth=self._auth)
        except httpx.HTTPError as e:
            raise ProviderUnavailable(ticket_id, f"request failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise ProviderUnavailable(ticket_id, f"HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderUnavailable(ticket_id, "response is not valid JSON") from e

        return _status_name(ticket_id, body)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _status_name(ticket_id: str, body: Any) -> str:
    try:
        status = body["fields"]["status"]["name"]
    except (KeyError, TypeError) as e:
        raise ProviderUnavailable(ticket_id, "missing fields.status.name in response") from e
    if not isinstance(status, str):
        raise ProviderUnavailable(ticket_id, "fields.status.name is not a string")
    return status
