"""
GitHub GraphQL client for authenticated queries and mutations.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


class GitHubGraphQLClient:
    """Async client for the GitHub GraphQL endpoint."""

    USER_AGENT = "branch-commit"

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_GRAPHQL_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub token used as a bearer credential
            url: GraphQL endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.url = url
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "User-Agent": self.USER_AGENT,
        }

    async def __aenter__(self) -> "GitHubGraphQLClient":
        self._client = httpx.AsyncClient(
            headers=self._get_headers(),
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Execute a GraphQL document and return its `data` object.

        Args:
            query: GraphQL query or mutation text
            variables: Values bound to the document's variables

        Returns:
            The `data` member of the response

        Raises:
            TransportError: On network failure, a non-2xx status, a malformed
                body, or a response carrying GraphQL errors
        """
        if self._client is None:
            raise RuntimeError("Client not opened; use 'async with'")

        payload = {"query": query, "variables": variables or {}}
        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise TransportError(error_msg, detail=repr(e)) from e

        return self._process_response(response)

    def _process_response(self, response: httpx.Response) -> Dict[str, Any]:
        if not response.is_success:
            raise TransportError(
                f"GitHub API request failed (status {response.status_code})",
                detail=response.text,
            )

        try:
            body = response.json()
        except json.JSONDecodeError as e:
            raise TransportError(
                "GitHub API returned a non-JSON response", detail=response.text
            ) from e

        if not isinstance(body, dict):
            raise TransportError("GitHub API returned an unexpected body", detail=response.text)

        errors = body.get("errors") or []
        if errors:
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            )
            raise TransportError(
                f"GitHub API returned errors: {messages}",
                detail=json.dumps(errors, indent=2),
                errors=errors,
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportError("GitHub API response has no data", detail=response.text)

        logger.debug(f"GitHub API request to {self.url} successful")
        return data
