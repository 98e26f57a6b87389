from typing import Any
import json
from httpx import AsyncClient, Client, Headers, Response

API_KEY_HEADER_NAME = "X-API-Key"
CONTENT_TYPE_HEADER_NAME = "Content-Type"
JSON_CONTENT_TYPE = "application/json"

class SolverHttpClient:
    """HTTP client for making authenticated requests to the HOT solver API.

    Every request carries the API key header. Requests are sent once, with
    the httpx default timeout, and the raw response is returned to the caller.
    """

    def __init__(self, base_url: str, api_key: str):
        """Initialize a new SolverHttpClient.

        Args:
            base_url: The base URL of the solver API
            api_key: The API key sent in the ``X-API-Key`` header
        """
        self.async_client = AsyncClient()
        self.sync_client = Client()
        self.base_url = base_url
        self.api_key = api_key

    async def post(self, path: str, body: Any) -> Response:
        """Make a POST request without custom headers.

        Args:
            path: The API endpoint path
            body: The request body to send

        Returns:
            The API response
        """
        return await self.post_with_headers(path, body, Headers())

    def post_sync(self, path: str, body: Any) -> Response:
        """Make a synchronous POST request without custom headers.

        Args:
            path: The API endpoint path
            body: The request body to send

        Returns:
            The API response
        """
        return self.post_with_headers_sync(path, body, Headers())

    async def post_with_headers(self, path: str, body: Any, custom_headers: Headers) -> Response:
        """Make a POST request with custom headers.

        Args:
            path: The API endpoint path
            body: The request body to send
            custom_headers: Additional headers to include

        Returns:
            The API response
        """
        url = f"{self.base_url}{path}"
        body_bytes = json.dumps(body).encode()
        headers = self._add_auth(custom_headers)
        return await self.async_client.post(url, headers=headers, content=body_bytes)

    def post_with_headers_sync(self, path: str, body: Any, custom_headers: Headers) -> Response:
        """Make a synchronous POST request with custom headers.

        Args:
            path: The API endpoint path
            body: The request body to send
            custom_headers: Additional headers to include

        Returns:
            The API response
        """
        url = f"{self.base_url}{path}"
        body_bytes = json.dumps(body).encode()
        headers = self._add_auth(custom_headers)
        return self.sync_client.post(url, headers=headers, content=body_bytes)

    async def aclose(self) -> None:
        await self.async_client.aclose()

    def close(self) -> None:
        self.sync_client.close()

    def _add_auth(self, headers: Headers) -> Headers:
        """Add the content type and API key headers to a request.

        Args:
            headers: The existing headers

        Returns:
            Headers with authentication information added
        """
        headers[CONTENT_TYPE_HEADER_NAME] = JSON_CONTENT_TYPE
        headers[API_KEY_HEADER_NAME] = self.api_key
        return headers
