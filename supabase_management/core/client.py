"""
Core HTTP client for the Supabase Management API.

Handles the shared transport, authentication, status classification and
JSON decoding. Every resource operation goes through APIClient.dispatch.
"""

import asyncio
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_BASE_URL = "https://api.supabase.com/v1"
DEFAULT_TIMEOUT = 60

T = TypeVar("T")

Parser = Callable[[Any], T]


# =============================================================================
# Errors
# =============================================================================


class ManagementAPIError(Exception):
    """Base error class for every failure raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        return {"error": self.message}


class SendError(ManagementAPIError):
    """The request never produced a response (DNS, connect, TLS, timeout)."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to send request: {detail}")
        self.detail = detail


class StatusError(ManagementAPIError):
    """The API answered with a 4xx or 5xx status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"{status}: {body}")
        self.status = status
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        result["status"] = self.status
        return result


class DecodeError(ManagementAPIError):
    """A success response whose body did not match the expected shape."""

    def __init__(self, type_name: str, detail: str):
        super().__init__(f"Failed to parse JSON into {type_name}: {detail}")
        self.type_name = type_name
        self.detail = detail


class ValidationError(ManagementAPIError):
    """Validation error for local input issues (not API errors)."""


# =============================================================================
# Transport
# =============================================================================


_shared_transport: httpx.AsyncClient | None = None
_shared_loop: asyncio.AbstractEventLoop | None = None


def get_shared_transport() -> httpx.AsyncClient:
    """
    Return the process-wide HTTP client, creating it on first use.

    The client is never closed by this package; connections are reused by
    every APIClient and by the token exchange. Pooled connections belong to
    the event loop that opened them, so a new client is created when called
    from a different running loop (e.g. a second `asyncio.run`).
    """
    global _shared_transport, _shared_loop
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    if _shared_transport is None or (loop is not None and loop is not _shared_loop):
        logger.debug("Creating shared transport")
        _shared_transport = httpx.AsyncClient(timeout=httpx.Timeout(DEFAULT_TIMEOUT))
        _shared_loop = loop
    return _shared_transport


# =============================================================================
# Requests and decoding
# =============================================================================


@dataclass(frozen=True)
class APIRequest:
    """A fully built request. Never carries the bearer token."""

    method: str
    url: str
    json: Any = None
    form: dict[str, str] | None = None

    def build(self, transport: httpx.AsyncClient, headers: dict[str, str] | None = None) -> httpx.Request:
        """Turn the descriptor into an httpx request for the given transport."""
        return transport.build_request(
            self.method,
            self.url,
            json=self.json,
            data=self.form,
            headers=headers,
        )


def type_name(parser: Callable[..., Any] | None) -> str:
    """Human-readable name of the type a parser produces."""
    if parser is None:
        return "JSON value"
    name = getattr(parser, "type_name", None)
    if name:
        return name
    owner = getattr(parser, "__self__", None)
    if isinstance(owner, type):
        return owner.__name__
    if isinstance(parser, type):
        return parser.__name__
    return getattr(parser, "__qualname__", repr(parser))


def list_of(parser: Parser[T]) -> Parser[list[T]]:
    """Build a parser for a JSON array whose items are parsed by `parser`."""

    def parse(data: Any) -> list[T]:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [parser(item) for item in data]

    parse.type_name = f"list[{type_name(parser)}]"  # type: ignore[attr-defined]
    return parse


def decode_response(response: httpx.Response, parser: Parser[T] | None = None) -> T:
    """
    Decode a success response body.

    Raises:
        DecodeError: If the body is not JSON or does not match the parser

    """
    if parser is None and not response.content:
        return None  # type: ignore[return-value]
    try:
        data = response.json()
        if parser is None:
            return data
        return parser(data)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DecodeError(type_name(parser), str(e) or repr(e)) from e


async def send_request(
    request: APIRequest,
    parser: Parser[T] | None = None,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncClient | None = None,
) -> T:
    """
    Send a request, classify the response and decode the body.

    This is the unauthenticated building block shared by APIClient.dispatch
    and the OAuth token exchange.

    Args:
        request: The request descriptor
        parser: Callable turning the decoded JSON into the result type
        headers: Extra headers for this call only
        transport: HTTP client override (defaults to the shared transport)

    Returns:
        The parsed body, the raw JSON if no parser is given, or None for an
        empty body without a parser

    Raises:
        SendError: On network errors and timeouts
        StatusError: On 4xx/5xx responses
        DecodeError: On malformed or mismatched success bodies

    """
    transport = transport or get_shared_transport()
    logger.debug("Sending %s %s", request.method, request.url)

    try:
        response = await transport.send(request.build(transport, headers))
    except httpx.HTTPError as e:
        raise SendError(str(e) or type(e).__name__) from e

    status = response.status_code
    logger.debug("%s %s -> %d", request.method, request.url, status)

    if response.is_client_error or response.is_server_error:
        raise StatusError(status, response.text)

    return decode_response(response, parser)


# =============================================================================
# Authenticated client
# =============================================================================


class APIClient:
    """
    Low-level HTTP client for the Supabase Management API.

    Handles:
    - Authentication via a bearer access token
    - HTTP methods (GET, POST, PUT, PATCH, DELETE)
    - Error classification and response decoding
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the API client.

        Args:
            access_token: Management API access token (or SUPABASE_ACCESS_TOKEN env var)
            base_url: API base URL (or SUPABASE_API_URL env var)
            http_client: Transport override; the shared transport is used by default

        """
        self._access_token = access_token or os.environ.get("SUPABASE_ACCESS_TOKEN")
        env_base_url = os.environ.get("SUPABASE_API_URL", DEFAULT_BASE_URL)
        self.base_url = (base_url or env_base_url).rstrip("/")
        self._http_client = http_client

    def __repr__(self) -> str:
        return f"APIClient(base_url={self.base_url!r})"

    @property
    def transport(self) -> httpx.AsyncClient:
        """The HTTP client used for every dispatch."""
        return self._http_client or get_shared_transport()

    def _ensure_access_token(self) -> str:
        """Ensure an access token is configured."""
        if not self._access_token:
            raise ValidationError("SUPABASE_ACCESS_TOKEN environment variable not set")
        return self._access_token

    def _build_url(self, path: str) -> str:
        """Build full URL from a path relative to the API root."""
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def dispatch(self, request: APIRequest, parser: Parser[T] | None = None) -> T:
        """
        Send a request with the bearer token attached.

        Args:
            request: The request descriptor
            parser: Callable turning the decoded JSON into the result type

        Returns:
            The decoded result

        Raises:
            ManagementAPIError: On send, status or decode failures

        """
        token = self._ensure_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        return await send_request(request, parser, headers=headers, transport=self.transport)

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    async def get(self, path: str, parser: Parser[T] | None = None) -> T:
        """Make a GET request."""
        return await self.dispatch(APIRequest("GET", self._build_url(path)), parser)

    async def post(self, path: str, payload: Any = None, parser: Parser[T] | None = None) -> T:
        """Make a POST request."""
        return await self.dispatch(APIRequest("POST", self._build_url(path), json=payload), parser)

    async def put(self, path: str, payload: Any = None, parser: Parser[T] | None = None) -> T:
        """Make a PUT request."""
        return await self.dispatch(APIRequest("PUT", self._build_url(path), json=payload), parser)

    async def patch(self, path: str, payload: Any = None, parser: Parser[T] | None = None) -> T:
        """Make a PATCH request."""
        return await self.dispatch(APIRequest("PATCH", self._build_url(path), json=payload), parser)

    async def delete(self, path: str, parser: Parser[T] | None = None) -> T:
        """Make a DELETE request."""
        return await self.dispatch(APIRequest("DELETE", self._build_url(path)), parser)
