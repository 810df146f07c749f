"""
OAuth2 token exchange for the Supabase Management API.

The client ID and secret are shown when creating the Supabase OAuth app.
Refreshing is entirely caller-driven: nothing here tracks expiry or renews
tokens in the background.
"""

import httpx

from supabase_management.core.client import DEFAULT_BASE_URL, APIRequest, send_request
from supabase_management.core.types import TokenPair

TOKEN_URL = f"{DEFAULT_BASE_URL}/oauth/token"


async def generate_access_token(
    client_id: str,
    client_secret: str,
    refresh_token: str,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> TokenPair:
    """
    Exchange a refresh token for a new access token.

    Args:
        client_id: OAuth app client ID
        client_secret: OAuth app client secret
        refresh_token: A previously issued refresh token
        http_client: Transport override; the shared transport is used by default

    Returns:
        TokenPair; `refresh_token` is set when the server rotated it

    Raises:
        ManagementAPIError: On send, status or decode failures

    """
    request = APIRequest(
        "POST",
        TOKEN_URL,
        form={
            "grant_type": "refresh_token",
            "client_id": client_id,
            "client_secret": client_secret,
            "refresh_token": refresh_token,
        },
    )
    return await send_request(
        request,
        TokenPair.from_dict,
        headers={"Accept": "application/json"},
        transport=http_client,
    )
