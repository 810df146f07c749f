"""
Live smoke test against the real Management API.

Run with: python -m pytest tests/test_integration.py -v -s
Requires: SUPABASE_CLIENT_ID, SUPABASE_CLIENT_SECRET and SUPABASE_REFRESH_TOKEN
environment variables (or a .env file at the project root).
"""

import os

import pytest

from supabase_management import SupabaseManagementClient, generate_access_token

CLIENT_ID = os.environ.get("SUPABASE_CLIENT_ID")
CLIENT_SECRET = os.environ.get("SUPABASE_CLIENT_SECRET")
REFRESH_TOKEN = os.environ.get("SUPABASE_REFRESH_TOKEN")


@pytest.fixture
def require_credentials():
    """Skip test if credentials not available."""
    if not (CLIENT_ID and CLIENT_SECRET and REFRESH_TOKEN):
        pytest.skip("SUPABASE_CLIENT_ID, SUPABASE_CLIENT_SECRET and SUPABASE_REFRESH_TOKEN required")


@pytest.mark.asyncio
async def test_token_exchange_and_read_endpoints(require_credentials):
    token = await generate_access_token(CLIENT_ID, CLIENT_SECRET, REFRESH_TOKEN)
    assert token.access_token
    assert token.expires_in > 0
    print(f"New refresh token: {token.refresh_token}")

    client = SupabaseManagementClient(token.access_token)

    for project in await client.projects.list():
        print(f"Project: {project}")
        print(await client.postgres.get(project.id))
        print(await client.pooler.get(project.id))
        print(await client.projects.health(project.id))
        print(await client.storage.get_config(project.id))
