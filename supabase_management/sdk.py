"""
Supabase Management SDK - High-level client with nice ergonomics.

This layer provides a typed interface over the Management API endpoints.
Every method builds a path and optional payload, then delegates to exactly
one APIClient primitive; errors propagate unchanged.
"""

import builtins
from typing import Any, TypeVar, overload

import httpx

from supabase_management.core.client import APIClient, Parser, list_of
from supabase_management.core.types import (
    Bucket,
    NewProject,
    PostgresConfig,
    Project,
    ProjectRef,
    ServiceHealth,
    StorageConfig,
    SupavisorConfig,
)

T = TypeVar("T")

HEALTH_SERVICES = ("auth", "db", "pooler", "storage")


class SupabaseManagementClient:
    """
    High-level Supabase Management API client.

    Example:
        token = await generate_access_token(client_id, client_secret, refresh_token)
        client = SupabaseManagementClient(token.access_token)

        for project in await client.projects.list():
            config = await client.postgres.get(project.id)
            rows = await client.database.query(project.id, "SELECT now()")

    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            access_token: Management API access token (or SUPABASE_ACCESS_TOKEN env var)
            base_url: API base URL (or SUPABASE_API_URL env var)
            http_client: Transport override; the shared transport is used by default

        """
        self._client = APIClient(
            access_token=access_token,
            base_url=base_url,
            http_client=http_client,
        )

        # Sub-clients for different resources
        self.projects = ProjectOperations(self._client)
        self.postgres = PostgresConfigOperations(self._client)
        self.storage = StorageOperations(self._client)
        self.pooler = PoolerOperations(self._client)
        self.database = DatabaseOperations(self._client)

    def __repr__(self) -> str:
        return f"SupabaseManagementClient(base_url={self._client.base_url!r})"

    @property
    def api(self) -> APIClient:
        """The underlying APIClient, for endpoints not wrapped here."""
        return self._client


# =============================================================================
# Project Operations
# =============================================================================


class ProjectOperations:
    """Operations for managing projects."""

    def __init__(self, client: APIClient):
        self._client = client

    async def list(self) -> builtins.list[Project]:
        """List all projects this user has access to."""
        return await self._client.get("projects", list_of(Project.from_dict))

    async def get(self, project_id: str) -> Project:
        """
        Get a project by ref.

        Args:
            project_id: The project ref

        Returns:
            Project details

        """
        return await self._client.get(f"projects/{project_id}", Project.from_dict)

    async def create(self, project: NewProject) -> Project:
        """
        Create a project.

        Args:
            project: Name, organization, database password and region

        Returns:
            The new Project, usually still COMING_UP and without database details

        """
        return await self._client.post("projects", project.to_dict(), Project.from_dict)

    async def update(self, project_id: str, name: str) -> ProjectRef:
        """Rename a project."""
        return await self._client.patch(f"projects/{project_id}", {"name": name}, ProjectRef.from_dict)

    async def delete(self, project_id: str) -> ProjectRef:
        """Delete a project."""
        return await self._client.delete(f"projects/{project_id}", ProjectRef.from_dict)

    async def pause(self, project_id: str) -> None:
        """
        Pause an active project.

        Raises:
            StatusError: 400 if the project is already paused

        """
        await self._client.post(f"projects/{project_id}/pause")

    async def restore(self, project_id: str) -> None:
        """Restore a paused or inactive project."""
        await self._client.post(f"projects/{project_id}/restore")

    async def health(
        self,
        project_id: str,
        services: tuple[str, ...] = HEALTH_SERVICES,
    ) -> builtins.list[ServiceHealth]:
        """
        Get the health of a project's services.

        Args:
            project_id: The project ref
            services: Services to check

        Returns:
            One ServiceHealth per requested service

        """
        return await self._client.get(
            f"projects/{project_id}/health?services={','.join(services)}",
            list_of(ServiceHealth.from_dict),
        )


# =============================================================================
# Postgres Config Operations
# =============================================================================


class PostgresConfigOperations:
    """Operations for a project's Postgres settings."""

    def __init__(self, client: APIClient):
        self._client = client

    async def get(self, project_id: str) -> PostgresConfig:
        """Get the Postgres config of a project."""
        return await self._client.get(
            f"projects/{project_id}/config/database/postgres",
            PostgresConfig.from_dict,
        )

    async def update(self, project_id: str, config: PostgresConfig) -> PostgresConfig:
        """
        Update the Postgres config of a project.

        Only fields set on `config` are sent.

        Returns:
            The config as applied by the server

        """
        return await self._client.put(
            f"projects/{project_id}/config/database/postgres",
            config.to_dict(),
            PostgresConfig.from_dict,
        )


# =============================================================================
# Storage Operations
# =============================================================================


class StorageOperations:
    def __init__(self, client: APIClient):
        self._client = client

    async def get_config(self, project_id: str) -> StorageConfig:
        """Get the storage config of a project."""
        return await self._client.get(f"projects/{project_id}/config/storage", StorageConfig.from_dict)

    async def list_buckets(self, project_id: str) -> builtins.list[Bucket]:
        """List the storage buckets of a project."""
        return await self._client.get(f"projects/{project_id}/storage/buckets", list_of(Bucket.from_dict))


# =============================================================================
# Pooler Operations
# =============================================================================


class PoolerOperations:
    def __init__(self, client: APIClient):
        self._client = client

    async def get(self, project_id: str) -> builtins.list[SupavisorConfig]:
        """Get the Supavisor pooler settings, one entry per database."""
        return await self._client.get(
            f"projects/{project_id}/config/database/pooler",
            list_of(SupavisorConfig.from_dict),
        )


# =============================================================================
# Database Operations
# =============================================================================


class DatabaseOperations:
    """Operations that run against a project's database."""

    def __init__(self, client: APIClient):
        self._client = client

    @overload
    async def query(self, project_id: str, query: str) -> Any: ...

    @overload
    async def query(self, project_id: str, query: str, parser: Parser[T]) -> T: ...

    async def query(self, project_id: str, query: str, parser: Parser[T] | None = None) -> T | Any:
        """
        Execute a SQL query (beta endpoint).

        Args:
            project_id: The project ref
            query: SQL text
            parser: Callable for the result rows, e.g. `list_of(Row.from_dict)`;
                without one the raw JSON rows are returned

        Returns:
            The parsed result

        """
        return await self._client.post(
            f"projects/{project_id}/database/query",
            {"query": query},
            parser,
        )
