"""
Core layer - Raw types and HTTP client.

This layer provides:
- Typed dataclasses for Management API payloads
- Low-level async HTTP client with auth and error handling
- The OAuth refresh-token exchange
"""

from supabase_management.core.auth import TOKEN_URL, generate_access_token
from supabase_management.core.client import (
    APIClient,
    APIRequest,
    DecodeError,
    ManagementAPIError,
    SendError,
    StatusError,
    ValidationError,
    get_shared_transport,
    list_of,
    send_request,
)
from supabase_management.core.types import (
    Bucket,
    Database,
    DatabaseType,
    NewProject,
    PoolMode,
    PostgresConfig,
    Project,
    ProjectRef,
    ProjectStatus,
    ServiceHealth,
    SessionReplicationRole,
    StorageConfig,
    StorageFeatures,
    SupavisorConfig,
    TokenPair,
)

__all__ = [
    "APIClient",
    "APIRequest",
    "Bucket",
    "Database",
    "DatabaseType",
    "DecodeError",
    "ManagementAPIError",
    "NewProject",
    "PoolMode",
    "PostgresConfig",
    "Project",
    "ProjectRef",
    "ProjectStatus",
    "SendError",
    "ServiceHealth",
    "SessionReplicationRole",
    "StatusError",
    "StorageConfig",
    "StorageFeatures",
    "SupavisorConfig",
    "TOKEN_URL",
    "TokenPair",
    "ValidationError",
    "generate_access_token",
    "get_shared_transport",
    "list_of",
    "send_request",
]
