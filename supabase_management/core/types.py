"""
Core types for Supabase Management API payloads.

These dataclasses provide type safety and IDE support for API responses.
`from_dict` checks that the payload is a JSON object and that every field
has the JSON type the API documents, so a mismatched payload fails to
decode instead of producing a half-populated object.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

# =============================================================================
# Field readers
# =============================================================================


def _object(data: Any) -> dict[str, Any]:
    """Ensure a payload is a JSON object."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _check(key: str, value: Any, kind: type) -> Any:
    # bool is a subclass of int, but JSON true/false is not a number
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise TypeError(f"{key} must be {kind.__name__}, got {value!r}")
    return value


def _required(data: dict[str, Any], key: str, kind: type) -> Any:
    """Read a required field of the given JSON type."""
    return _check(key, data[key], kind)


def _optional(data: dict[str, Any], key: str, kind: type) -> Any:
    """Read an optional field; absent and null both give None."""
    value = data.get(key)
    if value is None:
        return None
    return _check(key, value, kind)


# =============================================================================
# Auth Types
# =============================================================================


@dataclass
class TokenPair:
    """Result of an OAuth refresh-token grant."""

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str | None = None

    def expires_at(self, issued_at: datetime) -> datetime:
        """When the access token lapses, given the time it was issued."""
        return issued_at + timedelta(seconds=self.expires_in)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenPair":
        """Create from API response dict."""
        data = _object(data)
        return cls(
            access_token=_required(data, "access_token", str),
            token_type=_required(data, "token_type", str),
            expires_in=_required(data, "expires_in", int),
            refresh_token=_optional(data, "refresh_token", str),
        )


# =============================================================================
# Project Types
# =============================================================================


class ProjectStatus(str, Enum):
    """Lifecycle state of a project."""

    INACTIVE = "INACTIVE"
    ACTIVE_HEALTHY = "ACTIVE_HEALTHY"
    ACTIVE_UNHEALTHY = "ACTIVE_UNHEALTHY"
    COMING_UP = "COMING_UP"
    UNKNOWN = "UNKNOWN"
    GOING_DOWN = "GOING_DOWN"
    INIT_FAILED = "INIT_FAILED"
    REMOVED = "REMOVED"
    RESTORING = "RESTORING"
    UPGRADING = "UPGRADING"
    PAUSING = "PAUSING"
    RESTORE_FAILED = "RESTORE_FAILED"
    RESTARTING = "RESTARTING"
    PAUSE_FAILED = "PAUSE_FAILED"
    RESIZING = "RESIZING"


@dataclass
class Database:
    """The Postgres instance backing a project."""

    host: str
    version: str
    postgres_engine: str
    release_channel: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Database":
        """Create from API response dict."""
        data = _object(data)
        return cls(
            host=_required(data, "host", str),
            version=_required(data, "version", str),
            postgres_engine=_required(data, "postgres_engine", str),
            release_channel=_required(data, "release_channel", str),
        )


@dataclass
class Project:
    """A Supabase project."""

    id: str
    organization_id: str
    name: str
    region: str
    created_at: str
    status: ProjectStatus
    database: Database | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create from API response dict."""
        data = _object(data)
        # Create responses omit the database block until provisioning is done
        database = data.get("database")
        return cls(
            id=_required(data, "id", str),
            organization_id=_required(data, "organization_id", str),
            name=_required(data, "name", str),
            region=_required(data, "region", str),
            created_at=_required(data, "created_at", str),
            status=ProjectStatus(_required(data, "status", str)),
            database=Database.from_dict(database) if database is not None else None,
        )


@dataclass
class ProjectRef:
    """Short project reference returned by update and delete."""

    id: int
    ref: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectRef":
        """Create from API response dict."""
        data = _object(data)
        return cls(
            id=_required(data, "id", int),
            ref=_required(data, "ref", str),
            name=_required(data, "name", str),
        )


@dataclass
class NewProject:
    """Body of a create-project request."""

    name: str
    organization_id: str
    db_pass: str
    region: str
    plan: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ServiceHealth:
    """Health of one service (auth, db, pooler, storage) of a project."""

    name: str
    healthy: bool
    status: ProjectStatus
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceHealth":
        """Create from API response dict."""
        data = _object(data)
        return cls(
            name=_required(data, "name", str),
            healthy=_required(data, "healthy", bool),
            status=ProjectStatus(_required(data, "status", str)),
            error=_optional(data, "error", str),
        )


# =============================================================================
# Postgres Config Types
# =============================================================================


class SessionReplicationRole(str, Enum):
    ORIGIN = "origin"
    REPLICA = "replica"
    LOCAL = "local"


_POSTGRES_FIELD_TYPES: dict[str, type] = {
    "effective_cache_size": str,
    "logical_decoding_work_mem": str,
    "maintenance_work_mem": str,
    "track_activity_query_size": str,
    "max_connections": int,
    "max_locks_per_transaction": int,
    "max_parallel_maintenance_workers": int,
    "max_parallel_workers": int,
    "max_parallel_workers_per_gather": int,
    "max_replication_slots": int,
    "max_slot_wal_keep_size": str,
    "max_standby_archive_delay": str,
    "max_standby_streaming_delay": str,
    "max_wal_size": str,
    "max_wal_senders": int,
    "max_worker_processes": int,
    "shared_buffers": str,
    "statement_timeout": str,
    "track_commit_timestamp": bool,
    "wal_keep_size": str,
    "wal_sender_timeout": str,
    "work_mem": str,
}


@dataclass
class PostgresConfig:
    """
    Postgres settings of a project.

    Every field is optional; unset fields are left untouched by an update.
    """

    effective_cache_size: str | None = None
    logical_decoding_work_mem: str | None = None
    maintenance_work_mem: str | None = None
    track_activity_query_size: str | None = None
    max_connections: int | None = None
    max_locks_per_transaction: int | None = None
    max_parallel_maintenance_workers: int | None = None
    max_parallel_workers: int | None = None
    max_parallel_workers_per_gather: int | None = None
    max_replication_slots: int | None = None
    max_slot_wal_keep_size: str | None = None
    max_standby_archive_delay: str | None = None
    max_standby_streaming_delay: str | None = None
    max_wal_size: str | None = None
    max_wal_senders: int | None = None
    max_worker_processes: int | None = None
    shared_buffers: str | None = None
    statement_timeout: str | None = None
    track_commit_timestamp: bool | None = None
    wal_keep_size: str | None = None
    wal_sender_timeout: str | None = None
    work_mem: str | None = None
    session_replication_role: SessionReplicationRole | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PostgresConfig":
        """Create from API response dict. Unknown keys are ignored."""
        data = _object(data)
        known = {key: _optional(data, key, kind) for key, kind in _POSTGRES_FIELD_TYPES.items()}
        role = _optional(data, "session_replication_role", str)
        return cls(
            **known,
            session_replication_role=SessionReplicationRole(role) if role is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request, skipping unset fields."""
        result = {k: v for k, v in asdict(self).items() if v is not None}
        if self.session_replication_role is not None:
            result["session_replication_role"] = self.session_replication_role.value
        return result


# =============================================================================
# Storage Types
# =============================================================================


@dataclass
class StorageFeatures:
    """Optional storage features of a project."""

    image_transformation: bool
    s3_protocol: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StorageFeatures":
        """Create from API response dict (camelCase keys)."""
        data = _object(data)
        return cls(
            image_transformation=_required(_object(data["imageTransformation"]), "enabled", bool),
            s3_protocol=_required(_object(data["s3Protocol"]), "enabled", bool),
        )


@dataclass
class StorageConfig:
    """Storage configuration of a project."""

    file_size_limit: int
    features: StorageFeatures

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StorageConfig":
        """Create from API response dict (camelCase keys)."""
        data = _object(data)
        return cls(
            file_size_limit=_required(data, "fileSizeLimit", int),
            features=StorageFeatures.from_dict(data["features"]),
        )


@dataclass
class Bucket:
    """A storage bucket."""

    id: str
    name: str
    owner: str
    created_at: str
    updated_at: str
    public: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bucket":
        """Create from API response dict."""
        data = _object(data)
        return cls(
            id=_required(data, "id", str),
            name=_required(data, "name", str),
            owner=_required(data, "owner", str),
            created_at=_required(data, "created_at", str),
            updated_at=_required(data, "updated_at", str),
            public=_required(data, "public", bool),
        )


# =============================================================================
# Pooler Types
# =============================================================================


class DatabaseType(str, Enum):
    PRIMARY = "PRIMARY"
    READ_REPLICA = "READ_REPLICA"


class PoolMode(str, Enum):
    TRANSACTION = "transaction"
    SESSION = "session"


@dataclass
class SupavisorConfig:
    """Connection pooler (Supavisor) settings for one database."""

    database_type: DatabaseType
    db_port: int
    identifier: str
    is_using_scram_auth: bool
    db_user: str
    db_host: str
    db_name: str
    pool_mode: PoolMode
    default_pool_size: int | None = None
    max_client_conn: int | None = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SupavisorConfig":
        """Create from API response dict."""
        data = _object(data)
        known = set(cls.__dataclass_fields__)
        return cls(
            database_type=DatabaseType(_required(data, "database_type", str)),
            db_port=_required(data, "db_port", int),
            identifier=_required(data, "identifier", str),
            is_using_scram_auth=_required(data, "is_using_scram_auth", bool),
            db_user=_required(data, "db_user", str),
            db_host=_required(data, "db_host", str),
            db_name=_required(data, "db_name", str),
            pool_mode=PoolMode(_required(data, "pool_mode", str)),
            default_pool_size=_optional(data, "default_pool_size", int),
            max_client_conn=_optional(data, "max_client_conn", int),
            extra={k: v for k, v in data.items() if k not in known},
        )
