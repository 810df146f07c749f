"""Tests for payload dataclasses."""

import pytest

from supabase_management.core.types import (
    NewProject,
    PostgresConfig,
    Project,
    ProjectRef,
    ProjectStatus,
    SessionReplicationRole,
)

FULL_POSTGRES_CONFIG = {
    "effective_cache_size": "4GB",
    "logical_decoding_work_mem": "64MB",
    "maintenance_work_mem": "256MB",
    "track_activity_query_size": "2048",
    "max_connections": 100,
    "max_locks_per_transaction": 128,
    "max_parallel_maintenance_workers": 2,
    "max_parallel_workers": 4,
    "max_parallel_workers_per_gather": 2,
    "max_replication_slots": 10,
    "max_slot_wal_keep_size": "1GB",
    "max_standby_archive_delay": "30s",
    "max_standby_streaming_delay": "30s",
    "max_wal_size": "2GB",
    "max_wal_senders": 5,
    "max_worker_processes": 8,
    "shared_buffers": "2GB",
    "statement_timeout": "60s",
    "track_commit_timestamp": True,
    "wal_keep_size": "512MB",
    "wal_sender_timeout": "60s",
    "work_mem": "4MB",
    "session_replication_role": "replica",
}


MINIMAL_PROJECT = {
    "id": "p",
    "organization_id": "o",
    "name": "n",
    "region": "r",
    "created_at": "2024-01-01T00:00:00Z",
    "status": "ACTIVE_HEALTHY",
}


class TestPostgresConfig:
    def test_full_document(self):
        config = PostgresConfig.from_dict(FULL_POSTGRES_CONFIG)
        assert config.session_replication_role is SessionReplicationRole.REPLICA
        assert config.to_dict() == FULL_POSTGRES_CONFIG

    def test_unknown_keys_ignored(self):
        config = PostgresConfig.from_dict({"work_mem": "8MB", "brand_new_setting": "on"})
        assert config.to_dict() == {"work_mem": "8MB"}

    def test_default_is_empty(self):
        assert PostgresConfig().to_dict() == {}

    def test_bad_role_rejected(self):
        with pytest.raises(ValueError):
            PostgresConfig.from_dict({"session_replication_role": "primary"})

    def test_bool_is_not_an_int(self):
        with pytest.raises(TypeError, match="max_connections must be int"):
            PostgresConfig.from_dict({"max_connections": False})

    def test_null_field_reads_as_unset(self):
        assert PostgresConfig.from_dict({"work_mem": None}).work_mem is None


class TestProject:
    def test_every_status_round_trips(self):
        for status in ProjectStatus:
            project = Project.from_dict({**MINIMAL_PROJECT, "status": status.value})
            assert project.status is status

    def test_missing_field_raises_key_error(self):
        with pytest.raises(KeyError):
            Project.from_dict({"id": "p"})

    @pytest.mark.parametrize("data", [[], "p1", 7, None])
    def test_non_object_raises_type_error(self, data):
        with pytest.raises(TypeError, match="expected a JSON object"):
            Project.from_dict(data)

    def test_non_object_database_raises_type_error(self):
        with pytest.raises(TypeError, match="expected a JSON object, got list"):
            Project.from_dict({**MINIMAL_PROJECT, "database": []})

    def test_project_ref_id_rejects_bool(self):
        with pytest.raises(TypeError, match="id must be int"):
            ProjectRef.from_dict({"id": True, "ref": "p1", "name": "demo"})

    def test_new_project_omits_unset_plan(self):
        body = NewProject(name="n", organization_id="o", db_pass="pw", region="r").to_dict()
        assert "plan" not in body
        assert NewProject("n", "o", "pw", "r", plan="pro").to_dict()["plan"] == "pro"
