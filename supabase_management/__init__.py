"""
Supabase Management API client - two-layer architecture.

Layers:
- core: Typed payloads, the authenticated async HTTP client and token exchange
- sdk: High-level SupabaseManagementClient grouped by resource
"""

import logging

from supabase_management.core.auth import generate_access_token
from supabase_management.core.client import (
    DecodeError,
    ManagementAPIError,
    SendError,
    StatusError,
    ValidationError,
)
from supabase_management.core.types import TokenPair
from supabase_management.sdk import SupabaseManagementClient

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "DecodeError",
    "ManagementAPIError",
    "SendError",
    "StatusError",
    "SupabaseManagementClient",
    "TokenPair",
    "ValidationError",
    "generate_access_token",
]
