"""
Clients for the hosted Supabase services: GoTrue auth and object storage.
"""

from subto.clients.supabase_auth import SupabaseAuthClient, AuthUser, AuthSession, AuthResult, get_auth_client
from subto.clients.storage import StorageBackend, SupabaseStorage, LocalStorage, get_storage

__all__ = [
    "SupabaseAuthClient",
    "AuthUser",
    "AuthSession",
    "AuthResult",
    "get_auth_client",
    "StorageBackend",
    "SupabaseStorage",
    "LocalStorage",
    "get_storage",
]
