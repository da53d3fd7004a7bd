"""
Caller authentication and role checks against the hosted data store.

The store is an external collaborator: it exchanges a bearer token for the
caller's identity and answers role lookups from the `user_roles` table. Schema
and row-level security live in the store; nothing here writes to it.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from supabase import AuthError, Client, create_client

from config import IMPORT_ROLES, ServiceSettings
from domain.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

ROLE_PRIORITY = ("admin", "staff", "viewer")


class DataStore(Protocol):
    def get_user_id(self, token: str) -> Optional[str]:
        ...

    def fetch_roles(self, user_id: str, roles: Sequence[str]) -> List[str]:
        ...


class SupabaseStore:
    """DataStore backed by a Supabase project, using the service-role key."""

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_settings(cls, settings: ServiceSettings) -> "SupabaseStore":
        return cls(create_client(settings.store_url, settings.store_service_key))

    def get_user_id(self, token: str) -> Optional[str]:
        try:
            response = self._client.auth.get_user(token)
        except AuthError as e:
            logger.info("Token rejected by auth service: %s", e)
            return None
        user = getattr(response, "user", None) if response else None
        return str(user.id) if user else None

    def fetch_roles(self, user_id: str, roles: Sequence[str]) -> List[str]:
        response = (
            self._client.table("user_roles")
            .select("role")
            .eq("user_id", user_id)
            .in_("role", list(roles))
            .execute()
        )
        return [row["role"] for row in (response.data or []) if row.get("role")]


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        raise AuthenticationError("Missing authorization header")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Missing authorization header")
    return token


def resolve_role(roles: Iterable[str]) -> Optional[str]:
    """Highest-priority role held: admin > staff > viewer."""
    held = set(roles)
    for role in ROLE_PRIORITY:
        if role in held:
            return role
    return None


def authenticate(store: DataStore, token: str) -> str:
    user_id = store.get_user_id(token)
    if not user_id:
        raise AuthenticationError("Invalid or expired token")
    return user_id


def authorize(store: DataStore, user_id: str, allowed: Sequence[str] = IMPORT_ROLES) -> str:
    """Return the caller's effective role, or raise if it may not import."""
    role = resolve_role(store.fetch_roles(user_id, allowed))
    if role not in allowed:
        logger.info("User %s denied: no role in %s", user_id, ", ".join(allowed))
        raise AuthorizationError("Insufficient permissions. Only admin and staff can import products.")
    return role
