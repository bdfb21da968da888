"""
Supabase implementations of UserRepository and ClientRepository.

Client rows embed the linked account under ``user`` and the trainer's account
under ``trainer`` so responses can show names without a second round-trip.
"""

import logging
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import NotFoundError
from infrastructure.db.queries import execute, first, rows

logger = logging.getLogger(__name__)

CLIENT_COLUMNS = (
    "*, "
    "user:users!clients_user_id_fkey(id, name, email, role), "
    "trainer:users!clients_trainer_id_fkey(id, name, email, role)"
)


class SupabaseUserRepository:
    """Read-only access to the ``users`` table."""

    def __init__(self, client: Client):
        self._client = client

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("users")
            .select("id, name, email, role")
            .eq("id", user_id)
            .limit(1),
            "load user",
        )
        return first(response)


class SupabaseClientRepository:
    """
    Supabase implementation of ClientRepository protocol.

    Queries against:
    - clients: profile, trainer link and subscription
    - users: embedded account summaries
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_by_id(self, client_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("clients").select(CLIENT_COLUMNS).eq("id", client_id).limit(1),
            "load client",
        )
        return first(response)

    def get_by_user_id(self, user_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("clients").select(CLIENT_COLUMNS).eq("user_id", user_id).limit(1),
            "load client by user",
        )
        return first(response)

    def get_many(self, client_ids: List[str]) -> List[Dict]:
        if not client_ids:
            return []
        response = execute(
            self._client.table("clients").select(CLIENT_COLUMNS).in_("id", client_ids),
            "load clients",
        )
        return rows(response)

    def list_clients(
        self,
        trainer_id: Optional[str] = None,
        *,
        unassigned_only: bool = False,
        subscription_status: Optional[str] = None,
    ) -> List[Dict]:
        query = self._client.table("clients").select(CLIENT_COLUMNS)
        if trainer_id is not None:
            query = query.eq("trainer_id", trainer_id)
        if unassigned_only:
            query = query.is_("trainer_id", "null")
        if subscription_status is not None:
            query = query.eq("subscription_status", subscription_status)

        response = execute(query.order("created_at", desc=True), "list clients")
        return rows(response)

    def update(self, client_id: str, data: Dict) -> Dict:
        response = execute(
            self._client.table("clients").update(data).eq("id", client_id),
            "update client",
        )
        if not rows(response):
            raise NotFoundError("Client not found")
        logger.info(f"Client {client_id} updated: {sorted(data)}")
        # Re-read so the embedded user/trainer summaries reflect the change
        return self.get_by_id(client_id)
