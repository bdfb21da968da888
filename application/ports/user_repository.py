"""
User and client repository ports (interfaces).

Users are read-only here: accounts are created by the authentication
collaborator. Client profiles are read and updated (trainer link and
subscription fields only).
"""

from typing import Dict, List, Optional, Protocol


class UserRepository(Protocol):
    """Read access to user accounts."""

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        """
        Get a user account by ID.

        Args:
            user_id: The user's ID

        Returns:
            User dictionary (id, name, email, role) if found, None otherwise
        """
        ...


class ClientRepository(Protocol):
    """
    Repository interface for client profiles.

    All methods work with dictionaries; ``trainer_id`` is the canonical
    trainer relationship.
    """

    def get_by_id(self, client_id: str) -> Optional[Dict]:
        """
        Get a client profile by its ID.

        Args:
            client_id: The client profile ID

        Returns:
            Client dictionary if found, None otherwise
        """
        ...

    def get_by_user_id(self, user_id: str) -> Optional[Dict]:
        """
        Get the client profile linked to a user account.

        Args:
            user_id: The CLIENT-role user's ID

        Returns:
            Client dictionary if found, None otherwise
        """
        ...

    def get_many(self, client_ids: List[str]) -> List[Dict]:
        """Get client profiles whose IDs are in ``client_ids``."""
        ...

    def list_clients(
        self,
        trainer_id: Optional[str] = None,
        *,
        unassigned_only: bool = False,
        subscription_status: Optional[str] = None,
    ) -> List[Dict]:
        """
        List client profiles, newest first.

        Args:
            trainer_id: Only clients of this trainer when given
            unassigned_only: Only clients with no trainer
            subscription_status: Only clients in this subscription state

        Returns:
            List of client dictionaries
        """
        ...

    def update(self, client_id: str, data: Dict) -> Dict:
        """
        Update a client profile.

        Args:
            client_id: The client profile ID
            data: Fields to change

        Returns:
            Updated client dictionary
        """
        ...
