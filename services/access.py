"""
Role and ownership checks shared by the services.

Two kinds of refusal live here:
- Acting on something you can see but may not change -> AuthorizationError
- Asking about a client outside your scope -> NotFoundError, so the answer
  never reveals whether the client exists
"""

import logging
from typing import Dict, List, Optional

from application.exceptions import AuthorizationError, NotFoundError
from application.ports import ClientRepository, UserRepository
from models.user import CurrentUser, Role

logger = logging.getLogger(__name__)


def require_staff(caller: CurrentUser, action: str) -> None:
    """Only trainers and admins may perform ``action``."""
    if not caller.is_staff:
        logger.warning(f"User {caller.user_id} ({caller.role.value}) denied: {action}")
        raise AuthorizationError(f"Forbidden - only trainers and admins can {action}")


def require_admin(caller: CurrentUser, action: str) -> None:
    """Only admins may perform ``action``."""
    if not caller.is_admin:
        logger.warning(f"User {caller.user_id} ({caller.role.value}) denied: {action}")
        raise AuthorizationError(f"Forbidden - only admins can {action}")


def manages_client(caller: CurrentUser, client: Dict) -> bool:
    """True for admins and for the client's assigned trainer."""
    if caller.is_admin:
        return True
    return caller.is_trainer and client.get("trainer_id") == caller.user_id


def can_view_client(caller: CurrentUser, client: Dict) -> bool:
    """Admins see every client, trainers their own, clients themselves."""
    if caller.is_client:
        return client.get("user_id") == caller.user_id
    return manages_client(caller, client)


def find_client(client_repo: ClientRepository, client_id: str) -> Optional[Dict]:
    """
    Look a client up by profile ID, falling back to the linked user ID.

    Callers may address a client either way; the profile ID is what gets
    stored on assignments.
    """
    client = client_repo.get_by_id(client_id)
    if client is None:
        client = client_repo.get_by_user_id(client_id)
    return client


def load_client_account(
    client_repo: ClientRepository,
    user_repo: UserRepository,
    client_id: str,
) -> Dict:
    """
    Resolve a client profile whose linked account has the CLIENT role.

    Raises:
        NotFoundError: If the profile is missing or the account is not a client
    """
    client = find_client(client_repo, client_id)
    if client is None:
        raise NotFoundError("Client not found")
    user = user_repo.get_by_id(client["user_id"])
    if user is None or user.get("role") != Role.CLIENT.value:
        raise NotFoundError("User not found or is not a client")
    return client


def load_visible_client(
    caller: CurrentUser,
    client_repo: ClientRepository,
    client_id: str,
) -> Dict:
    """
    Resolve a client the caller is allowed to read.

    Raises:
        NotFoundError: If the client is missing or outside the caller's scope
    """
    client = find_client(client_repo, client_id)
    if client is None or not can_view_client(caller, client):
        raise NotFoundError("Client not found or not assigned to you")
    return client


def client_ids_in_scope(
    caller: CurrentUser,
    client_repo: ClientRepository,
    client_id: Optional[str] = None,
) -> Optional[List[str]]:
    """
    Client IDs whose assignments the caller may list.

    Returns None for "every client" (admin without a filter).

    Raises:
        NotFoundError: If ``client_id`` is given but outside the caller's scope
    """
    if client_id is not None:
        return [load_visible_client(caller, client_repo, client_id)["id"]]

    if caller.is_admin:
        return None
    if caller.is_trainer:
        return [c["id"] for c in client_repo.list_clients(trainer_id=caller.user_id)]

    own = client_repo.get_by_user_id(caller.user_id)
    return [own["id"]] if own else []
