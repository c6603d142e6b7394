"""Administrative actions that are exposed but deliberately not implemented.

Each call reports unavailability through ``UnsupportedOperationError`` and
performs no mutation.
"""

import logging

from backend.app.core.errors import UnsupportedOperationError

logger = logging.getLogger(__name__)

EDIT_CREDENTIALS = "Editing user credentials"
BLOCK_USER = "Blocking users"
UNBLOCK_USER = "Unblocking users"
DELETE_USER = "Deleting users"
IMPERSONATE_USER = "Direct login as another user"


def reject_admin_action(action: str, *, admin_id: int, target_user_id: int) -> None:
    logger.warning("Admin %s requested unavailable action %r on user %s", admin_id, action, target_user_id)
    raise UnsupportedOperationError(action)
