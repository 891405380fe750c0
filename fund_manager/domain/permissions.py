"""Group access rules"""

from fund_manager.domain.exceptions import AccessDeniedError
from fund_manager.domain.models import Group


def is_owner(group: Group, user_id: str) -> bool:
    return group.owner_id == user_id


def is_participant(group: Group, user_id: str) -> bool:
    """Owner or a member linked to the user account"""
    return is_owner(group, user_id) or any(m.user_id == user_id for m in group.members)


def ensure_participant(group: Group, user_id: str) -> None:
    if not is_participant(group, user_id):
        raise AccessDeniedError("Access denied")


def ensure_owner(group: Group, user_id: str, action: str) -> None:
    """Structural changes (members, delete, resets) are owner-only"""
    if not is_owner(group, user_id):
        raise AccessDeniedError(f"Only owner can {action}")
