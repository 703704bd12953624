"""
Role & capability model.

Call sites ask for a Capability, never for a role string. The matrix below
is the single place that decides which role may do what.
"""
import enum
from typing import FrozenSet, Dict, Optional

from syllabus_hub.core.exceptions import AuthorizationError
from syllabus_hub.models.user import UserRole


class Capability(str, enum.Enum):
    SUBMIT_RESOURCE = "submit_resource"
    RATE_RESOURCE = "rate_resource"
    MODERATE_RESOURCES = "moderate_resources"  # approve, edit or delete any resource
    AUTHOR_ROADMAPS = "author_roadmaps"
    MANAGE_ROADMAPS = "manage_roadmaps"  # approve, edit or delete any roadmap
    MANAGE_RATINGS = "manage_ratings"
    ADMINISTER = "administer"  # back-office: users, catalog, dashboard


_STUDENT: FrozenSet[Capability] = frozenset({
    Capability.SUBMIT_RESOURCE,
    Capability.RATE_RESOURCE,
})

_MODERATOR: FrozenSet[Capability] = _STUDENT | {
    Capability.MODERATE_RESOURCES,
    Capability.AUTHOR_ROADMAPS,
}

ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.STUDENT: _STUDENT,
    UserRole.MODERATOR: _MODERATOR,
    UserRole.ADMIN: frozenset(Capability),
}


def has_capability(role: UserRole, capability: Capability) -> bool:
    """True when the role's capability set contains the capability"""
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def can_modify(user, owner_id: Optional[str], override: Capability) -> bool:
    """Owner of the row, or anyone holding the override capability"""
    if owner_id is not None and str(user.id) == str(owner_id):
        return True
    return has_capability(user.role, override)


def ensure_can_modify(user, owner_id: Optional[str], override: Capability,
                      message: str = "Not authorized to modify this item") -> None:
    if not can_modify(user, owner_id, override):
        raise AuthorizationError(message)
