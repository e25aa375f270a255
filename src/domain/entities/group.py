"""Group domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

# Role granted to the profile that creates a group. Roles are stored as
# free-form strings; the wider system may define others (e.g. "student").
CREATOR_ROLE = "teacher"


@dataclass
class Group:
    """Domain entity for a group that others join by code."""

    name: str
    owner_id: UUID
    join_code: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class GroupMember:
    """Domain entity for a group membership."""

    group_id: UUID
    member_id: UUID
    role: str = CREATOR_ROLE
    joined_at: datetime = field(default_factory=datetime.utcnow)
