"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Internal actor record for an authenticated user.

    ``id`` is the foreign key used for ownership and membership; ``user_id``
    is the identity issued by Supabase auth.
    """

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    display_name: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
