"""Identity resolved from a bearer token."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class TokenUser:
    """The authenticated identity carried by a bearer token.

    Only ``id`` is relied on; it is the key into ``profiles.user_id``.
    """

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None
