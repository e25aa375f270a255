"""Join code generation.

Join codes are short public identifiers (``A-Z0-9``, 6 characters by
default) that other users type in to find a group. Uniqueness is checked
against the store before use; the ``groups.join_code`` unique index is the
backstop when two creations race for the same code.
"""

import random
import secrets
import string
from typing import Awaitable, Callable, Optional

import structlog

from core.exceptions import JoinCodeExhaustedError

logger = structlog.get_logger()

JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits
JOIN_CODE_LENGTH = 6
DEFAULT_MAX_ATTEMPTS = 10

_system_random = secrets.SystemRandom()


def generate_code(
    rng: Optional[random.Random] = None,
    length: int = JOIN_CODE_LENGTH,
    alphabet: str = JOIN_CODE_ALPHABET,
) -> str:
    """Draw ``length`` characters uniformly and independently from ``alphabet``.

    Pass a seeded ``random.Random`` to get a reproducible sequence.
    """
    source = rng or _system_random
    return "".join(source.choice(alphabet) for _ in range(length))


async def reserve_unique_code(
    is_taken: Callable[[str], Awaitable[bool]],
    rng: Optional[random.Random] = None,
    length: int = JOIN_CODE_LENGTH,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Return the first generated code that ``is_taken`` reports as free.

    Performs one lookup per candidate. Errors raised by ``is_taken`` are not
    retried.

    Raises:
        JoinCodeExhaustedError: If ``max_attempts`` candidates all collided.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_code(rng, length=length)
        if not await is_taken(candidate):
            return candidate
        logger.info("join_code_collision", attempt=attempt)

    raise JoinCodeExhaustedError(max_attempts)
