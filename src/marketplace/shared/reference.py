"""Reference tokens shown to buyers to correlate a manual payment."""

import secrets
import string

REFERENCE_LENGTH = 8
_ALPHABET = string.digits + string.ascii_lowercase


def generate_reference_id(length: int = REFERENCE_LENGTH) -> str:
    """Return a short base-36 token.

    Human-readable correlation token, not a security token; collisions are
    not checked.
    """
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
