"""Join code generation for student groups."""

import secrets

# Uppercase letters without I/O and digits without 0/1, so codes survive
# being read aloud or copied by hand.
JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
JOIN_CODE_LENGTH = 6

# Attempts before giving up on finding an unused code
JOIN_CODE_MAX_ATTEMPTS = 10


def generate_join_code(length: int = JOIN_CODE_LENGTH) -> str:
    """Return a random code drawn uniformly from the join code alphabet.

    Uniqueness is not checked here.
    """
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def normalize_join_code(join_code: str) -> str:
    """Canonical form used for lookups (trimmed, upper case)."""
    return join_code.strip().upper()
