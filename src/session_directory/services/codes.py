"""Capability code generation and comparison.

Every access decision in the directory reduces to "does the caller know this
random string". Codes are opaque bearer tokens stored next to the session
they unlock, so the only primitives needed are a generator and a comparator.
"""

import hmac
import secrets

DEFAULT_CODE_LENGTH = 10


def generate_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Return a random lowercase hex code of exactly ``length`` characters."""
    if length < 1:
        raise ValueError("Code length must be positive")
    return secrets.token_hex((length + 1) // 2)[:length]


def authorize(presented: str | None, expected: str | None) -> bool:
    """Return true when the presented code matches the expected one.

    Surrounding whitespace is trimmed from the presented value only. A
    missing or blank presented code never matches, and neither does a
    missing expected code.
    """
    if presented is None or expected is None:
        return False
    candidate = presented.strip()
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())
