"""Access Gate — the single shared-secret predicate guarding every mutation.

Invariants:
    - Exact match only: prefix, suffix and case-folded matches are rejected
    - An empty or missing token is never authorized, even against an empty secret
    - Pure: no IO, no identity, no expiry

Design Decisions:
    - One predicate injected into the mutation path (api/dependencies.py), no permission classes
    - hmac.compare_digest over UTF-8 bytes: str.compare_digest rejects non-ASCII input
"""

import hmac


def is_authorized(supplied_token: str | None, secret: str) -> bool:
    """True when supplied_token is exactly the configured secret."""
    if not supplied_token or not secret:
        return False
    return hmac.compare_digest(
        supplied_token.encode("utf-8"), secret.encode("utf-8"),
    )


def pick_token(*candidates: object) -> str | None:
    """First non-empty string among header, body field and query parameter."""
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None
