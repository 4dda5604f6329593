"""Email normalization.

The validator and the identity store both key identities by the value
returned here. If the two ever disagree, uniqueness checks and sign-in
lookups stop matching each other.
"""


def normalize_email(value: str) -> str:
    """Return the canonical (trimmed, lower-cased) form of an email."""
    return value.strip().lower()
