"""bcrypt-backed credential hashing.

Digests are self-describing (``$2b$<cost>$<salt><hash>``), so verification
needs nothing but the stored string.
"""

import logging
import re
from functools import lru_cache

import bcrypt

from tollgate_auth.exceptions import HashingFailure

logger = logging.getLogger(__name__)

# bcrypt ignores everything past the first 72 bytes of input
BCRYPT_MAX_BYTES = 72

_DIGEST_COST = re.compile(r"^\$2[abxy]?\$(\d{2})\$")


@lru_cache(maxsize=8)
def _placeholder_digest(rounds: int) -> str:
    """A digest of a throwaway value at the given cost, made once per cost."""
    digest = bcrypt.hashpw(b"tollgate-placeholder", bcrypt.gensalt(rounds=rounds))
    return digest.decode("ascii")


class PasswordHashingService:
    """Salted one-way hashing of passwords.

    Every ``hash`` call draws a new salt, so the same plaintext never
    produces the same digest twice. Inputs longer than 72 UTF-8 bytes are
    cut to their first 72 bytes, identically in ``hash`` and ``verify``.

    Examples
    --------
    >>> hasher = PasswordHashingService(rounds=4)
    >>> digest = hasher.hash("correct horse")
    >>> hasher.verify("correct horse", digest)
    True
    >>> hasher.verify("battery staple", digest)
    False
    """

    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Parameters
        ----------
        rounds
            bcrypt cost factor (log2 of the key-expansion rounds). Each
            step up doubles the time per hash.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return a fresh salted digest of ``password``.

        Raises
        ------
        HashingFailure
            On any failure inside salt generation or bcrypt itself
        """
        try:
            digest = bcrypt.hashpw(
                self._encode(password),
                bcrypt.gensalt(rounds=self._rounds),
            )
        except Exception as e:
            # Type only: bcrypt messages may quote their input
            logger.error("Password hashing failed: %s", type(e).__name__)
            raise HashingFailure from e
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check of ``password`` against a stored digest.

        A stored value that is not a bcrypt digest counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("ascii"))
        except (ValueError, TypeError, AttributeError):
            logger.warning("Stored password hash has an invalid format")
            return False

    def verify_placeholder(self, password: str) -> bool:
        """Spend the work of one ``verify`` without a stored digest.

        Used when no account matches, so that an unknown email costs as much
        as a wrong password. Always False.
        """
        self.verify(password, _placeholder_digest(self._rounds))
        return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True when ``password_hash`` was made with a different cost factor.

        Unparseable digests also need rehashing.
        """
        match = _DIGEST_COST.match(password_hash)
        return match is None or int(match.group(1)) != self._rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]
