"""
Password gate for protected links.

bcrypt gives a per-hash salt, a tunable cost factor and a comparison that
does not short-circuit on the first differing byte.
"""

import bcrypt


# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class AccessGate:
    """Hashes and verifies link passwords. Never stores or logs plaintext."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def _encode(self, password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash for ``password``"""
        hashed = bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a hash produced by :meth:`hash`"""
        return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
