"""
Random short code generation.

Codes are drawn uniformly from a fixed alphabet; uniqueness is NOT checked
here. The link service owns collision handling (insert-if-absent + retry).
"""

import secrets

from shortlink_app.config import Settings, URL_SAFE_ALPHABET


class CodeGenerator:
    """
    Generates fixed-length random codes.

    Collision odds: with the default 64-symbol alphabet and length 6 the
    keyspace is 64^6 (~6.9e10), so the first collision is expected around
    sqrt(64^6) ~ 262k codes. Beyond that volume raise ``code_length``;
    the bounded retry in the service only absorbs occasional collisions.
    """

    def __init__(self, length: int = 6, alphabet: str = URL_SAFE_ALPHABET):
        if length < 1:
            raise ValueError(f"Code length must be positive, got {length}")
        if len(alphabet) < 2:
            raise ValueError("Alphabet needs at least two symbols")
        if len(set(alphabet)) != len(alphabet):
            # Repeated symbols would skew the distribution
            raise ValueError("Alphabet contains repeated symbols")

        self.length = length
        self.alphabet = alphabet

    @classmethod
    def from_settings(cls, settings: Settings) -> "CodeGenerator":
        return cls(length=settings.code_length, alphabet=settings.code_alphabet)

    @property
    def keyspace_size(self) -> int:
        """Number of distinct codes this generator can produce"""
        return len(self.alphabet) ** self.length

    def generate(self) -> str:
        """Generate a random code of ``self.length`` symbols"""
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))
