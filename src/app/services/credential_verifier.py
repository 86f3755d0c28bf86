"""
Credential Verifier

One-way password hash comparison backed by bcrypt.
"""

import bcrypt

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class MalformedPasswordHashError(ValueError):
    """Stored password hash is not a bcrypt hash; a data/configuration fault."""


def _encode_password(plaintext: str) -> bytes:
    return plaintext.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


class CredentialVerifier:
    """
    Stateless bcrypt wrapper.

    Comparison goes through bcrypt.checkpw, which compares digests in
    constant time. A wrong password is False; only a malformed stored hash
    raises. Passwords are cut to 72 bytes before hashing and comparison.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = None

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(_encode_password(plaintext), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, plaintext: str, password_hash: str) -> bool:
        password = _encode_password(plaintext)
        try:
            return bcrypt.checkpw(password, password_hash.encode())
        except (ValueError, TypeError, AttributeError) as exc:
            raise MalformedPasswordHashError("Stored password hash is malformed") from exc

    def verify_dummy(self, plaintext: str) -> bool:
        """Spend one bcrypt comparison for a principal that does not exist."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))
        bcrypt.checkpw(_encode_password(plaintext), self._dummy_hash)
        return False
