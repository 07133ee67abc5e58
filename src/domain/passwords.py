"""
Password hashing service - bcrypt one-way hashing and verification.
"""

from dataclasses import dataclass

import bcrypt

from .exceptions import HashingFailure

# bcrypt hashes at most this many bytes of the encoded plaintext
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class PasswordHasher:
    """
    Salted one-way password hashing.

    Every call to hash() generates a fresh salt, so hashing the same
    plaintext twice yields two different digests that both verify.
    """

    rounds: int = 10

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password with bcrypt.

        Raises:
            HashingFailure: Plaintext over MAX_PASSWORD_BYTES, or bcrypt
                cannot produce a digest
        """
        if len(plaintext.encode()) > MAX_PASSWORD_BYTES:
            raise HashingFailure(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(plaintext.encode(), salt).decode()
        except ValueError as e:
            raise HashingFailure(f"Password hashing failed: {e}") from e

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Check a plaintext password against a stored bcrypt digest.

        bcrypt.checkpw() compares in constant time. A wrong password
        returns False; only a malformed digest raises. A plaintext longer
        than MAX_PASSWORD_BYTES can never have been hashed, so it does
        not match.

        Raises:
            HashingFailure: If digest is not a valid bcrypt hash
        """
        if len(plaintext.encode()) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode(), digest.encode())
        except ValueError as e:
            raise HashingFailure(f"Password verification failed: {e}") from e
