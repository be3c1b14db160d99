"""
Password hashing with salted PBKDF2-HMAC-SHA256.

Encoded form: 32 hex characters of salt followed by the hex of the 256-bit
derived key, e.g. "<salt:32 hex><key:64 hex>".
"""

import hmac
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

SALT_BYTES = 16
KEY_BYTES = 32
SALT_HEX_LENGTH = SALT_BYTES * 2
DEFAULT_ITERATIONS = 10000


class PasswordHasher:
    """Derives and checks salted password hashes"""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        if iterations < DEFAULT_ITERATIONS:
            raise ValueError(f"iterations must be at least {DEFAULT_ITERATIONS}")
        self.iterations = iterations

    def _derive(self, password: str, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_BYTES,
            salt=salt,
            iterations=self.iterations,
        )
        return kdf.derive(password.encode("utf-8"))

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt"""
        salt = os.urandom(SALT_BYTES)
        return salt.hex() + self._derive(password, salt).hex()

    def verify(self, password: str, encoded: str) -> bool:
        """Verify a password against its encoded hash. Malformed hashes never match."""
        try:
            salt = bytes.fromhex(encoded[:SALT_HEX_LENGTH])
            expected = encoded[SALT_HEX_LENGTH:]
            if len(salt) != SALT_BYTES or not expected:
                return False
            candidate = self._derive(password, salt).hex()
            return hmac.compare_digest(candidate, expected)
        except (TypeError, ValueError, AttributeError):
            return False


_default_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password using the default PBKDF2 parameters"""
    return _default_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    return _default_hasher.verify(password, password_hash)
