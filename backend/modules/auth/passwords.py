"""
Password hashing for stored accounts (bcrypt).
"""

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way password hashing with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    def hash(self, plain: str) -> str:
        if not plain:
            raise ValueError("Password must not be empty")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plain), salt).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        if not plain or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash in the store
            return False
