"""
Password Hasher

bcrypt wrapper used for account passwords.
"""

from typing import Dict, Optional

import bcrypt

from config import ApplicationConfig


class PasswordHasher:
    """
    Salted one-way hashing with a tunable cost factor.

    The salt is generated per call and embedded in the output, so hashing the
    same password twice yields different strings.
    """

    _dummy_hashes: Dict[int, bytes] = {}

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or ApplicationConfig.BCRYPT_ROUNDS

    def hash(self, password: str) -> str:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Compare password against a stored hash. Malformed hashes verify as False."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the cost of a real verification on a path with no stored hash."""
        dummy = self._dummy_hashes.get(self.rounds)
        if dummy is None:
            dummy = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))
            self._dummy_hashes[self.rounds] = dummy
        try:
            bcrypt.checkpw(password.encode("utf-8"), dummy)
        except (ValueError, TypeError):
            pass
        return False
