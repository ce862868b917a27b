# accounthub/auth/hashing.py
import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt ignores (newer releases reject) anything past 72 bytes
BCRYPT_MAX_BYTES = 72


def _pw_bytes(pw: str) -> bytes:
    return pw.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing; verification never raises."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_pw_bytes(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_pw_bytes(password), password_hash.encode())
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("password verification failed on malformed hash: %s", e)
            return False
