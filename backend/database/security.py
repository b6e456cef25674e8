import hashlib
import re
from typing import Optional

from passlib.hash import bcrypt

from .config import logger

_BCRYPT_HASH = re.compile(r"^\$2[abxy]\$\d{2}\$[./A-Za-z0-9]{53}$")


def _prehash(password: str) -> str:
    # bcrypt only reads the first 72 bytes; the hex digest keeps long passphrases intact
    return hashlib.sha256(password.encode('utf-8')).hexdigest()


def hash_password(password: str) -> str:
    return bcrypt.hash(_prehash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login password against a stored profile hash."""
    if not is_password_hashed(hashed_password):
        logger.warning("Stored password is not a bcrypt hash; rejecting login")
        return False
    try:
        return bcrypt.verify(_prehash(plain_password or ''), hashed_password)
    except ValueError as exc:
        logger.error("Password verification failed: %s", exc)
        return False


def is_password_hashed(password: Optional[str]) -> bool:
    return bool(password) and bool(_BCRYPT_HASH.match(password))
