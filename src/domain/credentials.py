"""
Password credentials - One-way hashing and verification.

Passwords are hashed with unsalted SHA-256 and stored as a 64-character
upper-case hex digest. The format is kept for compatibility with records
already stored by earlier deployments: identical passwords produce
identical digests across records.
"""

import hashlib
import logging
import secrets

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 64


def _utf8_bytes(raw: str) -> bytes:
    # Lone surrogates become U+FFFD; paired surrogates are joined first.
    text = raw.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return text.encode("utf-8")


def hash_password(raw: str) -> str:
    """
    Hash a raw password into a fixed-width hex digest.

    Args:
        raw: Plaintext password

    Returns:
        Upper-case hex SHA-256 digest of the UTF-8 encoded password.
        Unpaired surrogates are encoded as U+FFFD, so every str hashes.
    """
    return hashlib.sha256(_utf8_bytes(raw)).hexdigest().upper()


def verify_password(raw: str, digest: str) -> bool:
    """
    Check a raw password against a stored digest.

    Never raises: any failure while hashing or comparing
    (None input, undecodable text) counts as a mismatch.
    """
    try:
        return secrets.compare_digest(hash_password(raw), digest)
    except Exception:
        logger.debug("Password verification failed with an error", exc_info=True)
        return False
