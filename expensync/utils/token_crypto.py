"""
Refresh token strings and secret hashing.

A refresh token reads ``es_rt_<token_id>_<secret>``: the token id is stored in
clear for lookup, the secret only as a hash. Passwords go through the same
hasher. New hashes are Argon2id; PBKDF2-SHA256 hashes (written while
``ARGON2_ENABLED`` is off) keep verifying.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

REFRESH_TOKEN_PREFIX = "es_rt_"
TOKEN_ID_LENGTH = 16
SECRET_BYTES = 32

PBKDF2_SCHEME = "pbkdf2"
PBKDF2_DIGEST = "sha256"
PBKDF2_ITERATIONS = 200_000

# Flip off to write PBKDF2 hashes instead (verification accepts both)
ARGON2_ENABLED = True

_argon2 = PasswordHasher(time_cost=2, memory_cost=65536, parallelism=4, hash_len=32, type=Type.ID)


@dataclass(frozen=True)
class ParsedToken:
    token_id: str
    secret: str


def new_token_id() -> str:
    return uuid.uuid4().hex[:TOKEN_ID_LENGTH]


def generate_token() -> Tuple[str, str, str]:
    """Return (token_id, secret, full token string) for a fresh refresh token."""
    token_id = new_token_id()
    secret = secrets.token_urlsafe(SECRET_BYTES)
    return token_id, secret, f"{REFRESH_TOKEN_PREFIX}{token_id}_{secret}"


def parse_token(token: Optional[str]) -> Optional[ParsedToken]:
    """Split a refresh token into id and secret, or None when it is malformed."""
    if not token or not token.startswith(REFRESH_TOKEN_PREFIX):
        return None
    # The id never contains '_'; the secret may
    token_id, sep, secret = token[len(REFRESH_TOKEN_PREFIX):].partition("_")
    if not sep or not token_id or not secret:
        return None
    return ParsedToken(token_id=token_id, secret=secret)


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


def _derive(secret: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(PBKDF2_DIGEST, secret.encode("utf-8"), salt, iterations)


def _pbkdf2_encode(secret: str) -> str:
    salt = secrets.token_bytes(16)
    digest = _derive(secret, salt, PBKDF2_ITERATIONS)
    return "$".join([PBKDF2_SCHEME, PBKDF2_DIGEST, str(PBKDF2_ITERATIONS), _b64(salt), _b64(digest)])


def _pbkdf2_matches(secret: str, encoded: str) -> bool:
    parts = encoded.split("$")
    if len(parts) != 5 or parts[0] != PBKDF2_SCHEME or parts[1] != PBKDF2_DIGEST:
        return False
    try:
        iterations = int(parts[2])
        salt = base64.urlsafe_b64decode(parts[3])
        expected = base64.urlsafe_b64decode(parts[4])
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(_derive(secret, salt, iterations), expected)


def hash_secret(secret: str) -> str:
    if ARGON2_ENABLED:
        return _argon2.hash(secret)
    return _pbkdf2_encode(secret)


def verify_secret(secret: str, encoded_hash: str) -> bool:
    """Constant-time check of `secret` against an Argon2id or PBKDF2 hash."""
    if not secret or not encoded_hash:
        return False
    if encoded_hash.startswith("$argon2id$"):
        try:
            return _argon2.verify(encoded_hash, secret)
        except (VerificationError, InvalidHashError):
            return False
    if encoded_hash.startswith(PBKDF2_SCHEME + "$"):
        return _pbkdf2_matches(secret, encoded_hash)
    return False


hash_password = hash_secret
verify_password = verify_secret
