"""Identity layer: token codec and password hashing."""

from notely.auth.passwords import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)
from notely.auth.tokens import JWTManager

__all__ = [
    "JWTManager",
    "hash_password",
    "hash_password_async",
    "verify_password",
    "verify_password_async",
]
