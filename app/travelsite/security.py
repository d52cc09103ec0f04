"""
Password hashing and session tokens.

Stored password format is "<hash>.<salt>", both hex. The hash is scrypt
(N=16384, r=8, p=1, 64 bytes) keyed by the salt's hex text, which keeps hashes
created by the earlier Node deployment valid.
"""
import hashlib
import hmac
import secrets

_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 1
_KEY_LEN = 64
_SALT_BYTES = 16

# Compared against when the username does not exist, so both failure paths do the same work.
_DUMMY_HASH = "0" * (_KEY_LEN * 2) + "." + "0" * (_SALT_BYTES * 2)


def _scrypt(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_LEN,
        maxmem=64 * 1024 * 1024,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(_SALT_BYTES)
    return f"{_scrypt(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str | None) -> bool:
    """Constant-time check of `password` against a stored "<hash>.<salt>" value."""
    hashed, _, salt = (stored or _DUMMY_HASH).partition(".")
    if not hashed or not salt:
        hashed, _, salt = _DUMMY_HASH.partition(".")
        stored = None
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        expected = b""
        stored = None
    supplied = _scrypt(password or "", salt)
    return hmac.compare_digest(expected, supplied) and stored is not None


def new_session_id() -> str:
    return secrets.token_urlsafe(32)
