"""Password hashing shared by donor and admin accounts."""

from pwdlib import PasswordHash

pwd_hasher = PasswordHash.recommended()


def hash_password(password: str) -> str:
    """Hash a password using Argon2.

    Salt is automatically generated and embedded in the returned hash.
    """
    return pwd_hasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against the hash using Argon2.

    Salt is automatically extracted from the hash by pwdlib.
    """
    return pwd_hasher.verify(plain_password, hashed_password)
