import bcrypt


def hash_password(raw: str) -> str:
    """bcrypt hash of a PIN/password, returned as text for storage."""
    return bcrypt.hashpw(raw.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw: str, hashed: str) -> bool:
    """True when `raw` matches the bcrypt `hashed` value.

    Raises ValueError if `hashed` is not a bcrypt hash.
    """
    return bcrypt.checkpw(raw.encode("utf-8"), hashed.encode("utf-8"))

