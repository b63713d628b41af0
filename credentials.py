# Password hashing lives here so the rest of the app never touches raw
# credential storage.

import hmac

import bcrypt

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_credential(password):
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def needs_rehash(stored):
    """True for rows written before passwords were hashed."""
    return bool(stored) and not stored.startswith(BCRYPT_PREFIXES)


def verify_credential(password, stored):
    if not password or not stored:
        return False
    if needs_rehash(stored):
        # legacy plaintext value
        return hmac.compare_digest(password.encode(), stored.encode())
    try:
        return bcrypt.checkpw(password.encode(), stored.encode())
    except ValueError:
        return False
