# shop/utils/security.py
import uuid

import bcrypt

# bcrypt uwzglednia tylko pierwsze 72 bajty hasla
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), stored.encode())
    except ValueError:
        # zly format hasha albo haslo dluzsze niz 72 bajty
        return False


def new_token() -> str:
    return str(uuid.uuid4())
