# shop/domain/identity.py
from dataclasses import dataclass


@dataclass(frozen=True)
class UserIdentity:
    """Uwierzytelniony uzytkownik, przekazywany jawnie do serwisow."""

    id: int
    username: str
