from __future__ import annotations

from core.models import UserRecord


def get_initials(name: str) -> str:
    """Up to two uppercase initials: first letter of the first two words ("" for a blank name)."""
    words = (name or "").split()
    return "".join(w[0] for w in words[:2]).upper()


def profile_letters(user: UserRecord) -> str:
    return get_initials(user.name)
