from __future__ import annotations

from typing import Optional

from .config import Settings


def is_admin(user_id: Optional[str], settings: Settings) -> bool:
    uid = (user_id or "").strip()
    return bool(uid) and uid in settings.admin_users


def require_admin(user_id: Optional[str], settings: Settings) -> str:
    uid = (user_id or "").strip()
    if not uid:
        raise PermissionError("Unauthorized")
    if uid not in settings.admin_users:
        raise PermissionError(f"User {uid!r} is not an admin")
    return uid
