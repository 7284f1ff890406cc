from typing import Optional

from fastapi import Request


def get_current_email(request: Request) -> Optional[str]:
    """Email of the signed-in user from the session cookie, None without a session."""
    user = request.session.get("user") or {}
    email = user.get("email") if isinstance(user, dict) else None
    return email or None
