from __future__ import annotations

from fastapi import Depends, HTTPException

from .users import AuthService, MockUser, get_auth_service


def require_user(auth: AuthService = Depends(get_auth_service)) -> MockUser:
    """Raise 401 if no user is logged in."""
    user = auth.current_user
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
