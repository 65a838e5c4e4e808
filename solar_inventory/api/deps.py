"""
Request-scoped authentication context.

Handlers never read a global "current user": they declare
``Depends(get_auth_context)`` (or ``require_role(...)``) and receive an
explicit ``AuthContext`` built from the bearer token and a role lookup.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from solar_inventory.application.auth_service import AuthService
from solar_inventory.core.logging_config import set_request_context
from solar_inventory.domain.roles import Role, role_satisfies
from solar_inventory.infrastructure.db import get_db
from solar_inventory.infrastructure.security import decode_access_token

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    email: str
    role: str
    staff_id: Optional[int] = None

    def has_role(self, required: Role) -> bool:
        return role_satisfies(self.role, required.value)


def get_auth_context(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Missing token")
    token_data = decode_access_token(auth_header[len(BEARER_PREFIX):])
    if not token_data or "sub" not in token_data:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        user_id = int(token_data["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")

    # Role comes from the profile row, not the token, so demotions apply at once
    profile = AuthService(db).get_profile(user_id)
    if not profile:
        raise HTTPException(status_code=403, detail="User profile not found")

    set_request_context(user_id=str(profile.id))
    return AuthContext(
        user_id=profile.id,
        email=profile.email,
        role=profile.role,
        staff_id=profile.staff_id,
    )


def require_role(required: Role):
    def dependency(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if not auth.has_role(required):
            raise HTTPException(status_code=403, detail=f"{required.value} role required")
        return auth
    return dependency
