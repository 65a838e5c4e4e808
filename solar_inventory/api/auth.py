from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from solar_inventory.api.deps import AuthContext, get_auth_context, require_role
from solar_inventory.application.auth_service import AuthService
from solar_inventory.application.rfq import RFQSessionStore, get_rfq_sessions
from solar_inventory.application.schemas import LoginRequest, TokenResponse, UserProfileCreate, UserProfileRead
from solar_inventory.domain.roles import Role
from solar_inventory.infrastructure.db import get_db
from solar_inventory.infrastructure.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    profile = AuthService(db).authenticate(payload.email, payload.password)
    if not profile:
        raise HTTPException(status_code=401, detail="Invalid login credentials")
    return TokenResponse(
        access_token=create_access_token(str(profile.id), profile.role),
        profile=UserProfileRead.model_validate(profile),
    )

@router.post("/logout", status_code=204)
def logout(
    auth: AuthContext = Depends(get_auth_context),
    sessions: RFQSessionStore = Depends(get_rfq_sessions),
):
    # Tokens are stateless; signing out only drops the in-memory RFQ
    sessions.discard(auth.user_id)
    return Response(status_code=204)

@router.get("/me", response_model=UserProfileRead)
def me(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    return AuthService(db).get_profile(auth.user_id)

@router.post("/users", response_model=UserProfileRead, status_code=201)
def create_user(
    payload: UserProfileCreate,
    db: Session = Depends(get_db),
    _: AuthContext = Depends(require_role(Role.ADMIN)),
):
    service = AuthService(db)
    if service.get_by_email(payload.email):
        raise HTTPException(status_code=409, detail="Email already registered")
    return service.create_profile(payload)
