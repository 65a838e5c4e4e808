from typing import Optional
from sqlalchemy.orm import Session
from solar_inventory.core.logging_config import get_logger
from solar_inventory.domain.models import UserProfile
from solar_inventory.infrastructure.security import hash_password, verify_password
from .schemas import UserProfileCreate

logger = get_logger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        return self.db.query(UserProfile).filter(UserProfile.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        return self.db.query(UserProfile).filter(UserProfile.email == email.strip().lower()).first()

    def authenticate(self, email: str, password: str) -> Optional[UserProfile]:
        profile = self.get_by_email(email)
        if not profile or not verify_password(password, profile.password_hash):
            logger.warning("Sign-in rejected", extra={'extra_fields': {'email': email}})
            return None
        return profile

    def create_profile(self, data: UserProfileCreate) -> UserProfile:
        obj = UserProfile(
            email=data.email,
            password_hash=hash_password(data.password),
            role=data.role,
            staff_id=data.staff_id,
        )
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"User profile created: {obj.id} ({obj.role})")
        return obj
