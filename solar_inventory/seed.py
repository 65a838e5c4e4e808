"""
Bootstrap the first Admin account.

Profiles can only be created by an Admin through the API, so a fresh
database needs one seeded out of band:

    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=secret python -m solar_inventory.seed
"""

import sys
from typing import Optional, Tuple
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from solar_inventory.application.auth_service import AuthService
from solar_inventory.application.schemas import StaffCreate, UserProfileCreate
from solar_inventory.core import get_logger, setup_logging
from solar_inventory.core_settings import get_settings
from solar_inventory.domain.models import StaffMember, UserProfile
from solar_inventory.domain.roles import Role
from solar_inventory.infrastructure.db import SessionLocal, init_models
from solar_inventory.infrastructure.security import hash_password

logger = get_logger(__name__)

def ensure_admin(db: Session, email: str, password: str, name: Optional[str] = None) -> Tuple[UserProfile, bool]:
    """
    Return the profile for ``email``, creating an Admin (and its staff row) if missing.

    Both payloads are validated before anything is written, and the staff row
    and profile are committed together so a failure leaves neither behind.
    """
    existing = AuthService(db).get_by_email(email)
    if existing:
        return existing, False

    staff_data = StaffCreate(
        name=name or "Administrator",
        email=email,
        role=Role.ADMIN.value,
        department="Management",
    )
    profile_data = UserProfileCreate(email=email, password=password, role=Role.ADMIN.value)

    try:
        member = StaffMember(**staff_data.model_dump())
        db.add(member)
        db.flush()
        profile = UserProfile(
            email=profile_data.email,
            password_hash=hash_password(profile_data.password),
            role=profile_data.role,
            staff_id=member.id,
        )
        db.add(profile)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(profile)
    return profile, True

def main() -> int:
    settings = get_settings()
    setup_logging(service_name="solar-inventory-seed", level=settings.LOG_LEVEL)
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1

    init_models()
    db = SessionLocal()
    try:
        profile, created = ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    except ValidationError as e:
        logger.error(f"Invalid admin account settings: {e}")
        return 1
    finally:
        db.close()
    if created:
        logger.info(f"Admin profile {profile.id} created for {profile.email}")
    else:
        logger.info(f"Profile for {profile.email} already exists; nothing to do")
    return 0

if __name__ == "__main__":
    sys.exit(main())
