from typing import Optional
from sqlalchemy.orm import Session
from solar_inventory.core.logging_config import get_logger
from solar_inventory.domain.models import StaffMember
from .schemas import StaffCreate

logger = get_logger(__name__)

class StaffService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return (
            self.db.query(StaffMember)
            .order_by(StaffMember.created_at.desc(), StaffMember.id.desc())
            .all()
        )

    def get(self, staff_id: int) -> Optional[StaffMember]:
        return self.db.query(StaffMember).filter(StaffMember.id == staff_id).first()

    def create(self, data: StaffCreate) -> StaffMember:
        obj = StaffMember(
            name=data.name,
            email=data.email,
            role=data.role,
            department=data.department,
        )
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"Staff member created: {obj.id}")
        return obj

    def update(self, staff_id: int, data: StaffCreate) -> Optional[StaffMember]:
        member = self.get(staff_id)
        if not member:
            return None
        member.name = data.name
        member.email = data.email
        member.role = data.role
        member.department = data.department
        self.db.commit()
        self.db.refresh(member)
        return member

    def delete(self, staff_id: int) -> bool:
        member = self.get(staff_id)
        if not member:
            return False
        self.db.delete(member)
        self.db.commit()
        logger.info(f"Staff member deleted: {staff_id}")
        return True
