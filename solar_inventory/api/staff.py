from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from typing import Optional
from solar_inventory.api.deps import get_auth_context, require_role
from solar_inventory.application import aggregates
from solar_inventory.application.schemas import StaffCreate, StaffRead
from solar_inventory.application.staff_service import StaffService
from solar_inventory.domain.roles import Role
from solar_inventory.infrastructure.db import get_db

router = APIRouter(prefix="/staff", tags=["staff"], dependencies=[Depends(get_auth_context)])
admin_only = [Depends(require_role(Role.ADMIN))]

@router.get("/", response_model=list[StaffRead])
def list_staff(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100, description="Match name, email, role or department"),
):
    return aggregates.filter_staff(StaffService(db).list(), search=search)

@router.get("/{staff_id}", response_model=StaffRead)
def get_staff(staff_id: int, db: Session = Depends(get_db)):
    member = StaffService(db).get(staff_id)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member

@router.post("/", response_model=StaffRead, status_code=201, dependencies=admin_only)
def create_staff(payload: StaffCreate, db: Session = Depends(get_db)):
    return StaffService(db).create(payload)

@router.put("/{staff_id}", response_model=StaffRead, dependencies=admin_only)
def update_staff(staff_id: int, payload: StaffCreate, db: Session = Depends(get_db)):
    member = StaffService(db).update(staff_id, payload)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member

@router.delete("/{staff_id}", status_code=204, dependencies=admin_only)
def delete_staff(staff_id: int, db: Session = Depends(get_db)):
    if not StaffService(db).delete(staff_id):
        raise HTTPException(status_code=404, detail="Staff member not found")
    return Response(status_code=204)
