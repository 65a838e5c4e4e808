from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from typing import Optional
from solar_inventory.api.deps import get_auth_context, require_role
from solar_inventory.application import aggregates
from solar_inventory.application.inventory_service import InventoryService
from solar_inventory.application.schemas import InventoryItemCreate, InventoryItemRead
from solar_inventory.domain.roles import Role
from solar_inventory.infrastructure.db import get_db

router = APIRouter(prefix="/inventory", tags=["inventory"], dependencies=[Depends(get_auth_context)])
admin_only = [Depends(require_role(Role.ADMIN))]

@router.get("/", response_model=list[InventoryItemRead])
def list_inventory(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100, description="Match name, category or supplier"),
    project: Optional[str] = Query(None, description="Project tag; 'all' disables the filter"),
):
    return aggregates.filter_inventory(InventoryService(db).list(), search=search, project=project)

@router.get("/suppliers", response_model=list[str])
def list_suppliers(db: Session = Depends(get_db)):
    """Suppliers are not a table of their own; they are derived from the items."""
    return aggregates.supplier_names(InventoryService(db).list())

@router.get("/{item_id}", response_model=InventoryItemRead)
def get_item(item_id: int, db: Session = Depends(get_db)):
    item = InventoryService(db).get(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item

@router.post("/", response_model=InventoryItemRead, status_code=201, dependencies=admin_only)
def create_item(payload: InventoryItemCreate, db: Session = Depends(get_db)):
    return InventoryService(db).create(payload)

@router.put("/{item_id}", response_model=InventoryItemRead, dependencies=admin_only)
def update_item(item_id: int, payload: InventoryItemCreate, db: Session = Depends(get_db)):
    item = InventoryService(db).update(item_id, payload)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item

@router.delete("/{item_id}", status_code=204, dependencies=admin_only)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    if not InventoryService(db).delete(item_id):
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return Response(status_code=204)
