from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import Optional
from solar_inventory.api.deps import get_auth_context
from solar_inventory.application import aggregates
from solar_inventory.application.inventory_service import InventoryService
from solar_inventory.application.schemas import ClientsRead, DashboardRead, ItemUsageRead
from solar_inventory.application.transaction_service import TransactionService
from solar_inventory.exports.csv_export import client_csv_filename, client_transactions_csv
from solar_inventory.infrastructure.db import get_db

router = APIRouter(tags=["reports"], dependencies=[Depends(get_auth_context)])

@router.get("/dashboard", response_model=DashboardRead)
def dashboard(
    db: Session = Depends(get_db),
    project: Optional[str] = Query(None, description="Project tag; 'all' disables the filter"),
):
    items = InventoryService(db).list()
    transactions = TransactionService(db).list()
    return aggregates.dashboard_summary(items, transactions, project=project)

@router.get("/dashboard/top-items", response_model=list[ItemUsageRead])
def top_items(
    db: Session = Depends(get_db),
    limit: int = Query(5, ge=1, le=100),
    project: Optional[str] = Query(None),
):
    return aggregates.top_items_by_usage(TransactionService(db).list(), limit=limit, project=project)

@router.get("/clients", response_model=ClientsRead)
def clients(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100),
    project: Optional[str] = Query(None),
):
    return aggregates.clients_view(TransactionService(db).list(), search=search, project=project)

@router.get("/clients/export.csv")
def export_clients_csv(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100),
    project: Optional[str] = Query(None),
):
    view = aggregates.clients_view(TransactionService(db).list(), search=search, project=project)
    return Response(
        content=client_transactions_csv(view["transactions"]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{client_csv_filename(project)}"'},
    )
