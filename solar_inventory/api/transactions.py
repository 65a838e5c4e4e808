from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Literal, Optional
from solar_inventory.api.deps import get_auth_context
from solar_inventory.application import aggregates
from solar_inventory.application.schemas import HistorySummaryRead, TransactionCreate, TransactionRead
from solar_inventory.application.transaction_service import RecordNotFound, TransactionService
from solar_inventory.domain.stock import StockDirection
from solar_inventory.infrastructure.db import get_db

router = APIRouter(prefix="/transactions", tags=["transactions"], dependencies=[Depends(get_auth_context)])

@router.get("/", response_model=list[TransactionRead])
def list_transactions(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100, description="Match item, staff or project"),
    type: Literal["all", "input", "output"] = Query("all"),
    project: Optional[str] = Query(None),
):
    return aggregates.filter_transactions(TransactionService(db).list(), search=search, type=type, project=project)

@router.get("/summary", response_model=HistorySummaryRead)
def transaction_summary(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, max_length=100),
    type: Literal["all", "input", "output"] = Query("all"),
):
    rows = aggregates.filter_transactions(TransactionService(db).list(), search=search, type=type)
    return aggregates.history_summary(rows)

def _record(direction: StockDirection, payload: TransactionCreate, db: Session):
    try:
        return TransactionService(db).create(direction, payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/input", response_model=TransactionRead, status_code=201)
def stock_in(payload: TransactionCreate, db: Session = Depends(get_db)):
    return _record(StockDirection.INPUT, payload, db)

@router.post("/output", response_model=TransactionRead, status_code=201)
def stock_out(payload: TransactionCreate, db: Session = Depends(get_db)):
    return _record(StockDirection.OUTPUT, payload, db)
