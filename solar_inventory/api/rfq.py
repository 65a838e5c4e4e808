from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from solar_inventory.api.deps import AuthContext, get_auth_context
from solar_inventory.application.inventory_service import InventoryService
from solar_inventory.application.rfq import RFQBuilder, RFQSessionStore, RFQValidationError, get_rfq_sessions
from solar_inventory.application.schemas import RFQExportRequest, RFQItemAdd, RFQLineRead, RFQQuantityUpdate, RFQRead
from solar_inventory.core import get_logger
from solar_inventory.core_settings import get_settings
from solar_inventory.exports.pdf import Party, render_rfq_pdf, rfq_filename
from solar_inventory.infrastructure.db import get_db

router = APIRouter(prefix="/rfq", tags=["rfq"])
logger = get_logger(__name__)

def current_rfq(
    auth: AuthContext = Depends(get_auth_context),
    sessions: RFQSessionStore = Depends(get_rfq_sessions),
) -> RFQBuilder:
    return sessions.get(auth.user_id)

def _read(builder: RFQBuilder) -> RFQRead:
    lines = builder.snapshot()
    return RFQRead(
        items=[RFQLineRead.model_validate(line) for line in lines],
        count=len(lines),
        total=sum(line.line_total for line in lines),
    )

@router.get("/", response_model=RFQRead)
def get_rfq(builder: RFQBuilder = Depends(current_rfq)):
    return _read(builder)

@router.delete("/", response_model=RFQRead)
def clear_rfq(builder: RFQBuilder = Depends(current_rfq)):
    builder.clear()
    return _read(builder)

@router.post("/items", response_model=RFQRead)
def add_item(payload: RFQItemAdd, db: Session = Depends(get_db), builder: RFQBuilder = Depends(current_rfq)):
    item = InventoryService(db).get(payload.item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    builder.add(item, payload.quantity)
    return _read(builder)

@router.patch("/items/{line_id}", response_model=RFQRead)
def update_quantity(line_id: str, payload: RFQQuantityUpdate, builder: RFQBuilder = Depends(current_rfq)):
    if builder.set_quantity(line_id, payload.quantity) is None:
        raise HTTPException(status_code=404, detail="RFQ line not found")
    return _read(builder)

@router.delete("/items/{line_id}", response_model=RFQRead)
def remove_item(line_id: str, builder: RFQBuilder = Depends(current_rfq)):
    if builder.remove(line_id) is None:
        raise HTTPException(status_code=404, detail="RFQ line not found")
    return _read(builder)

@router.post("/pdf")
def export_pdf(payload: RFQExportRequest, builder: RFQBuilder = Depends(current_rfq)):
    try:
        builder.validate_for_export(payload.supplier_name, payload.supplier_address, payload.supplier_email)
    except RFQValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    settings = get_settings()
    buyer = Party(
        name=settings.COMPANY_NAME,
        address=settings.COMPANY_ADDRESS,
        email=settings.COMPANY_EMAIL,
        phone=settings.COMPANY_PHONE,
    )
    supplier = Party(
        name=payload.supplier_name.strip(),
        address=payload.supplier_address.strip(),
        email=payload.supplier_email.strip(),
    )
    lines = builder.snapshot()
    content = render_rfq_pdf(lines, buyer, supplier, currency=settings.CURRENCY)
    logger.info(f"RFQ exported for {supplier.name} with {len(lines)} lines")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{rfq_filename()}"'},
    )
