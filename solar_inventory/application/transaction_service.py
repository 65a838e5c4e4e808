from sqlalchemy.orm import Session
from solar_inventory.core.logging_config import get_logger
from solar_inventory.domain.models import InventoryItem, StaffMember, Transaction
from solar_inventory.domain.stock import StockDirection, apply_stock_movement, transaction_total
from .schemas import TransactionCreate

logger = get_logger(__name__)

class RecordNotFound(LookupError):
    pass

class TransactionService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return (
            self.db.query(Transaction)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .all()
        )

    def create(self, direction: StockDirection, data: TransactionCreate) -> Transaction:
        """
        Record a stock movement and apply it to the item in one commit.

        The transaction row keeps copies of the item and staff names so the
        history still reads correctly after either is renamed or deleted.
        """
        item = self.db.query(InventoryItem).filter(InventoryItem.id == data.item_id).first()
        if not item:
            raise RecordNotFound("Inventory item not found")
        staff = self.db.query(StaffMember).filter(StaffMember.id == data.staff_id).first()
        if not staff:
            raise RecordNotFound("Staff member not found")

        unit_price = data.unit_price or item.unit_price
        obj = Transaction(
            item_id=item.id,
            item_name=item.name,
            type=direction.value,
            quantity=data.quantity,
            unit_price=unit_price,
            total_value=transaction_total(data.quantity, unit_price),
            project=data.project,
            staff_id=staff.id,
            staff_name=staff.name,
            comment=data.comment,
        )
        self.db.add(obj)

        old_stock = item.current_stock
        item.current_stock = apply_stock_movement(old_stock, data.quantity, direction)
        if data.project:
            item.project = data.project

        self.db.commit()
        self.db.refresh(obj)
        logger.info(
            f"Stock {direction.value}: item {item.id} {old_stock} -> {item.current_stock}",
            extra={'extra_fields': {
                'transaction_id': obj.id,
                'item_id': item.id,
                'quantity': data.quantity,
                'project': data.project,
            }},
        )
        return obj
