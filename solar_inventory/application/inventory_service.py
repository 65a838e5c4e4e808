from typing import Optional
from sqlalchemy.orm import Session
from solar_inventory.core.logging_config import get_logger
from solar_inventory.domain.models import InventoryItem
from .schemas import InventoryItemCreate

logger = get_logger(__name__)

class InventoryService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return self.db.query(InventoryItem).order_by(InventoryItem.name, InventoryItem.id).all()

    def get(self, item_id: int) -> Optional[InventoryItem]:
        return self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    def create(self, data: InventoryItemCreate) -> InventoryItem:
        obj = InventoryItem(**data.model_dump())
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"Inventory item created: {obj.id} {obj.name}")
        return obj

    def update(self, item_id: int, data: InventoryItemCreate) -> Optional[InventoryItem]:
        item = self.get(item_id)
        if not item:
            return None
        for field, value in data.model_dump().items():
            setattr(item, field, value)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Inventory item updated: {item.id}")
        return item

    def delete(self, item_id: int) -> bool:
        item = self.get(item_id)
        if not item:
            return False
        self.db.delete(item)
        self.db.commit()
        logger.info(f"Inventory item deleted: {item_id}")
        return True
