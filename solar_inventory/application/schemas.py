from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Literal, Optional

RoleName = Literal["Admin", "Manager", "Staff"]
DirectionName = Literal["input", "output"]

class ApiModel(BaseModel):
    """Snake_case in Python and storage, camelCase on the wire; both accepted on input."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

def _required_text(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("field is required")
    return v

# Inventory

class InventoryItemCreate(ApiModel):
    name: str
    category: str
    project: Optional[str] = None
    current_stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)
    max_stock: int = Field(0, ge=0)
    unit_price: float = Field(0, ge=0)
    unit: str = "pcs"
    supplier: str

    @field_validator("name", "category", "supplier")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("project")
    @classmethod
    def _blank_project(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("unit")
    @classmethod
    def _default_unit(cls, v: str) -> str:
        return (v or "").strip() or "pcs"

class InventoryItemRead(ApiModel):
    id: int
    name: str
    category: str
    project: Optional[str] = None
    current_stock: int
    min_stock: int
    max_stock: int
    unit_price: float
    unit: str
    supplier: str
    created_at: datetime

# Staff

class StaffCreate(ApiModel):
    name: str
    email: str
    role: RoleName
    department: str

    @field_validator("name", "email", "department")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return _required_text(v)

class StaffRead(ApiModel):
    id: int
    name: str
    email: str
    role: RoleName
    department: str
    created_at: datetime

# Transactions

class TransactionCreate(ApiModel):
    item_id: int
    quantity: int = Field(..., gt=0)
    # 0 or missing means "use the item's catalogue price"
    unit_price: Optional[float] = Field(None, ge=0)
    project: str
    staff_id: int
    comment: Optional[str] = None

    @field_validator("project")
    @classmethod
    def _strip_project(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("comment")
    @classmethod
    def _strip_comment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

class TransactionRead(ApiModel):
    id: int
    item_id: Optional[int] = None
    item_name: str
    type: DirectionName
    quantity: int
    unit_price: float
    total_value: float
    project: str
    staff_id: Optional[int] = None
    staff_name: str
    comment: Optional[str] = None
    created_at: datetime

class HistorySummaryRead(ApiModel):
    count: int
    input_count: int
    output_count: int
    total_value: float

# Read models

class DashboardRead(ApiModel):
    selected_project: Optional[str] = None
    projects: list[str]
    total_items: int
    total_value: float
    low_stock_count: int
    low_stock: list[InventoryItemRead]
    recent_transactions: list[TransactionRead]

class ProjectStatsRead(ApiModel):
    project: Optional[str] = None
    total_value: float
    total_items: int
    unique_components: int
    transaction_count: int

class ClientsRead(ApiModel):
    selected_project: Optional[str] = None
    projects: list[str]
    stats: ProjectStatsRead
    project_stats: list[ProjectStatsRead]
    transactions: list[TransactionRead]

class ItemUsageRead(ApiModel):
    item_id: Optional[int] = None
    item_name: str
    total_quantity: int
    total_value: float
    transaction_count: int

# RFQ

class RFQItemAdd(ApiModel):
    item_id: int
    quantity: int = Field(1, gt=0)

class RFQQuantityUpdate(ApiModel):
    quantity: int

class RFQLineRead(ApiModel):
    id: str
    item_id: int
    name: str
    unit: str
    quantity: int
    unit_price: float
    line_total: float

class RFQRead(ApiModel):
    items: list[RFQLineRead]
    count: int
    total: float

class RFQExportRequest(ApiModel):
    supplier_name: str = ""
    supplier_address: str = ""
    supplier_email: str = ""

# Auth

class LoginRequest(ApiModel):
    email: str
    password: str

class UserProfileCreate(ApiModel):
    email: str
    password: str = Field(..., min_length=6)
    role: RoleName
    staff_id: Optional[int] = None

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return _required_text(v).lower()

class UserProfileRead(ApiModel):
    id: int
    email: str
    role: RoleName
    staff_id: Optional[int] = None
    created_at: datetime

class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    profile: UserProfileRead

class NavigationItem(ApiModel):
    id: str
    label: str
