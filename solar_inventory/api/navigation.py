from fastapi import APIRouter, Depends
from solar_inventory.api.deps import AuthContext, get_auth_context
from solar_inventory.application.schemas import NavigationItem
from solar_inventory.domain.roles import Role

router = APIRouter(prefix="/navigation", tags=["navigation"])

# (id, label, admin_only)
MENU = [
    ("dashboard", "Dashboard", False),
    ("inventory", "Inventory", True),
    ("input", "Stock in", False),
    ("output", "Stock out", False),
    ("staff", "Staff", True),
    ("history", "History", False),
    ("clients", "Clients", False),
]

def menu_for(auth: AuthContext) -> list[NavigationItem]:
    is_admin = auth.role == Role.ADMIN.value
    return [
        NavigationItem(id=view_id, label=label)
        for view_id, label, admin_only in MENU
        if is_admin or not admin_only
    ]

@router.get("/", response_model=list[NavigationItem])
def navigation(auth: AuthContext = Depends(get_auth_context)):
    return menu_for(auth)
