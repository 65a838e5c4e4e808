from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    STAFF = "Staff"


# Higher rank includes every permission of the lower ones
ROLE_RANK = {
    Role.STAFF: 1,
    Role.MANAGER: 2,
    Role.ADMIN: 3,
}


def role_satisfies(actual: str, required: str) -> bool:
    try:
        return ROLE_RANK[Role(actual)] >= ROLE_RANK[Role(required)]
    except ValueError:
        return False
