import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    manager = "manager"
    operator = "operator"
    viewer = "viewer"


# Display roles shown by the frontend
ROLE_DISPLAY = {
    UserRole.admin: "Tenant Super Admin",
    UserRole.manager: "Warehouse Manager",
    UserRole.operator: "Staff User",
    UserRole.viewer: "Customer User",
}

DISPLAY_TO_ROLE = {
    "Tenant Super Admin": UserRole.admin,
    "Warehouse Manager": UserRole.manager,
    "Staff User": UserRole.operator,
    "Customer Admin": UserRole.operator,
    "Customer User": UserRole.viewer,
}

CUSTOMER_DISPLAY_ROLES = {"Customer Admin", "Customer User"}
SYSTEM_ROLES = (UserRole.admin, UserRole.manager, UserRole.operator)
CUSTOMER_ROLES = (UserRole.viewer,)
