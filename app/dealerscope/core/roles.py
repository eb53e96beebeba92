SUPER_ADMIN = "super_admin"
STORE_GM = "store_gm"
CONTROLLER = "controller"
DEPARTMENT_MANAGER = "department_manager"
FIXED_OPS_MANAGER = "fixed_ops_manager"

KNOWN_ROLES = {SUPER_ADMIN, STORE_GM, CONTROLLER, DEPARTMENT_MANAGER, FIXED_OPS_MANAGER}
STORE_VIEW_ROLES = {STORE_GM, CONTROLLER}
DEPARTMENT_GRANT_ROLES = {DEPARTMENT_MANAGER, FIXED_OPS_MANAGER}


def normalize_role(role: str | None) -> str:
    return (role or "").strip().lower()


def is_global_admin(role: str | None) -> bool:
    return normalize_role(role) == SUPER_ADMIN


def has_store_view_access(role: str | None) -> bool:
    return normalize_role(role) in STORE_VIEW_ROLES


def is_department_scoped(role: str | None) -> bool:
    """Department managers only see departments they hold an explicit grant for."""
    normalized = normalize_role(role)
    if is_global_admin(normalized) or has_store_view_access(normalized):
        return False
    return normalized in DEPARTMENT_GRANT_ROLES
