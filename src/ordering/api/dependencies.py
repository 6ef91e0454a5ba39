"""Request dependencies that read the headers set by the upstream auth layer."""

from fastapi import Header

from ordering.admin.capability import AdminCapability, grant_admin_capability
from ordering.errors import ClientInputError

ADMIN_ROLE = "admin"


def current_user_id(x_user_id: str = Header(default="")) -> str:
    if not x_user_id:
        raise ClientInputError("Missing X-User-Id header")
    return x_user_id


def admin_capability(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=""),
) -> AdminCapability:
    return grant_admin_capability(x_user_id, is_admin=x_user_role.strip().lower() == ADMIN_ROLE)
