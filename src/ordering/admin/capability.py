"""Administrative capability.

Admin-only operations take an ``AdminCapability`` as an explicit, typed
parameter. The only way to obtain one is ``grant_admin_capability``, fed by
the upstream authorization layer's decision; it is never inferred from
request state inside the ordering context.
"""

from dataclasses import dataclass

from ordering.errors import AdminCapabilityRequired


@dataclass(frozen=True)
class AdminCapability:
    user_id: str


def grant_admin_capability(user_id: str | None, is_admin: bool) -> AdminCapability:
    """Turn the authorization layer's verdict into a capability."""
    if not is_admin or not user_id:
        raise AdminCapabilityRequired("User unauthorized to perform this action", user_id=user_id)
    return AdminCapability(user_id=user_id)


def require_admin(capability) -> AdminCapability:
    if not isinstance(capability, AdminCapability):
        raise AdminCapabilityRequired("User unauthorized to perform this action")
    return capability
