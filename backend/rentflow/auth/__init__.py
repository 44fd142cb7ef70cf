from rentflow.auth.permissions import AgreementAction, ViewScope
from rentflow.auth.roles import (
    NO_CAPABILITIES,
    PLATFORM_ROLES,
    ROLE_CAPABILITIES,
    CapabilityProfile,
    Role,
    is_platform_role,
    parse_role,
    profile_for,
)

__all__ = [
    "AgreementAction", "ViewScope", "Role", "CapabilityProfile",
    "ROLE_CAPABILITIES", "NO_CAPABILITIES", "PLATFORM_ROLES",
    "profile_for", "parse_role", "is_platform_role",
]
