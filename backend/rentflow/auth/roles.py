"""
Role definitions — which capability profile each role carries for agreements.

Roles fall into three groups:

    platform operators   CEO, ADMIN, PLATFORM_MANAGER, LEGAL_AUDITOR, SALES_REPRESENTATIVE
    agency staff         AGENCY_DIRECTOR, AGENCY_MANAGER, BROKER, API_CLIENT
    parties              PROPERTY_OWNER_LINKED, INDEPENDENT_OWNER, TENANT, BUILDING_MANAGER

The registry below is built once at import and never mutated. Any role
that is not in it resolves to NO_CAPABILITIES, which denies everything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from rentflow.enums import SignatureType, coerce_enum
from rentflow.auth.permissions import ViewScope

logger = logging.getLogger(__name__)


class Role(str, Enum):
    CEO = "CEO"
    ADMIN = "ADMIN"
    PLATFORM_MANAGER = "PLATFORM_MANAGER"
    AGENCY_DIRECTOR = "AGENCY_ADMIN"
    AGENCY_MANAGER = "AGENCY_MANAGER"
    BROKER = "BROKER"
    PROPERTY_OWNER_LINKED = "PROPRIETARIO"
    INDEPENDENT_OWNER = "INDEPENDENT_OWNER"
    TENANT = "INQUILINO"
    BUILDING_MANAGER = "BUILDING_MANAGER"
    LEGAL_AUDITOR = "LEGAL_AUDITOR"
    SALES_REPRESENTATIVE = "REPRESENTATIVE"
    API_CLIENT = "API_CLIENT"


# Platform roles never edit agreements, whatever their profile says.
PLATFORM_ROLES: frozenset[Role] = frozenset({
    Role.CEO,
    Role.ADMIN,
    Role.PLATFORM_MANAGER,
    Role.LEGAL_AUDITOR,
    Role.SALES_REPRESENTATIVE,
})


def parse_role(value) -> Role | None:
    """Resolve a Role from its wire value or member name; None if unknown."""
    return coerce_enum(Role, value)


def is_platform_role(role) -> bool:
    return parse_role(role) in PLATFORM_ROLES


@dataclass(frozen=True)
class CapabilityProfile:
    """Static bundle of agreement permissions for one role."""
    view_scope: ViewScope = ViewScope.NONE
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_sign: bool = False
    signable_types: frozenset[SignatureType] = field(default_factory=frozenset)
    can_approve: bool = False
    can_reject: bool = False
    can_cancel: bool = False
    can_send_for_signature: bool = False
    requires_professional_credential: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "signable_types", frozenset(self.signable_types))
        if not self.can_sign and self.signable_types:
            raise ValueError("A profile that cannot sign must not list signature types")


# ── Fail-closed default: every unknown role lands here ──
NO_CAPABILITIES = CapabilityProfile()

# ── Platform: read everything, act on nothing ──
_PLATFORM_READER = CapabilityProfile(view_scope=ViewScope.ALL)

# ── Agency director: full control inside the agency ──
_AGENCY_DIRECTOR = CapabilityProfile(
    view_scope=ViewScope.AGENCY,
    can_create=True,
    can_edit=True,
    can_delete=True,
    can_sign=True,
    signable_types=frozenset({SignatureType.AGENCY, SignatureType.OWNER}),
    can_approve=True,
    can_reject=True,
    can_cancel=True,
    can_send_for_signature=True,
)

# ── Agency manager: director minus owner signature (and an edit lock, see scope.py) ──
_AGENCY_MANAGER = CapabilityProfile(
    view_scope=ViewScope.AGENCY,
    can_create=True,
    can_edit=True,
    can_delete=True,
    can_sign=True,
    signable_types=frozenset({SignatureType.AGENCY}),
    can_approve=True,
    can_reject=True,
    can_cancel=True,
    can_send_for_signature=True,
)

# ── Broker: own agreements plus brokered properties; signing needs a credential ──
_BROKER = CapabilityProfile(
    view_scope=ViewScope.OWN_CREATED,
    can_create=True,
    can_edit=True,
    can_delete=True,
    can_sign=True,
    signable_types=frozenset({SignatureType.BROKER, SignatureType.WITNESS}),
    can_cancel=True,
    can_send_for_signature=True,
    requires_professional_credential=True,
)

# ── Owner represented by an agency: signs as owner, nothing else ──
_PROPERTY_OWNER_LINKED = CapabilityProfile(
    view_scope=ViewScope.PARTY_TO,
    can_sign=True,
    signable_types=frozenset({SignatureType.OWNER}),
)

# ── Independent owner: acts as their own agency ──
_INDEPENDENT_OWNER = CapabilityProfile(
    view_scope=ViewScope.OWN_CREATED,
    can_create=True,
    can_edit=True,
    can_delete=True,
    can_sign=True,
    signable_types=frozenset({SignatureType.OWNER, SignatureType.AGENCY}),
    can_approve=True,
    can_reject=True,
    can_cancel=True,
    can_send_for_signature=True,
)

_TENANT = CapabilityProfile(
    view_scope=ViewScope.PARTY_TO,
    can_sign=True,
    signable_types=frozenset({SignatureType.TENANT}),
)

# Signing is switched on but no slot is assigned, so no signature can succeed.
_BUILDING_MANAGER = CapabilityProfile(
    view_scope=ViewScope.PARTY_TO,
    can_sign=True,
)

_API_CLIENT = CapabilityProfile(view_scope=ViewScope.AGENCY)


ROLE_CAPABILITIES: Mapping[Role, CapabilityProfile] = MappingProxyType({
    Role.CEO: _PLATFORM_READER,
    Role.ADMIN: _PLATFORM_READER,
    Role.PLATFORM_MANAGER: _PLATFORM_READER,
    Role.AGENCY_DIRECTOR: _AGENCY_DIRECTOR,
    Role.AGENCY_MANAGER: _AGENCY_MANAGER,
    Role.BROKER: _BROKER,
    Role.PROPERTY_OWNER_LINKED: _PROPERTY_OWNER_LINKED,
    Role.INDEPENDENT_OWNER: _INDEPENDENT_OWNER,
    Role.TENANT: _TENANT,
    Role.BUILDING_MANAGER: _BUILDING_MANAGER,
    Role.LEGAL_AUDITOR: _PLATFORM_READER,
    Role.SALES_REPRESENTATIVE: NO_CAPABILITIES,
    Role.API_CLIENT: _API_CLIENT,
})


def profile_for(
    role,
    registry: Mapping[Role, CapabilityProfile] = ROLE_CAPABILITIES,
) -> CapabilityProfile:
    """Return the capability profile for a role, or NO_CAPABILITIES if unknown."""
    parsed = parse_role(role)
    profile = registry.get(parsed) if parsed is not None else None
    if profile is None:
        logger.debug("No capability profile for role %r; denying all", role)
        return NO_CAPABILITIES
    return profile
