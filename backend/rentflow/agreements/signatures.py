"""
Signature authorization — may this actor sign this agreement in this slot?

Checks run in a fixed order and stop at the first failure:

    1. the role may sign at all (credential included)
    2. the status still collects signatures
    3. the role is assigned the requested signature type
    4. the actor is the party that slot belongs to
"""

from typing import Callable

from rentflow.agreements.actions import profile_permits
from rentflow.agreements.models import Actor, Agreement
from rentflow.agreements.scope import is_linked_broker, is_named_owner, is_named_tenant, shares_agency
from rentflow.agreements.status import is_signable
from rentflow.auth.permissions import AgreementAction
from rentflow.auth.roles import CapabilityProfile
from rentflow.enums import SignatureType, coerce_enum


def _broker_party(actor: Actor, profile: CapabilityProfile, agreement: Agreement) -> bool:
    if profile.requires_professional_credential and not actor.has_credential:
        return False
    return is_linked_broker(actor, agreement)


PARTY_CHECKS: dict[SignatureType, Callable[[Actor, CapabilityProfile, Agreement], bool]] = {
    SignatureType.TENANT: lambda actor, profile, agreement: is_named_tenant(actor, agreement),
    SignatureType.OWNER: lambda actor, profile, agreement: is_named_owner(actor, agreement),
    SignatureType.AGENCY: lambda actor, profile, agreement: shares_agency(actor, agreement),
    SignatureType.BROKER: _broker_party,
    SignatureType.WITNESS: lambda actor, profile, agreement: True,
}


def can_sign(
    actor: Actor,
    profile: CapabilityProfile,
    agreement: Agreement,
    signature_type,
) -> bool:
    if not profile_permits(actor, profile, AgreementAction.SIGN):
        return False
    if not is_signable(agreement.status):
        return False

    signature_type = coerce_enum(SignatureType, signature_type)
    if signature_type is None or signature_type not in profile.signable_types:
        return False

    party_check = PARTY_CHECKS.get(signature_type)
    return party_check is not None and party_check(actor, profile, agreement)


def signature_types_for(
    actor: Actor,
    profile: CapabilityProfile,
    agreement: Agreement,
) -> frozenset[SignatureType]:
    """Every signature slot the actor could fill on this agreement right now."""
    return frozenset(
        sig_type for sig_type in profile.signable_types
        if can_sign(actor, profile, agreement, sig_type)
    )
