"""
Role-only action checks: what a capability profile allows before any
particular agreement is looked at.
"""

from rentflow.agreements.models import Actor
from rentflow.auth.permissions import AgreementAction, ViewScope
from rentflow.auth.roles import CapabilityProfile
from rentflow.enums import coerce_enum


def profile_permits(actor: Actor, profile: CapabilityProfile, action) -> bool:
    """
    Whether the profile grants `action` to this actor, ignoring any resource.

    SIGN additionally needs a professional credential on the actor when
    the profile requires one. Unknown actions are denied.
    """
    action = coerce_enum(AgreementAction, action)
    if action is None:
        return False

    if action == AgreementAction.VIEW:
        return profile.view_scope != ViewScope.NONE
    if action == AgreementAction.SIGN:
        if not profile.can_sign:
            return False
        return not profile.requires_professional_credential or actor.has_credential

    flags = {
        AgreementAction.CREATE: profile.can_create,
        AgreementAction.EDIT: profile.can_edit,
        AgreementAction.DELETE: profile.can_delete,
        AgreementAction.APPROVE: profile.can_approve,
        AgreementAction.REJECT: profile.can_reject,
        AgreementAction.CANCEL: profile.can_cancel,
        AgreementAction.SEND_FOR_SIGNATURE: profile.can_send_for_signature,
    }
    return flags.get(action, False)
