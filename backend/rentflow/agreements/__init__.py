"""
Agreement authorization and lifecycle policy.

Given an actor and an agreement, decides whether the actor may see it,
which lifecycle actions are available, and which signature slots the
actor may fill. Pure functions over frozen inputs; every answer is a
bool or a set, and anything unrecognized is denied.

Components:
    models      — Actor, Agreement and their nested snapshots
    status      — status-only gates (editable, deletable, signable, immutable)
    scope       — relationship predicates and view-scope rules
    actions     — role-only action checks
    signatures  — per-slot signature authorization
    policy      — AgreementPolicy and the module-level decision functions
    guard       — actor-bound context that raises 403 on denial
"""

from rentflow.agreements.models import (
    Actor,
    Agreement,
    AgreementSignatures,
    LinkedProperty,
    SignatureRecord,
)
from rentflow.agreements.policy import (
    AgreementActionFlags,
    AgreementPolicy,
    PermissionsSummary,
    agreement_flags,
    available_actions,
    can_approve,
    can_cancel,
    can_delete,
    can_edit,
    can_perform,
    can_send_for_signature,
    can_sign,
    can_view,
    default_policy,
    permissions_summary,
    profile_for,
    signature_types_for,
)
from rentflow.agreements.status import (
    is_deletable,
    is_editable,
    is_immutable,
    is_signable,
    is_signed,
)
from rentflow.agreements.guard import AgreementPermissionContext

__all__ = [
    "Actor", "Agreement", "AgreementSignatures", "LinkedProperty", "SignatureRecord",
    "AgreementPolicy", "AgreementActionFlags", "PermissionsSummary", "default_policy",
    "profile_for", "can_perform", "can_view", "can_edit", "can_delete",
    "can_approve", "can_cancel", "can_send_for_signature", "can_sign",
    "signature_types_for", "available_actions", "permissions_summary", "agreement_flags",
    "is_editable", "is_deletable", "is_signable", "is_signed", "is_immutable",
    "AgreementPermissionContext",
]
