"""
Agreement policy engine — per-action decisions for one actor and one agreement.

The engine combines four layers:

    registry   role → CapabilityProfile            (rentflow.auth.roles)
    status     status-only gates                   (rentflow.agreements.status)
    scope      relationship predicates             (rentflow.agreements.scope)
    signature  per-slot signature checks           (rentflow.agreements.signatures)

Every check returns a bool and never raises; a missing actor, a missing
agreement, an unknown role, action, status or signature type all deny.

This engine mirrors the backend's authorization so the UI can hide what
the user cannot do. It is advisory: the backend remains the enforcement
point and must run its own checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from rentflow.agreements import scope
from rentflow.agreements.actions import profile_permits
from rentflow.agreements.models import Actor, Agreement
from rentflow.agreements.signatures import can_sign as _can_sign
from rentflow.agreements.signatures import signature_types_for as _signature_types_for
from rentflow.agreements.status import is_deletable, is_editable, is_immutable
from rentflow.auth.permissions import AgreementAction, ViewScope
from rentflow.auth.roles import (
    NO_CAPABILITIES,
    ROLE_CAPABILITIES,
    CapabilityProfile,
    Role,
    is_platform_role,
)
from rentflow.auth.roles import profile_for as _registry_profile_for
from rentflow.enums import AgreementStatus, SignatureType


# ── Per-scope edit/delete/cancel rules ───────────────────────────────────────

def _agency_edit(actor: Actor, agreement: Agreement) -> bool:
    return scope.shares_agency(actor, agreement) and not scope.agency_manager_edit_locked(actor, agreement)


def _own_created_edit(actor: Actor, agreement: Agreement) -> bool:
    if actor.role == Role.BROKER:
        return scope.is_creator(actor, agreement) or scope.is_linked_broker(actor, agreement)
    return scope.is_creator(actor, agreement)


def _agency_delete(actor: Actor, agreement: Agreement) -> bool:
    # An agency-scoped actor without an agency is not narrowed further.
    return not actor.agency_id or scope.shares_agency(actor, agreement)


_Rule = Callable[[Actor, Agreement], bool]

EDIT_RULES: dict[ViewScope, _Rule] = {
    ViewScope.AGENCY: _agency_edit,
    ViewScope.OWN_CREATED: _own_created_edit,
}

DELETE_RULES: dict[ViewScope, _Rule] = {
    ViewScope.AGENCY: _agency_delete,
    ViewScope.OWN_CREATED: scope.is_creator,
}

# Scopes not listed here are not narrowed for cancel/approve.
CANCEL_RULES: dict[ViewScope, _Rule] = {
    ViewScope.AGENCY: scope.shares_agency,
    ViewScope.OWN_CREATED: scope.is_creator,
}

APPROVE_RULES: dict[ViewScope, _Rule] = {
    ViewScope.AGENCY: scope.shares_agency,
}


def _deny(actor: Actor, agreement: Agreement) -> bool:
    return False


def _allow(actor: Actor, agreement: Agreement) -> bool:
    return True


# ── Aggregates ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PermissionsSummary:
    """Role-level answers for one actor, independent of any agreement."""
    role: str
    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_sign: bool = False
    can_approve: bool = False
    can_reject: bool = False
    can_cancel: bool = False
    can_send_for_signature: bool = False
    is_platform_role: bool = False


@dataclass(frozen=True)
class AgreementActionFlags:
    """Everything a detail view needs to decide which controls to render."""
    can_view: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_sign: bool = False
    can_sign_as_tenant: bool = False
    can_sign_as_owner: bool = False
    can_sign_as_agency: bool = False
    can_sign_as_broker: bool = False
    can_approve: bool = False
    can_cancel: bool = False
    can_send_for_signature: bool = False
    available_actions: frozenset[AgreementAction] = field(default_factory=frozenset)


class AgreementPolicy:
    """
    Authorization decisions for agreements, backed by a role registry.

    The registry defaults to ROLE_CAPABILITIES; pass another read-only
    mapping to evaluate a different policy table.
    """

    def __init__(self, registry: Mapping[Role, CapabilityProfile] = ROLE_CAPABILITIES):
        self.registry = registry

    def profile_for(self, role) -> CapabilityProfile:
        return _registry_profile_for(role, self.registry)

    def _profile(self, actor: Actor | None) -> CapabilityProfile:
        if actor is None:
            return NO_CAPABILITIES
        return self.profile_for(actor.role)

    # ── Role-only ──

    def can_perform(self, actor: Actor | None, action) -> bool:
        if actor is None:
            return False
        return profile_permits(actor, self._profile(actor), action)

    # ── Per-agreement ──

    def can_view(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        return scope.can_view(actor, self._profile(actor), agreement)

    def can_edit(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        profile = self._profile(actor)
        if not profile_permits(actor, profile, AgreementAction.EDIT):
            return False
        if not is_editable(agreement.status) or is_immutable(agreement.status):
            return False
        if is_platform_role(actor.role):
            return False
        # PARTY_TO never edits: parties sign, they do not author.
        return EDIT_RULES.get(profile.view_scope, _deny)(actor, agreement)

    def can_delete(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        profile = self._profile(actor)
        if not profile_permits(actor, profile, AgreementAction.DELETE):
            return False
        if not is_deletable(agreement.status) or agreement.has_been_signed:
            return False
        return DELETE_RULES.get(profile.view_scope, _deny)(actor, agreement)

    def can_approve(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        profile = self._profile(actor)
        if not profile_permits(actor, profile, AgreementAction.APPROVE):
            return False
        if agreement.status in (AgreementStatus.COMPLETED, AgreementStatus.REJECTED):
            return False
        return APPROVE_RULES.get(profile.view_scope, _allow)(actor, agreement)

    def can_cancel(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        profile = self._profile(actor)
        if not profile_permits(actor, profile, AgreementAction.CANCEL):
            return False
        if agreement.status == AgreementStatus.COMPLETED:
            return False
        return CANCEL_RULES.get(profile.view_scope, _allow)(actor, agreement)

    def can_send_for_signature(self, actor: Actor | None, agreement: Agreement | None) -> bool:
        if actor is None or agreement is None:
            return False
        return (
            self.can_perform(actor, AgreementAction.SEND_FOR_SIGNATURE)
            and agreement.status == AgreementStatus.DRAFT
        )

    def can_sign(self, actor: Actor | None, agreement: Agreement | None, signature_type) -> bool:
        if actor is None or agreement is None:
            return False
        return _can_sign(actor, self._profile(actor), agreement, signature_type)

    def signature_types_for(
        self, actor: Actor | None, agreement: Agreement | None,
    ) -> frozenset[SignatureType]:
        if actor is None or agreement is None:
            return frozenset()
        return _signature_types_for(actor, self._profile(actor), agreement)

    def available_actions(
        self, actor: Actor | None, agreement: Agreement | None,
    ) -> frozenset[AgreementAction]:
        """Set of actions the actor may take on the agreement right now."""
        if actor is None or agreement is None:
            return frozenset()

        checks = (
            (AgreementAction.VIEW, self.can_view),
            (AgreementAction.EDIT, self.can_edit),
            (AgreementAction.DELETE, self.can_delete),
            (AgreementAction.APPROVE, self.can_approve),
            (AgreementAction.CANCEL, self.can_cancel),
        )
        actions = [action for action, check in checks if check(actor, agreement)]

        profile = self._profile(actor)
        if any(_can_sign(actor, profile, agreement, t) for t in profile.signable_types):
            actions.append(AgreementAction.SIGN)
        if self.can_send_for_signature(actor, agreement):
            actions.append(AgreementAction.SEND_FOR_SIGNATURE)

        return frozenset(actions)

    # ── Summaries ──

    def permissions_summary(self, actor: Actor | None) -> PermissionsSummary:
        if actor is None:
            return PermissionsSummary(role="")
        return PermissionsSummary(
            role=str(getattr(actor.role, "value", actor.role)),
            can_view=self.can_perform(actor, AgreementAction.VIEW),
            can_create=self.can_perform(actor, AgreementAction.CREATE),
            can_edit=self.can_perform(actor, AgreementAction.EDIT),
            can_delete=self.can_perform(actor, AgreementAction.DELETE),
            can_sign=self.can_perform(actor, AgreementAction.SIGN),
            can_approve=self.can_perform(actor, AgreementAction.APPROVE),
            can_reject=self.can_perform(actor, AgreementAction.REJECT),
            can_cancel=self.can_perform(actor, AgreementAction.CANCEL),
            can_send_for_signature=self.can_perform(actor, AgreementAction.SEND_FOR_SIGNATURE),
            is_platform_role=is_platform_role(actor.role),
        )

    def agreement_flags(
        self, actor: Actor | None, agreement: Agreement | None,
    ) -> AgreementActionFlags:
        if actor is None or agreement is None:
            return AgreementActionFlags()
        return AgreementActionFlags(
            can_view=self.can_view(actor, agreement),
            can_edit=self.can_edit(actor, agreement),
            can_delete=self.can_delete(actor, agreement),
            can_sign=self.can_perform(actor, AgreementAction.SIGN),
            can_sign_as_tenant=self.can_sign(actor, agreement, SignatureType.TENANT),
            can_sign_as_owner=self.can_sign(actor, agreement, SignatureType.OWNER),
            can_sign_as_agency=self.can_sign(actor, agreement, SignatureType.AGENCY),
            can_sign_as_broker=self.can_sign(actor, agreement, SignatureType.BROKER),
            can_approve=self.can_approve(actor, agreement),
            can_cancel=self.can_cancel(actor, agreement),
            can_send_for_signature=self.can_send_for_signature(actor, agreement),
            available_actions=self.available_actions(actor, agreement),
        )


default_policy = AgreementPolicy()

profile_for = default_policy.profile_for
can_perform = default_policy.can_perform
can_view = default_policy.can_view
can_edit = default_policy.can_edit
can_delete = default_policy.can_delete
can_approve = default_policy.can_approve
can_cancel = default_policy.can_cancel
can_send_for_signature = default_policy.can_send_for_signature
can_sign = default_policy.can_sign
signature_types_for = default_policy.signature_types_for
available_actions = default_policy.available_actions
permissions_summary = default_policy.permissions_summary
agreement_flags = default_policy.agreement_flags
