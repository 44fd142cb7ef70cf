"""
AgreementPermissionContext — the "who is asking, what may they do to this
agreement" object handed to request handlers and view code.

It binds one actor (possibly None for an anonymous caller) to a policy.
`can()` answers questions; `require()` turns a denial into a 403 for
server-side handlers. With no actor every answer is False.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import HTTPException

from rentflow.agreements.models import Actor, Agreement
from rentflow.agreements.policy import (
    AgreementActionFlags,
    AgreementPolicy,
    PermissionsSummary,
    default_policy,
)
from rentflow.auth.permissions import AgreementAction
from rentflow.config import settings
from rentflow.enums import coerce_enum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgreementPermissionContext:
    actor: Actor | None = None
    policy: AgreementPolicy = field(default=default_policy, repr=False)

    def can(
        self,
        action,
        agreement: Agreement | None = None,
        signature_type=None,
    ) -> bool:
        """
        Decide `action` for the bound actor.

        Without an agreement only the role is consulted. CREATE and REJECT
        are always role-level questions. SIGN without a signature type
        means "can sign in any slot".
        """
        if self.actor is None:
            return False
        action = coerce_enum(AgreementAction, action)
        if action is None:
            return False
        if agreement is None or action in (AgreementAction.CREATE, AgreementAction.REJECT):
            return self.policy.can_perform(self.actor, action)

        if action == AgreementAction.SIGN:
            if signature_type is None:
                return bool(self.policy.signature_types_for(self.actor, agreement))
            return self.policy.can_sign(self.actor, agreement, signature_type)

        checks = {
            AgreementAction.VIEW: self.policy.can_view,
            AgreementAction.EDIT: self.policy.can_edit,
            AgreementAction.DELETE: self.policy.can_delete,
            AgreementAction.APPROVE: self.policy.can_approve,
            AgreementAction.CANCEL: self.policy.can_cancel,
            AgreementAction.SEND_FOR_SIGNATURE: self.policy.can_send_for_signature,
        }
        return checks[action](self.actor, agreement)

    def require(
        self,
        action,
        agreement: Agreement | None = None,
        signature_type=None,
    ) -> None:
        """Raise 403 if the bound actor may not perform `action`."""
        allowed = self.can(action, agreement, signature_type)
        self._log_decision(action, agreement, allowed)
        if not allowed:
            label = getattr(action, "value", action)
            raise HTTPException(
                status_code=403,
                detail=f"Not allowed to {label} this agreement",
            )

    def require_any(self, *actions, agreement: Agreement | None = None) -> None:
        """Raise 403 if the bound actor may perform NONE of the given actions."""
        needed = ", ".join(str(getattr(a, "value", a)) for a in actions)
        allowed = any(self.can(action, agreement) for action in actions)
        self._log_decision(needed, agreement, allowed)
        if not allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Not allowed: requires one of [{needed}]",
            )

    def available_actions(self, agreement: Agreement | None) -> frozenset[AgreementAction]:
        return self.policy.available_actions(self.actor, agreement)

    def flags(self, agreement: Agreement | None) -> AgreementActionFlags:
        return self.policy.agreement_flags(self.actor, agreement)

    def summary(self) -> PermissionsSummary:
        return self.policy.permissions_summary(self.actor)

    @property
    def subject(self) -> str:
        """Identity string for audit logging."""
        if self.actor is None:
            return "anonymous"
        role = getattr(self.actor.role, "value", self.actor.role) or "unknown"
        return f"{role}:{self.actor.id}"

    def _log_decision(self, action, agreement: Agreement | None, allowed: bool) -> None:
        extra = {
            "actor": self.subject,
            "action": str(getattr(action, "value", action)),
            "agreement_id": agreement.id if agreement is not None else None,
        }
        if not allowed:
            logger.warning(
                "Denied %s on agreement %s for %s",
                extra["action"], extra["agreement_id"], extra["actor"],
                extra=extra,
            )
        elif settings.log_decisions:
            logger.debug(
                "Allowed %s on agreement %s for %s",
                extra["action"], extra["agreement_id"], extra["actor"],
                extra=extra,
            )
