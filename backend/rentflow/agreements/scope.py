"""
Scope resolution — who stands in which relationship to an agreement.

The small predicates here are the building blocks of every check in the
policy. Role-specific exceptions (the broker who sees agreements on the
properties they broker, the agency manager who loses edit rights once
parties start signing) are named predicates of their own rather than
branches buried inside the scope rules.

Identifiers only match when both sides are non-empty.
"""

from typing import Callable

from rentflow.agreements.models import Actor, Agreement
from rentflow.auth.permissions import ViewScope
from rentflow.auth.roles import CapabilityProfile, Role
from rentflow.enums import AgreementStatus


def _same(left: str | None, right: str | None) -> bool:
    return bool(left) and left == right


# ── Relationship predicates ──────────────────────────────────────────────────

def is_creator(actor: Actor, agreement: Agreement) -> bool:
    return _same(actor.id, agreement.created_by)


def is_linked_broker(actor: Actor, agreement: Agreement) -> bool:
    """The actor brokers the property the agreement is about."""
    prop = agreement.linked_property
    return prop is not None and _same(actor.id, prop.broker_id)


def is_named_tenant(actor: Actor, agreement: Agreement) -> bool:
    prop = agreement.linked_property
    return _same(actor.id, agreement.tenant_id) or (
        prop is not None and _same(actor.id, prop.tenant_id)
    )


def is_named_owner(actor: Actor, agreement: Agreement) -> bool:
    prop = agreement.linked_property
    return _same(actor.id, agreement.owner_id) or (
        prop is not None and _same(actor.id, prop.owner_id)
    )


def is_party_to(actor: Actor, agreement: Agreement) -> bool:
    """The actor is named as tenant or owner, directly or on the linked property."""
    return is_named_tenant(actor, agreement) or is_named_owner(actor, agreement)


def shares_agency(actor: Actor, agreement: Agreement) -> bool:
    return _same(actor.agency_id, agreement.agency_id)


# ── Role-specific exceptions ─────────────────────────────────────────────────

def broker_sees_linked_property(actor: Actor, agreement: Agreement) -> bool:
    """Brokers also see agreements someone else created on properties they broker."""
    return actor.role == Role.BROKER and is_linked_broker(actor, agreement)


def agency_manager_edit_locked(actor: Actor, agreement: Agreement) -> bool:
    """
    Agency managers (not directors) stop editing once parties have signed.

    In DRAFT any signature locks the agreement. Once it is awaiting
    signatures the manager may keep correcting it until both the tenant
    and the owner have signed.
    """
    if actor.role != Role.AGENCY_MANAGER:
        return False
    if agreement.status == AgreementStatus.AWAITING_SIGNATURE:
        return agreement.signatures.parties_complete
    return agreement.has_been_signed


# ── View scope rules ─────────────────────────────────────────────────────────

def _view_all(actor: Actor, agreement: Agreement) -> bool:
    return True


def _view_own_created(actor: Actor, agreement: Agreement) -> bool:
    return is_creator(actor, agreement) or broker_sees_linked_property(actor, agreement)


def _view_none(actor: Actor, agreement: Agreement) -> bool:
    return False


VIEW_RULES: dict[ViewScope, Callable[[Actor, Agreement], bool]] = {
    ViewScope.ALL: _view_all,
    ViewScope.AGENCY: shares_agency,
    ViewScope.OWN_CREATED: _view_own_created,
    ViewScope.PARTY_TO: is_party_to,
    ViewScope.NONE: _view_none,
}


def can_view(actor: Actor, profile: CapabilityProfile, agreement: Agreement) -> bool:
    """Whether the profile's view scope lets the actor see this agreement."""
    rule = VIEW_RULES.get(profile.view_scope, _view_none)
    return rule(actor, agreement)
