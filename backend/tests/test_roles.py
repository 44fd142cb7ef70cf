"""Tests for the role capability registry."""

import logging

import pytest

from rentflow.auth.permissions import ViewScope
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
from rentflow.enums import SignatureType


# ── Registry contents ─────────────────────────────────────────────────────────

class TestRegistry:
    def test_every_role_has_a_profile(self):
        assert set(ROLE_CAPABILITIES) == set(Role)

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            ROLE_CAPABILITIES[Role.TENANT] = NO_CAPABILITIES

    def test_profiles_are_frozen(self):
        with pytest.raises(Exception):
            ROLE_CAPABILITIES[Role.TENANT].can_edit = True

    @pytest.mark.parametrize("role", [Role.CEO, Role.ADMIN, Role.PLATFORM_MANAGER, Role.LEGAL_AUDITOR])
    def test_platform_readers_see_everything_and_do_nothing(self, role):
        profile = profile_for(role)
        assert profile.view_scope == ViewScope.ALL
        assert not any([
            profile.can_create, profile.can_edit, profile.can_delete, profile.can_sign,
            profile.can_approve, profile.can_reject, profile.can_cancel,
            profile.can_send_for_signature,
        ])
        assert profile.signable_types == frozenset()

    def test_agency_director_signs_as_agency_and_owner(self):
        profile = profile_for(Role.AGENCY_DIRECTOR)
        assert profile.view_scope == ViewScope.AGENCY
        assert profile.signable_types == {SignatureType.AGENCY, SignatureType.OWNER}
        assert profile.can_approve and profile.can_reject and profile.can_cancel

    def test_agency_manager_signs_only_as_agency(self):
        assert profile_for(Role.AGENCY_MANAGER).signable_types == {SignatureType.AGENCY}

    def test_broker_requires_credential(self):
        profile = profile_for(Role.BROKER)
        assert profile.view_scope == ViewScope.OWN_CREATED
        assert profile.requires_professional_credential
        assert profile.signable_types == {SignatureType.BROKER, SignatureType.WITNESS}
        assert not profile.can_approve
        assert not profile.can_reject
        assert profile.can_cancel

    def test_independent_owner_acts_as_own_agency(self):
        profile = profile_for(Role.INDEPENDENT_OWNER)
        assert profile.view_scope == ViewScope.OWN_CREATED
        assert profile.signable_types == {SignatureType.OWNER, SignatureType.AGENCY}
        assert profile.can_approve

    @pytest.mark.parametrize("role, slot", [
        (Role.TENANT, SignatureType.TENANT),
        (Role.PROPERTY_OWNER_LINKED, SignatureType.OWNER),
    ])
    def test_parties_sign_their_own_slot_only(self, role, slot):
        profile = profile_for(role)
        assert profile.view_scope == ViewScope.PARTY_TO
        assert profile.signable_types == {slot}
        assert not profile.can_edit

    def test_building_manager_can_sign_but_has_no_slot(self):
        profile = profile_for(Role.BUILDING_MANAGER)
        assert profile.can_sign
        assert profile.signable_types == frozenset()

    def test_sales_representative_has_no_access(self):
        assert profile_for(Role.SALES_REPRESENTATIVE) == NO_CAPABILITIES

    def test_api_client_reads_its_agency(self):
        profile = profile_for(Role.API_CLIENT)
        assert profile.view_scope == ViewScope.AGENCY
        assert not profile.can_sign

    @pytest.mark.parametrize("role", list(Role))
    def test_non_signers_list_no_signature_types(self, role):
        profile = profile_for(role)
        if not profile.can_sign:
            assert profile.signable_types == frozenset()


# ── Fail-closed fallback ──────────────────────────────────────────────────────

class TestFallback:
    @pytest.mark.parametrize("role", ["", "GHOST", "agency_admin_typo", None, 42, object()])
    def test_unknown_role_gets_no_capabilities(self, role):
        profile = profile_for(role)
        assert profile is NO_CAPABILITIES
        assert profile.view_scope == ViewScope.NONE
        assert profile.signable_types == frozenset()
        assert not any([
            profile.can_create, profile.can_edit, profile.can_delete, profile.can_sign,
            profile.can_approve, profile.can_reject, profile.can_cancel,
            profile.can_send_for_signature, profile.requires_professional_credential,
        ])

    def test_unknown_role_is_logged_at_debug(self, capture_rentflow_logs):
        profile_for("GHOST")
        assert any(
            r.levelno == logging.DEBUG and "GHOST" in r.getMessage()
            for r in capture_rentflow_logs.records
        )

    def test_injected_registry_missing_a_role_denies(self):
        registry = {Role.TENANT: ROLE_CAPABILITIES[Role.TENANT]}
        assert profile_for(Role.BROKER, registry) is NO_CAPABILITIES
        assert profile_for(Role.TENANT, registry) is ROLE_CAPABILITIES[Role.TENANT]


# ── Parsing ───────────────────────────────────────────────────────────────────

class TestParseRole:
    @pytest.mark.parametrize("raw, expected", [
        ("AGENCY_ADMIN", Role.AGENCY_DIRECTOR),
        ("agency-director", Role.AGENCY_DIRECTOR),
        ("AGENCY_DIRECTOR", Role.AGENCY_DIRECTOR),
        ("INQUILINO", Role.TENANT),
        ("tenant", Role.TENANT),
        ("PROPRIETARIO", Role.PROPERTY_OWNER_LINKED),
        ("property-owner-linked", Role.PROPERTY_OWNER_LINKED),
        ("REPRESENTATIVE", Role.SALES_REPRESENTATIVE),
        ("sales-representative", Role.SALES_REPRESENTATIVE),
        (Role.BROKER, Role.BROKER),
    ])
    def test_wire_values_and_names(self, raw, expected):
        assert parse_role(raw) is expected

    @pytest.mark.parametrize("raw", ["", "nobody", None, 7])
    def test_unknown(self, raw):
        assert parse_role(raw) is None

    def test_platform_roles(self):
        assert PLATFORM_ROLES == {
            Role.CEO, Role.ADMIN, Role.PLATFORM_MANAGER,
            Role.LEGAL_AUDITOR, Role.SALES_REPRESENTATIVE,
        }
        assert is_platform_role("CEO")
        assert is_platform_role(Role.LEGAL_AUDITOR)
        assert not is_platform_role(Role.AGENCY_DIRECTOR)
        assert not is_platform_role("GHOST")


# ── Profile invariant ─────────────────────────────────────────────────────────

class TestCapabilityProfile:
    def test_non_signer_with_signature_types_is_rejected(self):
        with pytest.raises(ValueError):
            CapabilityProfile(can_sign=False, signable_types=frozenset({SignatureType.OWNER}))

    def test_signature_types_are_frozen(self):
        profile = CapabilityProfile(can_sign=True, signable_types={SignatureType.TENANT})
        assert isinstance(profile.signable_types, frozenset)
