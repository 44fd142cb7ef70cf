"""Shared test fixtures for policy tests."""

import logging

import pytest

from rentflow.agreements.models import Actor, Agreement, LinkedProperty, SignatureRecord
from rentflow.auth.roles import Role
from rentflow.enums import AgreementStatus


AGENCY_ID = "agency-1"
OTHER_AGENCY_ID = "agency-2"


def build_actor(role=Role.TENANT, id: str = "user-1", **kwargs) -> Actor:
    return Actor(id=id, role=role, **kwargs)


def build_agreement(
    status=AgreementStatus.DRAFT,
    *,
    signed: tuple[str, ...] = (),
    linked_property: dict | None = None,
    **kwargs,
) -> Agreement:
    """Agreement with sensible defaults; `signed` lists the slots already signed."""
    fields = {
        "id": "agr-1",
        "status": status,
        "agency_id": AGENCY_ID,
        "property_id": "prop-1",
        "created_by": "creator-1",
        "tenant_id": "tenant-1",
        "owner_id": "owner-1",
    }
    fields.update(kwargs)
    fields["signatures"] = {slot: SignatureRecord(signature="sig") for slot in signed}
    if linked_property is not None:
        fields["linked_property"] = LinkedProperty(**linked_property)
    return Agreement(**fields)


@pytest.fixture
def make_actor():
    return build_actor


@pytest.fixture
def make_agreement():
    return build_agreement


@pytest.fixture
def director() -> Actor:
    return build_actor(Role.AGENCY_DIRECTOR, id="director-1", agency_id=AGENCY_ID)


@pytest.fixture
def manager() -> Actor:
    return build_actor(Role.AGENCY_MANAGER, id="manager-1", agency_id=AGENCY_ID)


@pytest.fixture
def broker() -> Actor:
    return build_actor(Role.BROKER, id="broker-1", professional_credential_id="CRECI-123")


@pytest.fixture
def tenant() -> Actor:
    return build_actor(Role.TENANT, id="tenant-1")


@pytest.fixture
def owner() -> Actor:
    return build_actor(Role.PROPERTY_OWNER_LINKED, id="owner-1")


@pytest.fixture
def independent_owner() -> Actor:
    return build_actor(Role.INDEPENDENT_OWNER, id="indep-1")


@pytest.fixture
def capture_rentflow_logs(caplog):
    """caplog at DEBUG for the rentflow loggers."""
    caplog.set_level(logging.DEBUG, logger="rentflow")
    return caplog
