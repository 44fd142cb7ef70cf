"""
Pydantic models for the inputs of every authorization check.

Both models are frozen: the engine only reads them. They accept the
backend's camelCase payloads as well as snake_case keyword arguments,
coerce numeric ids to strings, and keep unknown role/status strings
as-is so that the engine can deny them instead of the parser failing.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from rentflow.auth.roles import Role, parse_role
from rentflow.enums import AgreementStatus, coerce_enum

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    coerce_numbers_to_str=True,
    extra="ignore",
)

# Flat payload keys the backend uses for signatures, by slot.
_FLAT_SIGNATURE_KEYS = {
    "tenant": ("tenantSignature", "tenant_signature", "tenantSignedAt", "tenant_signed_at"),
    "owner": ("ownerSignature", "owner_signature", "ownerSignedAt", "owner_signed_at"),
    "agency": ("agencySignature", "agency_signature", "agencySignedAt", "agency_signed_at"),
}


class Actor(BaseModel):
    """The authenticated identity asking for a decision."""
    model_config = _MODEL_CONFIG

    id: str
    role: Role | str = ""
    agency_id: str | None = None
    broker_id: str | None = None
    professional_credential_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "professional_credential_id", "professionalCredentialId", "creci",
        ),
    )

    @field_validator("role", mode="before")
    @classmethod
    def _known_role(cls, value):
        if value is None:
            return ""
        return parse_role(value) or value

    @property
    def has_credential(self) -> bool:
        return bool(self.professional_credential_id)


class LinkedProperty(BaseModel):
    """Denormalized snapshot of the property the agreement is about."""
    model_config = _MODEL_CONFIG

    owner_id: str | None = None
    agency_id: str | None = None
    broker_id: str | None = None
    tenant_id: str | None = None


class SignatureRecord(BaseModel):
    model_config = _MODEL_CONFIG

    signature: str | None = None
    signed_at: datetime | None = None


class AgreementSignatures(BaseModel):
    """Signatures collected so far; a present record means that party signed."""
    model_config = _MODEL_CONFIG

    tenant: SignatureRecord | None = None
    owner: SignatureRecord | None = None
    agency: SignatureRecord | None = None

    @property
    def any_present(self) -> bool:
        return self.tenant is not None or self.owner is not None or self.agency is not None

    @property
    def parties_complete(self) -> bool:
        """Both tenant and owner have signed."""
        return self.tenant is not None and self.owner is not None


class Agreement(BaseModel):
    """The settlement agreement an actor wants to act on."""
    model_config = _MODEL_CONFIG

    id: str
    status: AgreementStatus | str
    agency_id: str | None = None
    property_id: str = ""
    contract_id: str | None = None
    tenant_id: str | None = None
    owner_id: str | None = None
    created_by: str = ""
    signatures: AgreementSignatures = Field(default_factory=AgreementSignatures)
    linked_property: LinkedProperty | None = Field(
        default=None,
        validation_alias=AliasChoices("linked_property", "linkedProperty", "property"),
    )

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_signatures(cls, data):
        """Move `tenantSignature`/`tenantSignedAt`-style keys into `signatures`."""
        if not isinstance(data, dict):
            return data
        if not any(key in data for keys in _FLAT_SIGNATURE_KEYS.values() for key in keys):
            return data

        data = dict(data)
        signatures = data.get("signatures") or {}
        if isinstance(signatures, BaseModel):
            signatures = signatures.model_dump()
        signatures = dict(signatures)

        for slot, (camel, snake, camel_at, snake_at) in _FLAT_SIGNATURE_KEYS.items():
            payload = data.pop(camel, None) or data.pop(snake, None)
            signed_at = data.pop(camel_at, None) or data.pop(snake_at, None)
            # An empty signature string means the slot is still open.
            if (payload or signed_at) and signatures.get(slot) is None:
                signatures[slot] = {"signature": payload or None, "signed_at": signed_at}

        data["signatures"] = signatures
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        if value is None:
            return ""
        return coerce_enum(AgreementStatus, value) or value

    @property
    def has_been_signed(self) -> bool:
        """Any of the tenant, owner or agency signatures is present."""
        return self.signatures.any_present
