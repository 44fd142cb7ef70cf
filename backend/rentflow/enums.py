"""
Shared enumerations — lifecycle statuses and signature slots.

Wire values are the identifiers the backend sends. `coerce_enum` also
accepts member names ("awaiting-signature", "AWAITING_SIGNATURE") so that
callers holding either form get the same answer; anything else is None.
"""

from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value) -> E | None:
    """Resolve a member from a member, wire value or member name; None if unknown."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        pass
    name = value.strip().upper().replace("-", "_").replace(" ", "_")
    return enum_cls.__members__.get(name)


class AgreementStatus(str, Enum):
    DRAFT = "RASCUNHO"
    AWAITING_SIGNATURE = "AGUARDANDO_ASSINATURA"
    SIGNED = "ASSINADO"
    COMPLETED = "CONCLUIDO"
    REJECTED = "REJEITADO"
    CANCELED = "CANCELADO"


class SignatureType(str, Enum):
    """Party slot a signature occupies on an agreement."""
    TENANT = "tenant"
    OWNER = "owner"
    AGENCY = "agency"
    BROKER = "broker"
    WITNESS = "witness"
