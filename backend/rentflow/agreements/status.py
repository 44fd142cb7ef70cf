"""
Status gates — what an agreement's lifecycle status alone allows.

    DRAFT ──send──> AWAITING_SIGNATURE ──all signed──> SIGNED ──approve──> COMPLETED
                                                         └────reject───> REJECTED
    {DRAFT, AWAITING_SIGNATURE} ──cancel──> CANCELED

CANCELED is terminal but is not in IMMUTABLE_STATUSES; approve and cancel
checks look at COMPLETED/REJECTED explicitly.
"""

from rentflow.enums import AgreementStatus, coerce_enum

EDITABLE_STATUSES: frozenset[AgreementStatus] = frozenset({
    AgreementStatus.DRAFT,
    AgreementStatus.AWAITING_SIGNATURE,
})

DELETABLE_STATUSES: frozenset[AgreementStatus] = frozenset({
    AgreementStatus.DRAFT,
})

SIGNABLE_STATUSES: frozenset[AgreementStatus] = frozenset({
    AgreementStatus.DRAFT,
    AgreementStatus.AWAITING_SIGNATURE,
})

SIGNED_STATUSES: frozenset[AgreementStatus] = frozenset({
    AgreementStatus.SIGNED,
    AgreementStatus.COMPLETED,
})

IMMUTABLE_STATUSES: frozenset[AgreementStatus] = frozenset({
    AgreementStatus.COMPLETED,
    AgreementStatus.REJECTED,
})


def _in(status, statuses: frozenset[AgreementStatus]) -> bool:
    return coerce_enum(AgreementStatus, status) in statuses


def is_editable(status) -> bool:
    return _in(status, EDITABLE_STATUSES)


def is_deletable(status) -> bool:
    return _in(status, DELETABLE_STATUSES)


def is_signable(status) -> bool:
    return _in(status, SIGNABLE_STATUSES)


def is_signed(status) -> bool:
    """The agreement carries every required signature (SIGNED or later)."""
    return _in(status, SIGNED_STATUSES)


def is_immutable(status) -> bool:
    return _in(status, IMMUTABLE_STATUSES)
