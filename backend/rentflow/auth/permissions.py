"""
Agreement permission vocabulary — the actions a caller can ask about and
the breadth of agreements a role may see.

Every authorization question in the system is phrased as
"may this actor perform AgreementAction X (on this agreement)?".
ViewScope is the coarse gate that decides which agreements a role can
enumerate at all, before any per-action check runs.
"""

from enum import Enum


class AgreementAction(str, Enum):
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    SIGN = "sign"
    SEND_FOR_SIGNATURE = "send_for_signature"
    APPROVE = "approve"
    REJECT = "reject"
    CANCEL = "cancel"


class ViewScope(str, Enum):
    ALL = "all"                    # platform-wide read access
    AGENCY = "agency"              # agreements of the actor's agency
    OWN_CREATED = "own_created"    # agreements the actor created
    PARTY_TO = "party_to"          # agreements naming the actor as tenant/owner
    NONE = "none"
