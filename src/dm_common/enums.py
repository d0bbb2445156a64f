"""Global enums shared by the ledger and the market register.

Wire values follow the external collaborators: encrypted value kinds use the
encryption gateway's type tags, sides use the client's lowercase tags.
"""

from enum import Enum


class EncryptedValueKind(str, Enum):
    AMOUNT = "uint256"
    SIDE = "bool"


class Side(str, Enum):
    YES = "yes"
    NO = "no"


class PositionStatus(str, Enum):
    """Forward-only: PENDING -> CONFIRMED -> SETTLED."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SETTLED = "settled"
