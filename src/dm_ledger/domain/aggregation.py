"""Market sentiment from a snapshot of positions, without decryption.

Only side hints of non-settled positions are counted. Encrypted amounts are
never touched, so the aggregate is a head count, not a volume.
"""

from collections.abc import Iterable

from src.dm_common.enums import PositionStatus, Side
from src.dm_ledger.domain.models import EncryptedPosition, MarketAggregate

DEFAULT_PROBABILITY = 0.5


def compute_aggregate(
    market_address: str, positions: Iterable[EncryptedPosition]
) -> MarketAggregate:
    yes = 0
    no = 0
    last_updated = None
    for p in positions:
        if p.status == PositionStatus.SETTLED:
            continue
        if p.side_hint == Side.YES:
            yes += 1
        else:
            no += 1
        if last_updated is None or p.submitted_at > last_updated:
            last_updated = p.submitted_at

    total = yes + no
    if total == 0:
        yes_prob = no_prob = DEFAULT_PROBABILITY
    else:
        yes_prob = yes / total
        no_prob = 1.0 - yes_prob

    return MarketAggregate(
        market_address=market_address,
        total_positions=total,
        yes_positions=yes,
        no_positions=no,
        estimated_yes_probability=yes_prob,
        estimated_no_probability=no_prob,
        last_updated=last_updated,
    )
