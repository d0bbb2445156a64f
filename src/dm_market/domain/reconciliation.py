"""Reconciling the indexer's duck-typed records with local state.

The indexer returns loosely shaped JSON: keys may be missing, addresses may
be nested objects rendered as strings, and the winner is a {"None"/"Some"}
union. Everything is normalised into IndexedMarket at this boundary.
"""

from typing import Any

from src.dm_market.domain.models import (
    ImpliedPrices,
    IndexedMarket,
    IndexedMarketAccount,
    parse_winning_token,
)

_NEUTRAL_PRICES = ImpliedPrices(yes=0.5, no=0.5)


def _s(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def normalize_indexed_market(raw: dict[str, Any]) -> IndexedMarket:
    account = raw.get("account")
    if not isinstance(account, dict):
        account = {}
    return IndexedMarket(
        public_key=_s(raw.get("publicKey")),
        account=IndexedMarketAccount(
            id=_s(account.get("id")),
            question=_s(account.get("question")),
            resolved=bool(account.get("resolved", False)),
            resolvable=bool(account.get("resolvable", False)),
            creator=_s(account.get("creator")),
            end_time=_s(account.get("end_time"), "0"),
            creation_time=_s(account.get("creation_time"), "0"),
            initial_liquidity=_s(account.get("initial_liquidity"), "0"),
            yes_token_mint=_s(account.get("yes_token_mint")),
            no_token_mint=_s(account.get("no_token_mint")),
            yes_token_supply_minted=_s(account.get("yes_token_supply_minted"), "0"),
            no_token_supply_minted=_s(account.get("no_token_supply_minted"), "0"),
            collateral_token=_s(account.get("collateral_token")),
            market_reserves=_s(account.get("market_reserves"), "0"),
            winning_token=parse_winning_token(account.get("winning_token_id")),
        ),
    )


def normalize_indexer_response(payload: Any) -> list[IndexedMarket]:
    """Accept a bare list or a {"count", "data"} envelope."""
    if isinstance(payload, list):
        records = payload
    elif isinstance(payload, dict) and isinstance(payload.get("data"), list):
        records = payload["data"]
    else:
        return []
    return [
        normalize_indexed_market(r)
        for r in records
        if isinstance(r, dict) and r.get("publicKey")
    ]


def is_dark_market(market: IndexedMarket, dark_collateral_mint: str) -> bool:
    return market.account.collateral_token == dark_collateral_mint


def _parse_hex_supply(value: str) -> int:
    try:
        return max(int(value, 16), 0)
    except ValueError:
        return 0


def implied_prices(market: IndexedMarket) -> ImpliedPrices:
    """AMM-style prices: YES costs more as NO supply grows, and vice versa.

    Empty supplies count as 1 each; with total <= 2 the market is neutral.
    """
    yes_supply = _parse_hex_supply(market.account.yes_token_supply_minted) or 1
    no_supply = _parse_hex_supply(market.account.no_token_supply_minted) or 1
    total = yes_supply + no_supply
    if total <= 2:
        return _NEUTRAL_PRICES
    return ImpliedPrices(
        yes=round(no_supply / total, 2),
        no=round(yes_supply / total, 2),
    )
