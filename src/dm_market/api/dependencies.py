"""FastAPI dependencies for the market register and catalog."""

from typing import Annotated

from fastapi import Depends, Request

from config.settings import settings
from src.dm_market.application.service import MarketCatalogService
from src.dm_market.domain.register import MarketRegister
from src.dm_market.domain.repository import MarketIndexerProtocol


def get_register(request: Request) -> MarketRegister:
    return request.app.state.register


def get_indexer(request: Request) -> MarketIndexerProtocol:
    return request.app.state.indexer


def get_catalog_service(
    register: Annotated[MarketRegister, Depends(get_register)],
    indexer: Annotated[MarketIndexerProtocol, Depends(get_indexer)],
) -> MarketCatalogService:
    return MarketCatalogService(register, indexer, settings.DARK_COLLATERAL_MINT)
