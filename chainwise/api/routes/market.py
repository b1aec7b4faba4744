from fastapi import APIRouter, Depends, HTTPException

from chainwise.api.dependencies import get_market_data_service
from chainwise.models.market import CryptoPrice, MarketSnapshot
from chainwise.services.market_data_service import MarketDataService

router = APIRouter()


@router.get("/api/market/snapshot", response_model=MarketSnapshot)
async def market_snapshot(
    market_data: MarketDataService = Depends(get_market_data_service),
):
    return await market_data.get_current_market_data()


@router.get("/api/market/price/{symbol}", response_model=CryptoPrice)
async def crypto_price(
    symbol: str, market_data: MarketDataService = Depends(get_market_data_service)
):
    price = await market_data.get_crypto_price(symbol)
    if price is None:
        raise HTTPException(status_code=404, detail=f"No price available for {symbol}")
    return price
