import logging

from fastapi import APIRouter, Depends, HTTPException

from gateway.api.deps import get_vita_client
from gateway.api.v1.routes.errors import upstream_error
from gateway.client.errors import VitaAPIError
from gateway.client.vita import VitaClient
from gateway.services import assets

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assets"])


@router.get("/assets")
async def list_assets(client: VitaClient = Depends(get_vita_client)):
    try:
        prices = await assets.get_crypto_prices(client)
    except VitaAPIError as exc:
        logger.error("GET /assets failed: %s", exc.message)
        raise upstream_error(exc)
    return {"success": True, "assets": prices}


@router.get("/payment-methods/{country}")
async def payment_methods(country: str, client: VitaClient = Depends(get_vita_client)):
    try:
        methods = await assets.get_payment_methods(client, country)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except VitaAPIError as exc:
        logger.error("GET /payment-methods/%s failed: %s", country, exc.message)
        raise upstream_error(exc)
    return {"success": True, "country": country.strip().upper(), "methods": methods}
