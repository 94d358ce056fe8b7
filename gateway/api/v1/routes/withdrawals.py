import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from gateway.api.deps import get_vita_client
from gateway.api.v1.routes.errors import upstream_error
from gateway.client.errors import VitaAPIError
from gateway.client.vita import VitaClient
from gateway.schemas.transaction import TransactionRequest
from gateway.services import withdrawals

logger = logging.getLogger(__name__)

router = APIRouter(tags=["withdrawals"])


@router.get("/withdrawal-rules")
async def default_withdrawal_rules(client: VitaClient = Depends(get_vita_client)):
    try:
        rules = await withdrawals.get_withdrawal_rules(client)
    except VitaAPIError as exc:
        raise upstream_error(exc)
    return {"success": True, "country": withdrawals.DEFAULT_COUNTRY, "rules": rules}


@router.get("/withdrawal-rules/{country}")
async def withdrawal_rules(country: str, client: VitaClient = Depends(get_vita_client)):
    try:
        rules = await withdrawals.get_withdrawal_rules_by_country(client, country)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except VitaAPIError as exc:
        logger.error("GET /withdrawal-rules/%s failed: %s", country, exc.message)
        raise upstream_error(exc)
    normalized = country.strip().upper()
    if rules is None:
        raise HTTPException(status_code=404, detail=f"no withdrawal rules for {normalized}")
    return {"success": True, "country": normalized, "rules": rules}


@router.get("/transactions")
async def list_transactions(request: Request, client: VitaClient = Depends(get_vita_client)):
    filters = dict(request.query_params)
    try:
        response = await withdrawals.list_transactions(client, filters or None)
    except VitaAPIError as exc:
        raise upstream_error(exc)
    return {"success": True, "data": response}


@router.get("/transactions/{transaction_id}")
async def get_transaction(transaction_id: str, client: VitaClient = Depends(get_vita_client)):
    try:
        transaction = await withdrawals.get_transaction(client, transaction_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except VitaAPIError as exc:
        raise upstream_error(exc)
    return {"success": True, "transaction": transaction}


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
async def create_payout(payload: TransactionRequest, client: VitaClient = Depends(get_vita_client)):
    body = payload.provider_body()
    logger.info("POST /transactions amount=%s", body.get("amount"))
    try:
        transaction = await withdrawals.create_payout(client, body)
    except VitaAPIError as exc:
        logger.error("POST /transactions failed: %s", exc.message)
        raise upstream_error(exc)
    return {"success": True, "transaction": transaction}


@router.post("/withdraw", status_code=status.HTTP_201_CREATED)
async def create_withdrawal(payload: TransactionRequest, client: VitaClient = Depends(get_vita_client)):
    body = payload.provider_body()
    logger.info("POST /withdraw country=%s currency=%s", body.get("country"), body.get("currency"))
    try:
        transaction = await withdrawals.create_withdrawal(client, body)
    except VitaAPIError as exc:
        logger.error("POST /withdraw failed: %s", exc.message)
        raise upstream_error(exc)
    return {"success": True, "transaction": transaction}
