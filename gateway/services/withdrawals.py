import logging
import random
import time
from typing import Any

from gateway.client.errors import VitaAPIError
from gateway.client.vita import VitaClient
from gateway.security.signable import (
    CREATE_TRANSACTION,
    GET_TRANSACTION,
    LIST_TRANSACTIONS,
    WITHDRAWAL_RULES,
    normalize_country,
)
from gateway.services.assets import get_crypto_prices

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "AR"


def generate_order_id() -> str:
    return f"ret-{int(time.time() * 1000)}-{random.randrange(999999)}"


def select_country_rule(rules: Any, country: str) -> dict | None:
    if isinstance(rules, list):
        for rule in rules:
            if isinstance(rule, dict) and str(rule.get("country") or "").upper() == country:
                return rule
        return None
    if isinstance(rules, dict):
        return rules.get(country.lower()) or rules.get(country)
    return None


async def get_withdrawal_rules_by_country(client: VitaClient, country_iso: str) -> dict | None:
    country = normalize_country(country_iso)
    if not country:
        raise ValueError("country ISO code required to query withdrawal rules")
    response = await client.request(WITHDRAWAL_RULES)
    rules = response.get("rules") if isinstance(response, dict) else None
    if not rules:
        logger.warning("no withdrawal rules returned for %s", country)
        return None
    return select_country_rule(rules, country)


async def get_withdrawal_rules(client: VitaClient) -> dict | None:
    return await get_withdrawal_rules_by_country(client, DEFAULT_COUNTRY)


async def create_payout(client: VitaClient, overrides: dict | None = None):
    body = {**(overrides or {}), "order": generate_order_id()}
    logger.info("creating payout order=%s", body["order"])
    return await client.request(CREATE_TRANSACTION, body=body)


async def list_transactions(client: VitaClient, filters: dict | None = None):
    return await client.request(LIST_TRANSACTIONS, query=filters)


async def get_transaction(client: VitaClient, transaction_id: str):
    transaction_id = transaction_id.strip()
    if not transaction_id:
        raise ValueError("transaction id required")
    return await client.request(GET_TRANSACTION, params={"transaction_id": transaction_id})


async def create_withdrawal(client: VitaClient, data: dict):
    """Create a withdrawal after confirming the price feed is reachable."""
    try:
        await get_crypto_prices(client)
    except VitaAPIError as exc:
        logger.error("price validation failed before withdrawal: %s", exc.message)
        raise VitaAPIError(
            f"could not validate prices before withdrawal: {exc.message}",
            status_code=exc.status_code,
            payload=exc.payload,
        ) from exc

    payload = {"transactions_type": "withdrawal", "order": generate_order_id(), **data}
    logger.info("creating withdrawal order=%s country=%s", payload["order"], payload.get("country"))
    return await client.request(CREATE_TRANSACTION, body=payload)
