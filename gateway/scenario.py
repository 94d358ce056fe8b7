"""Walk the withdrawal flow against the configured provider.

Usage:
  python -m gateway.scenario
"""
import asyncio
import json
import logging
import sys

from gateway.client.errors import VitaAPIError
from gateway.client.vita import VitaClient
from gateway.security.errors import MissingCredentialError
from gateway.security.headers import RequestAuthenticator, utc_timestamp
from gateway.security.ipn import IPNVerifier
from gateway.security.signing import generate_signature
from gateway.services.withdrawals import (
    create_payout,
    get_transaction,
    get_withdrawal_rules,
    list_transactions,
)

logger = logging.getLogger("gateway.scenario")


def sample_ipn_headers(config, ipn: dict) -> dict:
    x_date = utc_timestamp()
    return {
        "authorization": generate_signature(ipn, config.x_login, x_date, config.secret_key),
        "x-login": config.x_login,
        "x-date": x_date,
    }


def payout_summary(payout) -> tuple:
    if not isinstance(payout, dict):
        return None, None
    return payout.get("id"), payout.get("status")


def describe_rule_fields(rules: dict) -> None:
    fields = rules.get("fields")
    if isinstance(fields, list):
        for field in fields:
            name = field.get("name") or field.get("field") or "unknown"
            description = field.get("description") or field.get("label") or "no description"
            logger.info("  %s: %s", name, description)
    elif isinstance(fields, dict):
        for key, value in fields.items():
            logger.info("  %s: %s", key, json.dumps(value))
    else:
        logger.info("  %s", rules)


async def run_scenario(config, client: VitaClient) -> None:
    try:
        rules = await get_withdrawal_rules(client)
        if rules:
            logger.info("required withdrawal fields for AR:")
            describe_rule_fields(rules)
    except VitaAPIError as exc:
        logger.error("withdrawal_rules failed: %s", exc.message)

    transaction_id = None
    try:
        payout = await create_payout(client)
        transaction_id, status = payout_summary(payout)
        logger.info("payout created id=%s status=%s", transaction_id, status)
    except VitaAPIError as exc:
        logger.error("payout creation failed: %s", exc.message)

    try:
        transactions = await list_transactions(client, {"country": "AR", "page": 1, "per_page": 10})
        logger.info("transactions: %s", transactions)
    except VitaAPIError as exc:
        logger.error("transaction listing failed: %s", exc.message)

    if transaction_id:
        try:
            logger.info("transaction %s: %s", transaction_id, await get_transaction(client, transaction_id))
        except VitaAPIError as exc:
            logger.error("transaction %s lookup failed: %s", transaction_id, exc.message)

    ipn = {"status": "completed", "order": "test-order-123", "wallet": config.wallet_uuid}
    result = IPNVerifier(config.secret_key).verify(ipn, sample_ipn_headers(config, ipn))
    logger.info("received signature:   %s", result.received_signature)
    logger.info("calculated signature: %s", result.calculated_signature)
    logger.info("IPN valid: %s", "yes" if result.is_valid else "no")


async def _main(config) -> None:
    client = VitaClient(
        config.base_url,
        RequestAuthenticator(config.credentials()),
        timeout=config.http_timeout_seconds,
    )
    try:
        await run_scenario(config, client)
    finally:
        await client.aclose()


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    try:
        from gateway.config import settings as config
    except MissingCredentialError as exc:
        print(str(exc), file=sys.stderr)
        print(
            "Set VITA_X_LOGIN, VITA_X_TRANS_KEY, VITA_SECRET_KEY and VITA_WALLET_UUID before running.",
            file=sys.stderr,
        )
        return 1
    asyncio.run(_main(config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
