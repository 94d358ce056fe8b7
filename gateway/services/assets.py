import logging

from gateway.client.vita import VitaClient
from gateway.security.signable import COUNTRY_ISO_CODE, PAYMENT_METHODS, PRICES, normalize_country

logger = logging.getLogger(__name__)


async def get_crypto_prices(client: VitaClient):
    logger.info("fetching crypto prices")
    return await client.request(PRICES)


async def get_payment_methods(client: VitaClient, country_iso: str):
    country = normalize_country(country_iso)
    if not country:
        raise ValueError("country code required")
    return await client.request(
        PAYMENT_METHODS,
        params={"country": country},
        signable_body={COUNTRY_ISO_CODE: country},
    )
