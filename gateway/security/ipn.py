import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from gateway.security.errors import MissingHeaderError
from gateway.security.signing import generate_signature, signatures_match

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"
LOGIN_HEADER = "x-login"
DATE_HEADER = "x-date"
IPN_SIGNED_FIELDS = ("status", "order", "wallet")


@dataclass(frozen=True)
class IPNVerification:
    is_valid: bool
    received_signature: str
    calculated_signature: str

    def as_dict(self) -> dict:
        return asdict(self)


def extract_header(headers: Mapping[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup; list values yield their first item."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        return value or None
    return None


def ipn_signable_body(ipn_body: Mapping[str, Any]) -> dict:
    return {name: ipn_body.get(name) for name in IPN_SIGNED_FIELDS}


class IPNVerifier:
    def __init__(self, secret_key: str):
        self._secret_key = secret_key

    def verify(self, ipn_body: Mapping[str, Any], headers: Mapping[str, Any]) -> IPNVerification:
        authorization = extract_header(headers, AUTHORIZATION_HEADER)
        if not authorization:
            raise MissingHeaderError(AUTHORIZATION_HEADER)
        x_login = extract_header(headers, LOGIN_HEADER)
        x_date = extract_header(headers, DATE_HEADER)
        if not x_login or not x_date:
            raise MissingHeaderError("x-login" if not x_login else "x-date")

        expected = generate_signature(ipn_signable_body(ipn_body), x_login, x_date, self._secret_key)
        verification = IPNVerification(
            is_valid=signatures_match(authorization, expected),
            received_signature=authorization,
            calculated_signature=expected,
        )
        if not verification.is_valid:
            logger.warning("IPN signature mismatch for order %s", ipn_body.get("order"))
        return verification
