from collections.abc import Callable
from datetime import datetime, timezone

from gateway.security.signing import SignableBody, VitaCredentials, generate_signature

CONTENT_TYPE_JSON = "application/json"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_body(body: SignableBody | None) -> SignableBody | None:
    if not body:
        return None
    return body


class RequestAuthenticator:
    """Builds the signed header set attached to every outbound provider call."""

    def __init__(self, credentials: VitaCredentials, clock: Callable[[], str] = utc_timestamp):
        self._credentials = credentials
        self._clock = clock

    def sign(self, body: SignableBody | None, timestamp: str) -> str:
        return generate_signature(
            normalize_body(body),
            self._credentials.login_id,
            timestamp,
            self._credentials.secret_key,
        )

    def create_headers(self, body: SignableBody | None = None) -> dict[str, str]:
        x_date = self._clock()
        return {
            "x-date": x_date,
            "X-Login": self._credentials.login_id,
            "X-Trans-Key": self._credentials.trans_key,
            "Content-Type": CONTENT_TYPE_JSON,
            "Authorization": self.sign(body, x_date),
        }
