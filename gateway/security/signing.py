"""Vita Wallet V2-HMAC-SHA256 request signatures.

The signed message is ``login_id + timestamp + canonical_body`` with no
separators, where the canonical body is every key of the signable payload in
ordinal order followed directly by its stringified value.
"""

import hashlib
import hmac
import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

SIGNATURE_SCHEME = "V2-HMAC-SHA256, Signature: "

SignableBody = Mapping[str, Any]


@dataclass(frozen=True)
class VitaCredentials:
    login_id: str
    trans_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"VitaCredentials(login_id={self.login_id!r})"


def format_number(value: float) -> str:
    """Render a float the way the provider's JavaScript runtime prints numbers."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits.
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = k + exponent
    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + text


def to_json(value: Any) -> str:
    """Compact JSON in insertion order, with numbers rendered by format_number."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value) if math.isfinite(value) else "null"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Mapping):
        members = ",".join(
            f"{json.dumps(str(key), ensure_ascii=False)}:{to_json(item)}" for key, item in value.items()
        )
        return "{" + members + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(to_json(item) for item in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


def stringify_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, (Mapping, list, tuple)):
        return to_json(value)
    return str(value)


def canonical_body(body: SignableBody | None) -> str:
    if not body:
        return ""
    return "".join(f"{key}{stringify_value(body[key])}" for key in sorted(body))


def build_signature_payload(body: SignableBody | None, login_id: str, timestamp: str) -> bytes:
    return f"{login_id}{timestamp}{canonical_body(body)}".encode("utf-8")


def sign_payload(secret: str, payload: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def generate_signature(
    body: SignableBody | None,
    login_id: str,
    timestamp: str,
    secret_key: str,
) -> str:
    payload = build_signature_payload(body, login_id, timestamp)
    return f"{SIGNATURE_SCHEME}{sign_payload(secret_key, payload)}"


def signatures_match(received: str, expected: str) -> bool:
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))
