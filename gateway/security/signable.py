"""Signable payloads per provider endpoint.

Some GET endpoints must sign parameters that never travel as a body. Each
endpoint is registered once with the rule that derives its signable payload.
A country placeholder in the path template always takes the country from the
path; endpoints without one take it from the query.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl

from gateway.security.signing import SignableBody

COUNTRY_ISO_CODE = "country_iso_code"
COUNTRY_PATH_PARAM = "country"
COUNTRY_PARAM_KEYS = (COUNTRY_ISO_CODE, "country")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class SigningRule(str, Enum):
    NONE = "none"
    ACTUAL_BODY = "actual_body"
    COUNTRY_CODE = "country_code"


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: HttpMethod
    path_template: str
    rule: SigningRule
    _pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        regex = re.sub(r"\\\{(\w+)\\\}", r"(?P<\1>[^/?]+)", re.escape(self.path_template))
        # Raw paths may carry a base prefix such as api/businesses/.
        object.__setattr__(self, "_pattern", re.compile(f"(?:^|/){regex}$"))

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(self._pattern.groupindex)

    def render(self, params: Mapping[str, Any] | None = None) -> str:
        return self.path_template.format(**(params or {}))

    def match(self, path: str) -> dict[str, str] | None:
        found = self._pattern.search(path.split("?", 1)[0].strip("/"))
        if not found:
            return None
        return found.groupdict()


ENDPOINTS: dict[str, Endpoint] = {}


def register_endpoint(name: str, method: HttpMethod, path_template: str, rule: SigningRule) -> Endpoint:
    if rule is SigningRule.ACTUAL_BODY and method is not HttpMethod.POST:
        raise ValueError(f"{name}: only POST endpoints sign their body")
    if method is HttpMethod.POST and rule is not SigningRule.ACTUAL_BODY:
        raise ValueError(f"{name}: POST endpoints must sign their body")
    endpoint = Endpoint(name, method, path_template, rule)
    ENDPOINTS[name] = endpoint
    return endpoint


PRICES = register_endpoint("prices", HttpMethod.GET, "prices", SigningRule.NONE)
PAYMENT_METHODS = register_endpoint(
    "payment_methods", HttpMethod.GET, "payment_methods/{country}", SigningRule.COUNTRY_CODE
)
WITHDRAWAL_RULES = register_endpoint(
    "withdrawal_rules", HttpMethod.GET, "withdrawal_rules", SigningRule.COUNTRY_CODE
)
LIST_TRANSACTIONS = register_endpoint("transactions.list", HttpMethod.GET, "transactions", SigningRule.NONE)
GET_TRANSACTION = register_endpoint(
    "transactions.get", HttpMethod.GET, "transactions/{transaction_id}", SigningRule.NONE
)
CREATE_TRANSACTION = register_endpoint(
    "transactions.create", HttpMethod.POST, "transactions", SigningRule.ACTUAL_BODY
)


def normalize_country(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    country = value.strip().upper()
    return country or None


def _country_payload(
    endpoint: Endpoint,
    path_params: Mapping[str, Any],
    query: Mapping[str, Any],
) -> SignableBody | None:
    if COUNTRY_PATH_PARAM in endpoint.path_params:
        country = normalize_country(path_params.get(COUNTRY_PATH_PARAM))
        return {COUNTRY_ISO_CODE: country} if country else None
    for key in COUNTRY_PARAM_KEYS:
        if query.get(key) is not None:
            country = normalize_country(query[key])
            return {COUNTRY_ISO_CODE: country} if country else None
    return None


def resolve_signable_body(
    endpoint: Endpoint,
    path_params: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
    body: SignableBody | None = None,
    override: SignableBody | None = None,
) -> SignableBody | None:
    if override is not None:
        return override
    if endpoint.rule is SigningRule.ACTUAL_BODY:
        return body if body else None
    if endpoint.rule is SigningRule.COUNTRY_CODE:
        return _country_payload(endpoint, path_params or {}, query or {})
    return None


def match_endpoint(path: str, method: str) -> tuple[Endpoint | None, dict[str, str]]:
    http_method = HttpMethod(method.upper())
    for endpoint in ENDPOINTS.values():
        if endpoint.method is not http_method:
            continue
        path_params = endpoint.match(path)
        if path_params is not None:
            return endpoint, path_params
    return None, {}


def build_signable_body(
    path: str,
    method: str,
    params: Mapping[str, Any] | None = None,
    body: SignableBody | None = None,
    override: SignableBody | None = None,
) -> SignableBody | None:
    """Resolve the signable payload for a raw provider path.

    ``params`` are query parameters; any query string on ``path`` is merged
    under them. Unregistered GET paths sign nothing and unregistered POST
    paths sign their body.
    """
    http_method = HttpMethod(method.upper())
    raw_path, _, raw_query = path.partition("?")
    query = {**dict(parse_qsl(raw_query)), **(params or {})}
    endpoint, path_params = match_endpoint(raw_path, http_method.value)
    if endpoint is None:
        rule = SigningRule.ACTUAL_BODY if http_method is HttpMethod.POST else SigningRule.NONE
        endpoint = Endpoint("unregistered", http_method, raw_path.strip("/"), rule)
    return resolve_signable_body(endpoint, path_params, query, body=body, override=override)
