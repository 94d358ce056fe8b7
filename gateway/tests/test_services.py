import asyncio
import json

import httpx
import pytest
import respx

from gateway.client.errors import VitaAPIError
from gateway.client.vita import VitaClient
from gateway.security.headers import RequestAuthenticator
from gateway.security.signing import VitaCredentials, generate_signature
from gateway.services import assets, withdrawals

BASE_URL = "https://vita.test/api/businesses"
DATE = "2024-05-10T12:30:00.000Z"
CREDENTIALS = VitaCredentials(login_id="login-1", trans_key="trans-key", secret_key="secret-key")


def _client():
    return VitaClient(BASE_URL, RequestAuthenticator(CREDENTIALS, clock=lambda: DATE))


@respx.mock
def test_payment_methods_normalizes_country():
    route = respx.get(f"{BASE_URL}/payment_methods/AR").mock(
        return_value=httpx.Response(200, json={"methods": ["bank"]})
    )

    result = asyncio.run(assets.get_payment_methods(_client(), " ar "))

    assert result == {"methods": ["bank"]}
    expected = generate_signature({"country_iso_code": "AR"}, "login-1", DATE, "secret-key")
    assert route.calls.last.request.headers["Authorization"] == expected


def test_payment_methods_requires_country():
    with pytest.raises(ValueError):
        asyncio.run(assets.get_payment_methods(_client(), "   "))


@respx.mock
def test_withdrawal_rules_from_mapping():
    respx.get(f"{BASE_URL}/withdrawal_rules").mock(
        return_value=httpx.Response(200, json={"rules": {"ar": {"fields": []}, "cl": {"fields": [1]}}})
    )
    assert asyncio.run(withdrawals.get_withdrawal_rules_by_country(_client(), "cl")) == {"fields": [1]}


@respx.mock
def test_withdrawal_rules_from_list():
    respx.get(f"{BASE_URL}/withdrawal_rules").mock(
        return_value=httpx.Response(200, json={"rules": [{"country": "co"}, {"country": "ar", "fields": []}]})
    )
    assert asyncio.run(withdrawals.get_withdrawal_rules(_client())) == {"country": "ar", "fields": []}


@respx.mock
def test_withdrawal_rules_missing_returns_none():
    respx.get(f"{BASE_URL}/withdrawal_rules").mock(return_value=httpx.Response(200, json={}))
    assert asyncio.run(withdrawals.get_withdrawal_rules_by_country(_client(), "AR")) is None


def test_withdrawal_rules_requires_country():
    with pytest.raises(ValueError):
        asyncio.run(withdrawals.get_withdrawal_rules_by_country(_client(), ""))


@respx.mock
def test_create_payout_generates_order():
    route = respx.post(f"{BASE_URL}/transactions").mock(return_value=httpx.Response(201, json={"id": "tx"}))

    asyncio.run(withdrawals.create_payout(_client(), {"amount": 10, "order": "ignored"}))

    sent = json.loads(route.calls.last.request.content)
    assert sent["amount"] == 10
    assert sent["order"].startswith("ret-")


@respx.mock
def test_create_withdrawal_checks_prices_first():
    prices = respx.get(f"{BASE_URL}/prices").mock(return_value=httpx.Response(200, json={}))
    route = respx.post(f"{BASE_URL}/transactions").mock(return_value=httpx.Response(201, json={"id": "tx"}))

    asyncio.run(withdrawals.create_withdrawal(_client(), {"country": "AR", "amount": 5}))

    assert prices.called
    sent = json.loads(route.calls.last.request.content)
    assert sent["transactions_type"] == "withdrawal"
    assert sent["country"] == "AR"
    assert sent["order"].startswith("ret-")


def test_create_withdrawal_aborts_when_prices_fail():
    with respx.mock(assert_all_called=False) as router:
        router.get(f"{BASE_URL}/prices").mock(return_value=httpx.Response(503, json={"message": "down"}))
        route = router.post(f"{BASE_URL}/transactions")

        with pytest.raises(VitaAPIError) as exc:
            asyncio.run(withdrawals.create_withdrawal(_client(), {"country": "AR"}))

    assert "could not validate prices" in exc.value.message
    assert exc.value.status_code == 503
    assert not route.called


@respx.mock
def test_get_transaction_uses_path_id():
    route = respx.get(f"{BASE_URL}/transactions/tx-42").mock(
        return_value=httpx.Response(200, json={"id": "tx-42"})
    )
    assert asyncio.run(withdrawals.get_transaction(_client(), "tx-42")) == {"id": "tx-42"}
    assert route.called


def test_select_country_rule_handles_unknown_shapes():
    assert withdrawals.select_country_rule("nope", "AR") is None
    assert withdrawals.select_country_rule({"AR": {"x": 1}}, "AR") == {"x": 1}
