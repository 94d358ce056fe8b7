#!/usr/bin/env python3
import json
import sys
import time
import urllib.error
import urllib.request

SAMPLE_IPN = {"status": "completed", "order": "smoke-order", "wallet": "smoke-wallet"}
FORGED_HEADERS = {
    "Authorization": "V2-HMAC-SHA256, Signature: " + "0" * 64,
    "x-login": "smoke-login",
    "x-date": "2024-01-01T00:00:00.000Z",
}


def request(method: str, url: str, data: dict | None = None, headers: dict | None = None):
    body = None
    req_headers = headers or {}
    if data is not None:
        body = json.dumps(data).encode("utf-8")
        req_headers = {**req_headers, "Content-Type": "application/json"}
    req = urllib.request.Request(url=url, method=method, data=body, headers=req_headers)
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            raw = resp.read().decode("utf-8")
            return resp.status, raw
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read().decode("utf-8")


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:3000"

    for _ in range(30):
        try:
            code, _ = request("GET", f"{base_url}/health")
        except urllib.error.URLError:
            code = None
        if code == 200:
            break
        time.sleep(1)
    else:
        print("Gateway never became ready for smoke tests", file=sys.stderr)
        return 1

    checks = [
        ("health", "GET", f"{base_url}/health", None, None, 200),
        ("docs", "GET", f"{base_url}/api/docs", None, None, 200),
        ("invalid-ipn-payload", "POST", f"{base_url}/api/ipn/verify", {}, None, 422),
        ("ipn-missing-headers", "POST", f"{base_url}/api/ipn/verify", SAMPLE_IPN, None, 400),
        ("ipn-forged-signature", "POST", f"{base_url}/api/ipn/verify", SAMPLE_IPN, FORGED_HEADERS, 200),
        ("webhook-forged-signature", "POST", f"{base_url}/api/webhook", SAMPLE_IPN, FORGED_HEADERS, 401),
        ("unknown-route", "GET", f"{base_url}/api/unknown", None, None, 404),
    ]

    failures = []
    for name, method, url, data, headers, expected in checks:
        status, body = request(method, url, data=data, headers=headers)
        if status != expected:
            failures.append((name, expected, status, body))

    if failures:
        for name, expected, got, body in failures:
            print(f"[FAIL] {name}: expected {expected}, got {got} body={body}", file=sys.stderr)
        return 1

    print("Gateway smoke tests passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
