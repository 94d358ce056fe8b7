from fastapi import Request

from gateway.client.vita import VitaClient
from gateway.security.ipn import IPNVerifier


def get_vita_client(request: Request) -> VitaClient:
    return request.app.state.vita_client


def get_ipn_verifier(request: Request) -> IPNVerifier:
    return request.app.state.ipn_verifier
