import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from gateway.api.deps import get_ipn_verifier
from gateway.metrics.collector import metrics
from gateway.schemas.ipn import IPNPayload, IPNVerificationResponse, WebhookAck
from gateway.security.errors import MissingHeaderError
from gateway.security.ipn import IPNVerification, IPNVerifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ipn"])


def _verify(payload: IPNPayload, request: Request, verifier: IPNVerifier) -> IPNVerification:
    try:
        verification = verifier.verify(payload.model_dump(), request.headers)
    except MissingHeaderError as exc:
        metrics.ipn_verifications.labels(outcome="missing_header").inc()
        raise HTTPException(status_code=400, detail=str(exc))
    metrics.ipn_verifications.labels(outcome="valid" if verification.is_valid else "invalid").inc()
    return verification


@router.post("/webhook", response_model=WebhookAck)
def webhook(payload: IPNPayload, request: Request, verifier: IPNVerifier = Depends(get_ipn_verifier)):
    logger.info("webhook received order=%s status=%s", payload.order, payload.status)
    verification = _verify(payload, request, verifier)
    if not verification.is_valid:
        raise HTTPException(
            status_code=401,
            detail={
                "message": "invalid webhook signature",
                "received_signature": verification.received_signature,
                "calculated_signature": verification.calculated_signature,
            },
        )
    return WebhookAck(
        message="webhook received and verified",
        order=payload.order,
        status=payload.status,
    )


@router.post("/ipn/verify", response_model=IPNVerificationResponse)
def verify_ipn(payload: IPNPayload, request: Request, verifier: IPNVerifier = Depends(get_ipn_verifier)):
    verification = _verify(payload, request, verifier)
    return IPNVerificationResponse(**verification.as_dict())
