from pydantic import BaseModel, ConfigDict


class IPNPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    order: str
    wallet: str


class IPNVerificationResponse(BaseModel):
    success: bool = True
    is_valid: bool
    received_signature: str
    calculated_signature: str


class WebhookAck(BaseModel):
    success: bool = True
    message: str
    order: str
    status: str
