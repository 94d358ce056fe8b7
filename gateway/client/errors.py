import json
from typing import Any

STATUS_MESSAGES = {
    401: "authentication/authorization error",
    403: "authentication/authorization error",
    404: "resource not found",
    429: "rate limit reached",
    500: "Vita Wallet internal error",
    502: "Vita Wallet internal error",
    503: "Vita Wallet internal error",
}


class VitaAPIError(Exception):
    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

    @classmethod
    def from_response(cls, status_code: int, reason: str, payload: Any) -> "VitaAPIError":
        message = reason
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error") or reason
        if status_code == 422:
            text = f"validation error ({status_code}): {json.dumps(payload, indent=2)}"
        elif status_code in STATUS_MESSAGES:
            text = f"{STATUS_MESSAGES[status_code]} ({status_code}): {message}"
        else:
            details = {"status": status_code, "message": message, "payload": payload}
            text = f"request failed ({status_code}): {json.dumps(details, indent=2, default=str)}"
        return cls(text, status_code=status_code, payload=payload)
