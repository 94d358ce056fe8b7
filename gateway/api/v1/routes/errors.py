from fastapi import HTTPException

from gateway.client.errors import VitaAPIError

UPSTREAM_UNAVAILABLE = 502


def upstream_error(exc: VitaAPIError) -> HTTPException:
    return HTTPException(status_code=exc.status_code or UPSTREAM_UNAVAILABLE, detail=exc.message)
