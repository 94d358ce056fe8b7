import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from gateway.api.v1.api import api_router
from gateway.api.v1.routes import health
from gateway.client.vita import VitaClient
from gateway.config import BaseConfig, settings
from gateway.security.headers import RequestAuthenticator
from gateway.security.ipn import IPNVerifier

logger = logging.getLogger(__name__)


def create_app(app_settings: BaseConfig | None = None) -> FastAPI:
    config = app_settings or settings
    logging.basicConfig(level=config.log_level.upper())

    app = FastAPI(
        title=config.app_name,
        docs_url=f"{config.api_prefix}/docs",
        openapi_url=f"{config.api_prefix}/openapi.json",
    )

    allowed_origins = config.allowed_origins
    if "*" in allowed_origins:
        raise RuntimeError("Wildcard CORS origins are not allowed for the gateway.")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-login", "x-date", "X-Trans-Key"],
    )

    app.include_router(health.router)
    app.include_router(api_router, prefix=config.api_prefix)

    if config.metrics_enabled:
        @app.get("/metrics")
        def metrics_endpoint():
            return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    credentials = config.credentials()
    app.state.settings = config
    app.state.vita_client = VitaClient(
        config.base_url,
        RequestAuthenticator(credentials),
        timeout=config.http_timeout_seconds,
    )
    app.state.ipn_verifier = IPNVerifier(credentials.secret_key)

    @app.on_event("startup")
    def announce():
        logger.info("gateway ready base_url=%s wallet=%s", config.base_url, config.wallet_uuid)

    @app.on_event("shutdown")
    async def close_client():
        await app.state.vita_client.aclose()

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
