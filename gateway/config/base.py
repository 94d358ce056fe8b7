from pydantic import Field
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gateway.security.signing import VitaCredentials

PLACEHOLDER_PREFIX = "your-"


class BaseConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VITA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "Vita Wallet Gateway"
    service_name: str = "vita-withdrawal-gateway"
    api_prefix: str = "/api"
    environment: str = "dev"
    port: int = 3000
    log_level: str = "INFO"
    allowed_origins: list[str] = Field(default_factory=list)
    metrics_enabled: bool = True
    base_url: str = "https://api.stage.vitawallet.io/api/businesses"
    http_timeout_seconds: float = 30.0
    x_login: str = Field(..., repr=False)
    x_trans_key: str = Field(..., repr=False)
    secret_key: str = Field(..., repr=False)
    wallet_uuid: str = Field(..., repr=False)

    @field_validator("x_login", "x_trans_key", "secret_key", "wallet_uuid", mode="after")
    @classmethod
    def validate_credential_present(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("credential must not be blank")
        if value.startswith(PLACEHOLDER_PREFIX):
            raise ValueError("credential still holds a placeholder value")
        return value

    @field_validator("allowed_origins", mode="after")
    @classmethod
    def validate_allowed_origins(cls, origins: list[str]) -> list[str]:
        for origin in origins:
            if not origin.startswith(("https://", "http://localhost", "http://127.0.0.1")):
                raise ValueError(f"invalid origin '{origin}'")
        return origins

    @model_validator(mode="after")
    def validate_production_transport_security(self) -> "BaseConfig":
        if self.environment == "prod":
            if not self.base_url.startswith("https://"):
                raise ValueError("prod environment requires an https base_url")
            insecure_http = [
                origin
                for origin in self.allowed_origins
                if origin.startswith("http://")
                and not origin.startswith(("http://localhost", "http://127.0.0.1"))
            ]
            if insecure_http:
                raise ValueError("prod environment requires https origins")
        return self

    def credentials(self) -> VitaCredentials:
        return VitaCredentials(
            login_id=self.x_login,
            trans_key=self.x_trans_key,
            secret_key=self.secret_key,
        )
