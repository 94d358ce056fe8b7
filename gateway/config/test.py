from pydantic_settings import SettingsConfigDict

from .base import BaseConfig


class TestConfig(BaseConfig):
    __test__ = False

    model_config = SettingsConfigDict(
        env_prefix="VITA_",
        env_file=None,
        case_sensitive=False,
    )

    environment: str = "test"
    debug: bool = True
    base_url: str = "https://vita.test/api/businesses"
    metrics_enabled: bool = False
