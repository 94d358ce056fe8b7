import os
from functools import lru_cache

from pydantic import ValidationError

from gateway.security.errors import MissingCredentialError

from .base import BaseConfig
from .dev import DevConfig
from .prod import ProdConfig
from .test import TestConfig


ENV_MAP = {
    "dev": DevConfig,
    "prod": ProdConfig,
    "test": TestConfig,
}


@lru_cache
def get_settings() -> BaseConfig:
    env = os.getenv("VITA_ENV", "dev").lower()
    config_cls = ENV_MAP.get(env, DevConfig)
    try:
        return config_cls()
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(part) for part in err["loc"]) or err["msg"] for err in exc.errors()}
        )
        raise MissingCredentialError(fields) from exc


settings = get_settings()
