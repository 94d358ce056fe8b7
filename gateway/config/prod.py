from .base import BaseConfig


class ProdConfig(BaseConfig):
    environment: str = "prod"
    debug: bool = False
    base_url: str = "https://api.vitawallet.io/api/businesses"
