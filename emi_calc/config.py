from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Exchange rates (https://www.exchangerate-api.com)
    exchange_rate_api_key: str = ""
    exchange_rate_base_url: str = "https://v6.exchangerate-api.com/v6"
    request_timeout: float = 15.0

    # All calculations run in this currency; others are display-only
    base_currency: str = "USD"
    display_locale: str = "en_US"

    # Calculator input limits (base currency / percent / years)
    max_principal: Decimal = Decimal("10000000")
    max_rate_percent: Decimal = Decimal("30")
    max_duration_years: int = 30

    # App
    debug: bool = False
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000


settings = Settings()
