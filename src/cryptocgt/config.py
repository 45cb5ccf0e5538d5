from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    coinbase_api_url: str = "https://api.coinbase.com/v2"
    fx_cache_seconds: int = 600  # Reuse a fetched USD/AUD rate for 10 minutes
    http_timeout: float = 10.0
    wash_sale_window_days: int = 30
    log_level: str = "INFO"
    report_timezone: str = "Australia/Sydney"  # FY and month boundaries are local dates here

    class Config:
        env_file = ".env"


settings = Settings()
