from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_ACCESS_TOKEN: str | None = None
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    DEFAULT_CURRENCY: str = "RWF"
    DEFAULT_LANGUAGE: str = "en"
    HOURS_PER_DAY: int = 8

    LOCATION_TRACKING_INTERVAL_SECONDS: float = 30.0
    LOCATION_SIGNIFICANT_CHANGE_METERS: float = 10.0

    NOTIFICATION_POLL_INTERVAL_SECONDS: float = 5.0

    INVOICE_DOWNLOAD_DIR: str = "./data/invoices"


settings = Settings()
