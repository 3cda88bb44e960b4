import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="EVENTRA_", extra="ignore")

    db_url: str = "sqlite:///eventra.db"

    storage_backend: str = "local"
    storage_local_path: str = "./invoices"
    storage_prefix: str = "invoices"

    s3_bucket: str = ""
    s3_region: str = ""
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_endpoint_url: str = ""
    s3_presigned_expiry: int = 604800  # 7 days in seconds

    timezone: str = "UTC"
    default_currency: str = "USD"
    dashboard_months: int = 6

    # Operator identity for the CLI; the web API takes it from the request.
    user_id: str = ""

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
