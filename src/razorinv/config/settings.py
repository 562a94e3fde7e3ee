import os
from typing import Optional
from dotenv import load_dotenv

from pydantic_settings import BaseSettings, SettingsConfigDict
load_dotenv()


class Settings(BaseSettings):
    # Credentials
    key_id: Optional[str] = os.getenv("RAZORPAY_KEY_ID")
    key_secret: Optional[str] = os.getenv("RAZORPAY_KEY_SECRET")

    # HTTP
    base_url: str = os.getenv("RAZORPAY_BASE_URL", default="https://api.razorpay.com/v1")
    timeout: float = os.getenv("RAZORPAY_TIMEOUT", default=30.0)
    connect_attempts: int = os.getenv("RAZORPAY_CONNECT_ATTEMPTS", default=3)

    # Logging
    log_dir: str = os.getenv("RAZORPAY_LOG_DIR", default="logs")
    log_level: str = os.getenv("RAZORPAY_LOG_LEVEL", default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="RAZORPAY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
