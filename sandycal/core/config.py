"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "sandycal"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./sandycal.db"

    # JWT
    jwt_secret: str = "change-me-in-production-use-openssl-rand-hex-32"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Twilio Verify
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_verify_service_sid: str = ""
    twilio_verify_base_url: str = "https://verify.twilio.com/v2"
    verification_timeout_seconds: float = 10.0

    # Friends
    friend_search_limit: int = 10


settings = Settings()
