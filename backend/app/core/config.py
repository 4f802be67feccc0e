"""Application Configuration

pydantic-settings 기반 환경 설정
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === App ===
    APP_NAME: str = "Todo Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # === Server ===
    HOST: str = "127.0.0.1"
    PORT: int = 3030

    # === Request limits ===
    BODY_LIMIT_BYTES: int = 16 * 1024
    MAX_SLEEP_SECONDS: int = 5

    # === Auth ===
    ADMIN_AUTHORIZATION: str = "Bearer admin"

    # === Static ===
    README_PATH: str = "README.md"

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json, text


# Singleton
settings = Settings()
