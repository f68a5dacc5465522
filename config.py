from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    EXPLORER_BASE_URL: str = "https://blockscout.com"
    SELECTOR_REGISTRY_URL: str = "https://www.4byte.directory/api/v1/signatures/"

    # seconds, applied to every outbound call
    REQUEST_TIMEOUT: float = 30
    MAX_CONCURRENCY: int = 10

    LOG_LEVEL: str = "INFO"


settings = Settings()
