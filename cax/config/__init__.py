from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Exchange
    CAX_BASE_URL: str = "https://cax.piccadilly.autonity.org/api"
    CAX_TIMEOUT: float = 10.0

    # Wallet Auth
    CAX_PRIVATE_KEY: str = ""
    CAX_API_KEY: str = ""  # Generated on first authenticated call if empty

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
