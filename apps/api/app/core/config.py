from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    app_name: str = "walletauth-api"

    privy_app_id: str | None = None
    privy_app_secret: SecretStr | None = None
    privy_signing_key: SecretStr | None = None
    privy_api_base_url: str = "https://auth.privy.io"

    custody_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    model_config = SettingsConfigDict(
        env_file=(str(BASE_DIR / ".env"), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def app_secret(self) -> str | None:
        return self.privy_app_secret.get_secret_value() if self.privy_app_secret else None

    @property
    def signing_key(self) -> str | None:
        return self.privy_signing_key.get_secret_value() if self.privy_signing_key else None


def get_settings() -> Settings:
    # Fresh instance per call: secrets are read from the environment at call time.
    return Settings()


settings = Settings()
