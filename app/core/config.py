from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Manages all application settings. Loads variables from environment and a .env file.
    """

    # --- Application Metadata ---
    ENVIRONMENT: str = "hml"
    DEBUG: bool = False
    PROJECT_NAME: str = "Clientes API"
    VERSION: str = "v1"

    # --- Security ---
    # When unset, the X-API-Key header is not checked
    API_KEY: Optional[str] = None
    FRONTEND_URL: str = "http://localhost:4200"

    # --- Database Configuration ---
    # Production runs on postgresql+asyncpg://...
    ASYNC_DATABASE_URL: str = "sqlite+aiosqlite:///./clientes.db"

    # --- ViaCEP ---
    VIACEP_BASE_URL: str = "https://viacep.com.br/ws"
    CEP_RATE_LIMIT: str = "30/minute"

    # --- HTTP client pool ---
    HTTPX_VERIFY_SSL: bool = True
    HTTPX_MAX_KEEPALIVE: int = 20
    HTTPX_MAX_CONNECTIONS: int = 100
    HTTPX_KEEPALIVE_EXPIRY: int = 60
    REQUEST_TIMEOUT: int = 5

    # --- Circuit breaker around ViaCEP ---
    FAILURE_THRESHOLD: int = 5
    RECOVERY_TIMEOUT: int = 30

    # --- Customers ---
    # False: updating an unknown customer is silently ignored. True: it raises NotFoundError.
    RAISE_ON_MISSING_UPDATE: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def API_V1_STR(self) -> str:
        return f"/api/{self.VERSION}"


settings = Settings()
