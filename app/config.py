"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Breach check service configuration.

    All values can be overridden via environment variables or a .env file.
    """

    # Remote range-query service
    BREACH_API_URL: str = "https://api.pwnedpasswords.com/range"
    BREACH_REQUEST_TIMEOUT: float = 10.0
    BREACH_USER_AGENT: str = "Password-Breach-Checker-1.0"
    BREACH_ADD_PADDING: bool = True

    # Batch checks
    BATCH_MAX_SIZE: int = 10
    BATCH_PACING_SECONDS: float = 0.1

    # Inbound rate limiting (per client IP)
    CHECK_RATE_LIMIT: int = 100
    BATCH_RATE_LIMIT: int = 20
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_FAIL_OPEN: bool = True

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS comma-separated string into a list."""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Trusted proxies (for X-Forwarded-For)
    TRUSTED_PROXIES: str = ""

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Parse TRUSTED_PROXIES comma-separated string into a list.

        Supports individual IPs and CIDR ranges (e.g. "10.0.0.1,172.16.0.0/12").
        """
        if not self.TRUSTED_PROXIES:
            return []
        return [p.strip() for p in self.TRUSTED_PROXIES.split(",") if p.strip()]

    # Application
    APP_NAME: str = "Password Breach Checker"
    DEBUG: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
