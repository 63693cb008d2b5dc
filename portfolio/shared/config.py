"""
Runtime configuration for the portfolio data layer.

Every value is read from the environment. An empty PORTFOLIO_API_URL means
there is no backing REST API and the repositories run in local-only mode.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Remote REST API (the "tables" API the site was built against)
PORTFOLIO_API_URL = os.getenv("PORTFOLIO_API_URL", "")
PORTFOLIO_API_BASE_PATH = os.getenv("PORTFOLIO_API_BASE_PATH", "/tables")

# Retry policy: fixed number of attempts, fixed delay, no backoff
PORTFOLIO_RETRY_COUNT = int(os.getenv("PORTFOLIO_RETRY_COUNT", "3"))
PORTFOLIO_RETRY_DELAY = float(os.getenv("PORTFOLIO_RETRY_DELAY", "1.0"))
PORTFOLIO_REQUEST_TIMEOUT = float(os.getenv("PORTFOLIO_REQUEST_TIMEOUT", "10"))

# Local fallback store
LOCAL_STORE_URL = os.getenv("LOCAL_STORE_URL", "sqlite:///portfolio_local.db")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Static portfolio page allowed through CORS
FRONTEND_URL = os.getenv("FRONTEND_URL")


@dataclass(frozen=True)
class Settings:
    """Snapshot of the configuration, handed to the repository factory."""
    api_url: str = ""
    base_path: str = "/tables"
    retry_count: int = 3
    retry_delay: float = 1.0
    request_timeout: float = 10.0
    local_store_url: str = "sqlite:///portfolio_local.db"
    environment: str = "development"

    @property
    def api_backed(self) -> bool:
        return bool(self.api_url)

    @property
    def base_url(self) -> Optional[str]:
        """Full URL of the REST base path, or None in local-only mode."""
        if not self.api_backed:
            return None
        return f"{self.api_url.rstrip('/')}/{self.base_path.strip('/')}"


def load_settings() -> Settings:
    """Build a Settings snapshot from the module-level environment values."""
    return Settings(
        api_url=PORTFOLIO_API_URL,
        base_path=PORTFOLIO_API_BASE_PATH,
        retry_count=PORTFOLIO_RETRY_COUNT,
        retry_delay=PORTFOLIO_RETRY_DELAY,
        request_timeout=PORTFOLIO_REQUEST_TIMEOUT,
        local_store_url=LOCAL_STORE_URL,
        environment=ENVIRONMENT,
    )
