"""
Runtime settings for the catalog API.

Values come from environment variables; a ``.env`` file in the working
directory is loaded first when present.
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    api_key: str = "demo-api-key-123"   # shared secret for POST/PUT/DELETE
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    default_page_limit: int = 10
    seed_products: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("API_KEY", cls.api_key),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            default_page_limit=int(os.getenv("DEFAULT_PAGE_LIMIT", cls.default_page_limit)),
            seed_products=_env_bool("SEED_PRODUCTS", cls.seed_products),
        )
