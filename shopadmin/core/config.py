from functools import lru_cache
from typing import Literal, List
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ShopAdmin"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"

    # Mongo (content store)
    MONGO_URI: str
    MONGO_DB: str
    assets_bucket: str = "assets"

    # Redis (sessions + dashboard cache, optional)
    REDIS_URL: str = ""

    # Single admin credential
    ADMIN_EMAIL: str
    ADMIN_PASSWORD: str

    # Sessions
    SESSION_SECRET: str
    session_algorithm: str = "HS256"
    session_ttl_s: int = 8 * 3600              # 8 hours
    session_key_prefix: str = "session"        # redis key namespace

    # Cache config
    dashboard_cache_ttl: int = 60              # 1 minute

    # Assets
    ASSET_BASE_URL: str = ""                   # "" -> relative /assets/<id>
    image_fetch_timeout_s: int = 15
    max_upload_mb: int = 10

    # CORS (CSV)
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    # API
    api_prefix: str = "/api"

    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
