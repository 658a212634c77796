from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "art-portfolio"

    ADMIN_JWT_SECRET: str = "change_me_admin"

    CORS_ORIGINS: str = "http://localhost:5173"

    DATABASE_URL: str

    DEFAULT_PAGE_LIMIT: int = 12
    FEATURED_LIMIT: int = 6

    S3_ENDPOINT: str = "http://localhost:9000"
    S3_ACCESS_KEY: str = "change_me"
    S3_SECRET_KEY: str = "change_me"
    S3_BUCKET: str = "portfolio"
    S3_REGION: str = "us-east-1"
    S3_USE_SSL: bool = False
    # Base URL the browser uses to fetch stored objects; defaults to endpoint/bucket.
    S3_PUBLIC_URL: str = ""
    MEDIA_ROOT_FOLDER: str = "portfolio"
    MAX_FILE_MB: int = 50

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def media_public_base_url(self) -> str:
        base = self.S3_PUBLIC_URL.strip() or f"{self.S3_ENDPOINT.rstrip('/')}/{self.S3_BUCKET}"
        return base.rstrip("/")

settings = Settings()
