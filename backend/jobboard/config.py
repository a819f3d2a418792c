from pydantic_settings import BaseSettings
from pydantic import model_validator
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_database: str = "jobboard"
    mysql_user: str = "jobboard"
    mysql_password: str = ""
    database_url_override: str = ""

    # Auth
    session_secret_key: str = "change-me-in-production"
    reset_secret_key: str = "change-me-too-in-production"
    jwt_algorithm: str = "HS256"
    session_expire_hours: int = 12
    reset_expire_minutes: int = 20

    # Email
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_timeout_seconds: float = 10.0
    from_email: str = ""

    # Uploads (S3-compatible object storage, e.g. MinIO)
    s3_endpoint_url: str = "http://localhost:9000"
    s3_access_key: str = ""
    s3_secret_key: str = ""
    s3_region: str = "us-east-1"
    s3_bucket: str = "jobboard-uploads"
    s3_public_url: str = ""
    max_upload_bytes: int = 5 * 1024 * 1024

    # App
    frontend_url: str = "http://localhost:3000"
    environment: str = "development"
    log_level: str = "INFO"

    @model_validator(mode="after")
    def validate_secret_keys(self) -> "Settings":
        """Ensure both token secrets are strong and distinct outside development."""
        if self.environment == "development":
            return self

        weak_keys = {
            "change-me-in-production",
            "change-me-too-in-production",
            "",
            "secret",
            "changeme",
        }
        for name in ("session_secret_key", "reset_secret_key"):
            if getattr(self, name) in weak_keys:
                raise ValueError(
                    f"{name.upper()} must be set to a secure value in {self.environment} environment. "
                    "Generate one with: openssl rand -hex 32"
                )
        if self.session_secret_key == self.reset_secret_key:
            raise ValueError("SESSION_SECRET_KEY and RESET_SECRET_KEY must be different")
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"mysql+pymysql://{self.mysql_user}:{self.mysql_password}"
            f"@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"
            f"?charset=utf8mb4"
        )

    @property
    def upload_public_base_url(self) -> str:
        """Public prefix for uploaded objects, path-style on the endpoint by default."""
        if self.s3_public_url:
            return self.s3_public_url.rstrip("/")
        return f"{self.s3_endpoint_url.rstrip('/')}/{self.s3_bucket}"

    @property
    def reset_url_base(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/reset-password"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
