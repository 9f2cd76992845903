from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App config
    app_name: str = "Customer Service"
    service_name: str = "customer-service"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "console"
    logging_config_path: Optional[str] = None

    # Store backend: "postgres" in deployments, "memory" for local runs and tests
    store_backend: str = "postgres"

    # Database - service-specific user pattern
    db_service_user: str = "customer_service"
    db_service_password: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    db_name: str = "customer"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: float = 30.0

    # Password hashing
    bcrypt_rounds: int = 12

    # Photo uploads
    upload_dir: str = "./public/images"
    upload_url_prefix: str = "/images"
    max_upload_bytes: int = 10_000_000

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('store_backend')
    @classmethod
    def validate_store_backend(cls, v):
        v = v.lower()
        if v not in ("memory", "postgres"):
            raise ValueError('store_backend must be "memory" or "postgres"')
        return v

    @field_validator('bcrypt_rounds')
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        # bcrypt accepts 4..31
        if not 4 <= v <= 31:
            raise ValueError('bcrypt_rounds must be between 4 and 31')
        return v

    @field_validator('max_upload_bytes')
    @classmethod
    def validate_max_upload_bytes(cls, v):
        if v < 1:
            raise ValueError('max_upload_bytes must be positive')
        return v

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection string"""
        if not self.db_service_password:
            raise ValueError(
                "DB_SERVICE_PASSWORD must be set. "
                "Customer service requires specific database credentials."
            )
        return (
            f"postgresql://{self.db_service_user}:{self.db_service_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.db_name}"
        )


def get_settings() -> Settings:
    return Settings()
