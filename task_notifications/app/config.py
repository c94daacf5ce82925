from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the Task Notifications service"""

    # Application settings
    service_name: str = "task-notifications"
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "text"
    environment: str = "dev"
    path_prefix: str = ''
    host: str = "0.0.0.0"
    port: int = 8080

    # Firebase settings
    firebase_secret: Optional[str] = None
    firebase_project_id: Optional[str] = None

    # FCM settings
    fcm_batch_size: int = Field(default=500, ge=1, le=500)  # FCM allows up to 500 tokens per multicast request
    fcm_dry_run: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Create settings instance
settings = Settings()


def get_prefix(path_prefix: Optional[str] = None) -> str:
    path_prefix = settings.path_prefix if path_prefix is None else path_prefix
    if not path_prefix:
        return ''
    if not path_prefix.startswith('/'):
        path_prefix = f'/{path_prefix}'
    return path_prefix.rstrip('/')
