"""Configuration models for the API."""

import os
from pydantic import BaseModel, Field

from wa_client import ClientOptions


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class APIConfig(BaseModel):
    """API configuration settings."""

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=3000, description="Port to bind to")

    # Uploads
    max_upload_size_mb: int = Field(default=64, description="Maximum media upload size in MB")

    # WhatsApp client
    client_factory: str = Field(default="", description="Client factory as 'package.module:attribute'")
    client_id: str = Field(default="", description="Local auth session id")
    auth_data_path: str = Field(default=".wwebjs_auth", description="Session persistence directory")
    headless: bool = Field(default=False, description="Run the browser headless")
    init_on_startup: bool = Field(default=True, description="Start the client session on startup")

    # Requests
    messages_default_limit: int = Field(default=50, description="Default number of messages fetched per chat")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="'console' or 'json'")

    # Security
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")

    def client_options(self) -> ClientOptions:
        """Options handed to the client factory."""
        return ClientOptions(
            client_id=self.client_id or None,
            auth_data_path=self.auth_data_path,
            headless=self.headless,
        )

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "3000")),
            max_upload_size_mb=int(os.getenv("MAX_UPLOAD_SIZE_MB", "64")),
            client_factory=os.getenv("WA_CLIENT_FACTORY", ""),
            client_id=os.getenv("WA_CLIENT_ID", ""),
            auth_data_path=os.getenv("WA_AUTH_DATA_PATH", ".wwebjs_auth"),
            headless=_env_bool("WA_HEADLESS", "false"),
            init_on_startup=_env_bool("WA_INIT_ON_STARTUP", "true"),
            messages_default_limit=int(os.getenv("MESSAGES_DEFAULT_LIMIT", "50")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "console"),
            cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        )
