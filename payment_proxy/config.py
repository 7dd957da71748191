"""
Application Configuration Management

Loads configuration from environment variables (or a local ``.env`` file) once
at startup and exposes the upstream credentials as immutable objects that are
handed to the application factory.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPSTREAM_BASE_URL = "https://wallet.kryptogo.app/v1/studio/api"
DEFAULT_ORIGIN = "https://kg-test-sdk-bpcp.vercel.app"
DEFAULT_REFERER = "https://kg-test-sdk-bpcp.vercel.app/"


class Credentials(BaseModel):
    """Upstream API credentials, read-only for the process lifetime"""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    client_id: str = ""


class UpstreamConfig(BaseModel):
    """Everything needed to call the upstream payment API"""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_UPSTREAM_BASE_URL
    credentials: Credentials = Field(default_factory=Credentials)
    default_origin: str = DEFAULT_ORIGIN
    default_referer: str = DEFAULT_REFERER
    timeout: Optional[float] = None

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(default="development", description="Environment name")

    # Application
    app_name: str = Field(default="KryptoGO Payment Relay")
    app_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    port_retry_attempts: int = Field(
        default=10, ge=1, description="Bind attempts when the port is already in use"
    )

    # Upstream
    api_key: Optional[str] = Field(default=None, description="Upstream X-STUDIO-API-KEY")
    client_id: Optional[str] = Field(default=None, description="Upstream X-Client-ID")
    upstream_base_url: str = Field(default=DEFAULT_UPSTREAM_BASE_URL)
    upstream_timeout: Optional[float] = Field(
        default=None, description="Upstream timeout in seconds, unset means no timeout"
    )
    default_origin: str = Field(default=DEFAULT_ORIGIN)
    default_referer: str = Field(default=DEFAULT_REFERER)

    # CORS
    cors_origins: List[str] = Field(default=["*"])
    cors_allow_credentials: bool = Field(default=False)
    cors_allow_methods: List[str] = Field(default=["GET", "POST"])
    cors_allow_headers: List[str] = Field(default=["*"])

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment"""
        valid_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v_lower

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key or "", client_id=self.client_id or "")

    @property
    def upstream(self) -> UpstreamConfig:
        """Immutable upstream configuration derived from these settings"""
        return UpstreamConfig(
            base_url=self.upstream_base_url,
            credentials=self.credentials,
            default_origin=self.default_origin,
            default_referer=self.default_referer,
            timeout=self.upstream_timeout,
        )

    def missing_credentials(self) -> List[str]:
        """Names of upstream credentials that are not configured"""
        missing = []
        if not self.api_key:
            missing.append("API_KEY")
        if not self.client_id:
            missing.append("CLIENT_ID")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()
