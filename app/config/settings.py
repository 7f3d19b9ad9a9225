"""
Application settings, read from the process environment and .env files.

Each upstream collaborator and the map view have their own settings group
with its own variable prefix (GEOCODER_, CONTENT_, MAP_, SECURITY_).
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _require_user_agent(v):
    """Upstream services reject anonymous clients"""
    if not v or not v.strip():
        raise ValueError("user_agent must be a non-empty client identifier")
    return v.strip()


class GeocoderSettings(BaseSettings):
    """Upstream place-name geocoder (Nominatim) configuration"""

    api_url: str = Field(default="https://nominatim.openstreetmap.org/search")
    user_agent: str = Field(
        default="MapExplorer/1.0",
        description="Client identifier sent with every upstream request"
    )
    timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v):
        return _require_user_agent(v)

    model_config = {"env_prefix": "GEOCODER_"}


class ContentSettings(BaseSettings):
    """Geosearch content service (MediaWiki Action API) configuration"""

    api_url: str = Field(default="https://en.wikipedia.org/w/api.php")
    user_agent: str = Field(default="MapExplorer/1.0")
    search_radius_m: int = Field(default=10000, ge=10, le=10000)
    page_size: int = Field(default=50, ge=1, le=500)
    thumbnail_size: int = Field(default=300, ge=50, le=1000)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v):
        return _require_user_agent(v)

    model_config = {"env_prefix": "CONTENT_"}


class MapSettings(BaseSettings):
    """Initial view and map presentation configuration"""

    default_latitude: float = Field(default=51.505, ge=-90.0, le=90.0)
    default_longitude: float = Field(default=-0.09, ge=-180.0, le=180.0)
    default_zoom: int = Field(default=13, ge=0, le=19)
    focus_zoom: int = Field(default=13, ge=0, le=19)
    summary_preview_chars: int = Field(default=150, ge=20, le=1000)

    model_config = {"env_prefix": "MAP_"}


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Map Explorer")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    map: MapSettings = Field(default_factory=MapSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def get_cors_config(self) -> Dict[str, Any]:
        """CORSMiddleware keyword arguments"""
        origins = self.security.cors_origins
        return {
            "allow_origins": origins,
            # Browsers refuse credentialed responses for a wildcard origin
            "allow_credentials": self.security.cors_allow_credentials and origins != ["*"],
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def use_settings(new_settings: Settings) -> Settings:
    """Install ``new_settings`` as the instance returned by get_settings()"""
    global settings
    settings = new_settings
    return settings
