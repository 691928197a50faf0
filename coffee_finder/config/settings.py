"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Optional, Dict, Any, List
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


class LocationPolicy(str, Enum):
    """How location fixes drive the search cycle"""
    CONTINUOUS = "continuous"  # every fix restarts search + debounce
    SINGLE = "single"  # only the first fix is processed


class RefreshSettings(BaseSettings):
    """Search and route refresh behaviour"""

    search_query: str = Field(default="coffee", min_length=1)
    search_radius_m: float = Field(default=1000.0, gt=0, le=50000)
    debounce_delay_seconds: float = Field(default=0.8, ge=0.0, le=60.0)
    location_policy: LocationPolicy = Field(default=LocationPolicy.CONTINUOUS)
    cancel_superseded_requests: bool = Field(default=True)

    @field_validator('location_policy', mode='before')
    @classmethod
    def normalize_policy(cls, v):
        """Accept policy names in any case"""
        if isinstance(v, str):
            return LocationPolicy(v.strip().lower())
        return v

    model_config = {
        "env_prefix": "REFRESH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class PresentationSettings(BaseSettings):
    """Map annotation rendering rules"""

    cluster_max_count: int = Field(default=100, ge=1)
    cluster_max_text: str = Field(default="99+")
    cluster_grid_decimals: int = Field(default=3, ge=0, le=6)
    annotation_default_text: str = Field(default="")

    model_config = {
        "env_prefix": "MAP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class NominatimSettings(BaseSettings):
    """Nominatim place search configuration"""

    base_url: str = Field(default="https://nominatim.openstreetmap.org")
    user_agent: str = Field(
        default="coffee-finder/1.0 (contact: example@example.com)",
        description="Nominatim usage policy requires an identifying User-Agent"
    )
    referer: Optional[str] = Field(default=None)
    timeout_seconds: float = Field(default=5.0, gt=0, le=60)
    max_results: int = Field(default=25, ge=1, le=50)

    model_config = {
        "env_prefix": "NOMINATIM_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class OSRMSettings(BaseSettings):
    """OSRM directions configuration"""

    base_url: str = Field(default="https://router.project-osrm.org")
    timeout_seconds: float = Field(default=5.0, gt=0, le=60)

    model_config = {
        "env_prefix": "OSRM_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST"]
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

    model_config = {
        "env_prefix": "SECURITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Coffee Finder")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    refresh: RefreshSettings = Field(default_factory=RefreshSettings)
    presentation: PresentationSettings = Field(default_factory=PresentationSettings)
    nominatim: NominatimSettings = Field(default_factory=NominatimSettings)
    osrm: OSRMSettings = Field(default_factory=OSRMSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
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


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
