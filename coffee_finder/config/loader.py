"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import (
    Environment,
    NominatimSettings,
    OSRMSettings,
    PresentationSettings,
    RefreshSettings,
    SecuritySettings,
    Settings,
)

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            env_file = str(env_file_path)
            # nested settings read their own prefixes, so each gets the file too
            return Settings(
                _env_file=env_file,
                environment=env,
                refresh=RefreshSettings(_env_file=env_file),
                presentation=PresentationSettings(_env_file=env_file),
                nominatim=NominatimSettings(_env_file=env_file),
                osrm=OSRMSettings(_env_file=env_file),
                security=SecuritySettings(_env_file=env_file),
            )

        logger.warning(
            f"Environment file {env_file_path} not found, using default settings"
        )
        return Settings(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            env_name = env_file.name.replace(".env.", "", 1)
            if env_name.endswith(".sample"):
                continue
            env_files.append(env_name)
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
        except ValueError:
            return False

        if not Path(f".env.{env.value}").exists():
            return False

        try:
            settings = ConfigLoader.load_environment_config(env.value)
        except Exception as e:
            logger.error(f"Configuration for '{env.value}' failed to load: {e}")
            return False

        required_settings = [
            settings.app_name,
            settings.environment,
            settings.host,
            settings.port,
            settings.refresh.search_query,
        ]
        return all(setting is not None for setting in required_settings)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}

# Refresh Workflow
REFRESH_SEARCH_QUERY={defaults.refresh.search_query}
REFRESH_SEARCH_RADIUS_M={defaults.refresh.search_radius_m}
REFRESH_DEBOUNCE_DELAY_SECONDS={defaults.refresh.debounce_delay_seconds}
REFRESH_LOCATION_POLICY={defaults.refresh.location_policy.value}
REFRESH_CANCEL_SUPERSEDED_REQUESTS={str(defaults.refresh.cancel_superseded_requests).lower()}

# Map Annotations
MAP_CLUSTER_MAX_COUNT={defaults.presentation.cluster_max_count}
MAP_CLUSTER_MAX_TEXT={defaults.presentation.cluster_max_text}

# Place Search (Nominatim)
NOMINATIM_BASE_URL={defaults.nominatim.base_url}
NOMINATIM_USER_AGENT=your-app-name/1.0 (contact: you@example.com)
NOMINATIM_TIMEOUT_SECONDS={defaults.nominatim.timeout_seconds}

# Directions (OSRM)
OSRM_BASE_URL={defaults.osrm.base_url}
OSRM_TIMEOUT_SECONDS={defaults.osrm.timeout_seconds}

# Security Configuration
SECURITY_CORS_ORIGINS=*
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
