"""
Per-environment configuration files.

Each environment may ship a ``.env.<environment>`` file next to the process
working directory. The server process selects one through the ENVIRONMENT
variable, so the launcher and every uvicorn worker resolve the same file.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from .settings import Environment, Settings, use_settings

logger = logging.getLogger(__name__)

ENVIRONMENT_VARIABLE = "ENVIRONMENT"


def env_file_for(environment: Environment, directory: Path = Path(".")) -> Path:
    return directory / f".env.{environment.value}"


class ConfigLoader:
    """Locates, reads and scaffolds environment configuration files"""

    @staticmethod
    def resolve_environment(environment: Optional[str] = None) -> Environment:
        """Explicit name, else the ENVIRONMENT variable, else development."""
        name = environment or os.getenv(ENVIRONMENT_VARIABLE) or Environment.DEVELOPMENT.value
        return Environment(name.lower())

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Build settings for an environment.

        Values from ``.env.<environment>`` take precedence over the shared
        ``.env`` file; process environment variables override both.

        Raises:
            ValueError: unknown environment name or invalid setting values
        """
        env = ConfigLoader.resolve_environment(environment)
        env_file = env_file_for(env)

        if not env_file.exists():
            logger.info(f"No {env_file} found, using .env and process environment only")
            return Settings(environment=env)

        logger.info(f"Loading configuration from {env_file}")
        return Settings(_env_file=(".env", str(env_file)), environment=env)

    @staticmethod
    def get_available_environments() -> List[str]:
        """Environments that have a configuration file in the working directory"""
        found = []
        for env in Environment:
            if env_file_for(env).exists():
                found.append(env.value)
        return found

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Write a commented sample configuration for ``environment``.

        Returns:
            Path of the written file (``.env.<environment>.sample`` by default)
        """
        env = Environment(environment.lower())
        output_path = output_path or f"{env_file_for(env)}.sample"
        defaults = Settings()
        dev = env == Environment.DEVELOPMENT

        lines = [
            f"# Map Explorer configuration for the {env.value} environment",
            f"# Copy to .env.{env.value} and adjust",
            "",
            f"ENVIRONMENT={env.value}",
            f"DEBUG={str(dev).lower()}",
            f"HOST={defaults.host}",
            f"PORT={defaults.port}",
            f"RELOAD={str(dev).lower()}",
            f"LOG_LEVEL={'DEBUG' if dev else defaults.log_level.value}",
            f"LOG_FORMAT={'text' if dev else defaults.log_format}",
            "",
            "# Place-name geocoder; requests without a client identifier are refused",
            f"GEOCODER_API_URL={defaults.geocoder.api_url}",
            "GEOCODER_USER_AGENT=YourApp/1.0 (contact@example.com)",
            "",
            "# Nearby encyclopedia content",
            f"CONTENT_API_URL={defaults.content.api_url}",
            "CONTENT_USER_AGENT=YourApp/1.0 (contact@example.com)",
            f"CONTENT_SEARCH_RADIUS_M={defaults.content.search_radius_m}",
            f"CONTENT_PAGE_SIZE={defaults.content.page_size}",
            f"CONTENT_THUMBNAIL_SIZE={defaults.content.thumbnail_size}",
            "",
            "# Initial map view",
            f"MAP_DEFAULT_LATITUDE={defaults.map.default_latitude}",
            f"MAP_DEFAULT_LONGITUDE={defaults.map.default_longitude}",
            f"MAP_DEFAULT_ZOOM={defaults.map.default_zoom}",
            f"MAP_FOCUS_ZOOM={defaults.map.focus_zoom}",
            "",
            "SECURITY_CORS_ORIGINS=*",
        ]

        Path(output_path).write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path


def activate_environment(environment: Optional[str] = None) -> Settings:
    """Load an environment's settings and make them the process-wide settings."""
    return use_settings(ConfigLoader.load_environment_config(environment))
