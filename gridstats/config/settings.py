"""Application settings and configuration management.

This file implements a centralized configuration system using Pydantic Settings.
It handles environment variables, default values, and configuration validation
for the whole stats dashboard: the API server, the record store, the seed data
source and the dashboard client.

Key Benefits:
- Type safety: All settings have defined types with validation
- Environment integration: Automatically loads from .env files
- Documentation: Clear descriptions of what each setting controls
- Flexibility: Easy to override for different environments

For beginners:

Pydantic Settings: A Python library that automatically validates configuration
and loads values from environment variables, .env files, and defaults.

Environment Variables: System variables that configure applications without
changing code. Example: DATABASE_URL=sqlite:///mydb.db
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Configuration Sources (in priority order):
    1. Environment variables (highest priority)
    2. .env file values
    3. Default values defined here (lowest priority)

    Example Usage:
    - In code: `settings.database_url`
    - Environment variable: `DATABASE_URL=sqlite:///prod.db`
    - .env file: `database_url=sqlite:///dev.db`
    """

    # Pydantic configuration for settings behavior
    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file in project root
        env_file_encoding="utf-8",  # Handle unicode characters in env file
        case_sensitive=False,  # Allow DATABASE_URL or database_url
        extra="ignore",  # Unrelated keys in a shared .env are not errors
    )

    # API Configuration - FastAPI web server settings
    api_host: str = "127.0.0.1"  # Host to bind server (localhost for development)
    api_port: int = 8000  # Port number for API server
    api_reload: bool = False  # Auto-reload on code changes (True for development)

    # Error responses are sent with HTTP 200 unless this is switched on
    strict_status_codes: bool = False

    # Database Configuration - SQLAlchemy connection settings
    database_url: str = "sqlite:///data/database/gridstats.db"  # Database connection string
    database_echo: bool = False  # Log all SQL queries (True for debugging, False for prod)

    # Seed data source - Mockaroo-style random data generator
    mockaroo_base_url: str = "https://my.api.mockaroo.com"
    mockaroo_api_key: str = ""  # Sent as ?key=...; most schemas require one
    mockaroo_timeout: float = 30.0  # Request timeout in seconds
    mockaroo_games_endpoint: str = "gamedata"
    mockaroo_players_endpoint: str = "playerdata"
    # "shared": one player batch is re-used for every seeded game
    # "per_game": a fresh player batch is fetched for each seeded game
    roster_mode: Literal["shared", "per_game"] = "shared"

    # Dashboard client configuration
    dashboard_api_url: str = "http://127.0.0.1:8000/api"  # Where the dashboard finds the API
    dashboard_timeout: float = 10.0
    home_team_name: str = "San Francisco 49ers"  # Shown in dashboard headers
    export_filename_prefix: str = "49ers-stats"  # CSV export file names start with this

    # Logging Configuration - Application logging settings
    log_level: str = "INFO"  # Log level (DEBUG, INFO, WARNING, ERROR)
    log_file: Path = Path("data/logs/gridstats.log")  # Log file location

    @property
    def project_root(self) -> Path:
        """Get the project root directory.

        Calculates the project root by going up 3 levels from this file:
        gridstats/config/settings.py -> gridstats/config -> gridstats -> project_root

        Returns:
            Path object pointing to the project root directory
        """
        return Path(__file__).parent.parent.parent

    @property
    def data_dir(self) -> Path:
        """Get the data directory.

        Used for storing the SQLite database, logs and CSV exports.

        Returns:
            Path object pointing to the data directory
        """
        return self.project_root / "data"

    @property
    def exports_dir(self) -> Path:
        """Default directory for dashboard CSV exports."""
        return self.data_dir / "exports"


# Global settings instance - singleton pattern for application-wide configuration
# Example: from gridstats.config import settings; print(settings.database_url)
settings = Settings()
