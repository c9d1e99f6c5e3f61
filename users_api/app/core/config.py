"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Values
from a ``.env`` file in the project root are loaded first so that a
local checkout can be configured without exporting variables in the
shell; variables already present in the environment take precedence.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[3]

load_dotenv(PROJECT_ROOT / ".env")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Users API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Address the uvicorn server binds to (see ``run.py``).
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by ``Settings.database_path``.
    database_url: str = os.getenv("DATABASE_URL", "users.db")

    @property
    def database_path(self) -> str:
        """Absolute path of the database file."""
        if os.path.isabs(self.database_url):
            return self.database_url
        return str((PROJECT_ROOT / self.database_url).resolve())


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
