#!/usr/bin/env python3
"""
Configuration Module - Centralized configuration for Google Skill

Loads configuration from environment variables (and a local .env file).
Resolves where OAuth client credentials and per-project tokens live.
"""

import os
from pathlib import Path
from typing import Optional, List
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

CONFIG_DIR_NAME = "google-skill"
LEGACY_CONFIG_DIR_NAME = "gmail-skill"

# Project-local token storage (different Google account per project)
PROJECT_TOKEN_DIR = ".claude"
PROJECT_TOKEN_FILE = "google-skill.local.json"
LEGACY_PROJECT_TOKEN_FILE = "gmail-skill.local.json"


def _default_xdg_config_home() -> Path:
    return Path.home() / ".config"


@dataclass
class AuthConfig:
    """OAuth client credentials and token locations."""
    xdg_config_home: Path = field(default_factory=_default_xdg_config_home)
    credentials_file: str = ""  # empty = <config dir>/credentials.json
    callback_port: int = 3000
    callback_path: str = "/callback"
    timeout: int = 300  # seconds

    @property
    def config_dir(self) -> Path:
        return self.xdg_config_home / CONFIG_DIR_NAME

    @property
    def legacy_config_dir(self) -> Path:
        return self.xdg_config_home / LEGACY_CONFIG_DIR_NAME

    @property
    def credentials_path(self) -> Path:
        if self.credentials_file:
            return Path(self.credentials_file).expanduser()
        return self.config_dir / "credentials.json"

    @property
    def legacy_credentials_path(self) -> Path:
        return self.legacy_config_dir / "credentials.json"

    @property
    def redirect_uri(self) -> str:
        return f"http://localhost:{self.callback_port}{self.callback_path}"

    def credentials_search_paths(self) -> List[Path]:
        return [self.credentials_path, self.legacy_credentials_path]

    def project_token_path(self, cwd: Optional[Path] = None) -> Path:
        return Path(cwd or Path.cwd()) / PROJECT_TOKEN_DIR / PROJECT_TOKEN_FILE

    def token_search_paths(self, cwd: Optional[Path] = None) -> List[Path]:
        """Token files in lookup order: project-local first, then global."""
        project_dir = Path(cwd or Path.cwd()) / PROJECT_TOKEN_DIR
        return [
            project_dir / PROJECT_TOKEN_FILE,
            project_dir / LEGACY_PROJECT_TOKEN_FILE,
            self.config_dir / "token.json",
            self.legacy_config_dir / "token.json",
        ]


@dataclass
class LoggingConfig:
    """Diagnostic logging (always written to stderr)."""
    level: str = "WARNING"


@dataclass
class Config:
    """Main configuration container."""
    auth: AuthConfig = field(default_factory=AuthConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config() -> Config:
    """
    Load configuration from environment variables.

    Returns:
        Config object with all settings
    """
    config = Config()

    # Auth
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    if xdg_config:
        config.auth.xdg_config_home = Path(xdg_config)
    config.auth.credentials_file = os.getenv("GOOGLE_SKILL_CREDENTIALS_FILE", "")
    config.auth.callback_port = int(os.getenv("GOOGLE_SKILL_OAUTH_PORT", "3000"))
    config.auth.timeout = int(os.getenv("GOOGLE_SKILL_AUTH_TIMEOUT", "300"))

    # Logging
    config.logging.level = os.getenv("GOOGLE_SKILL_LOG_LEVEL", "WARNING").upper()

    return config


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object (loaded on first call)
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
