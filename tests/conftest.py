"""
Pytest configuration and fixtures for Google Skill tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import AuthConfig  # noqa: E402


@pytest.fixture
def auth_config(tmp_path):
    """Auth config rooted in a temporary XDG config home."""
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    return AuthConfig(xdg_config_home=xdg)


@pytest.fixture
def project_dir(tmp_path):
    """A temporary project (working) directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def write_json():
    """Write a JSON file, creating parent directories."""
    def _write(path: Path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))
        return path
    return _write


@pytest.fixture
def client_secrets(auth_config, write_json):
    """Downloaded-format OAuth client file at the configured location."""
    return write_json(
        auth_config.credentials_path,
        {"installed": {"client_id": "cid.apps.googleusercontent.com", "client_secret": "shh"}},
    )


@pytest.fixture
def api_services():
    """One MagicMock API client per service name."""
    return {}


@pytest.fixture
def fake_auth(api_services):
    """GoogleAuth stand-in whose get_service returns MagicMock clients."""
    auth = MagicMock()

    def _get_service(name):
        return api_services.setdefault(name, MagicMock(name=f"{name}-api"))

    auth.get_service.side_effect = _get_service
    return auth
