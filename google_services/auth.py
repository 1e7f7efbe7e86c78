#!/usr/bin/env python3
"""
Google OAuth2 Authentication - Shared authentication for all Google services.

Handles the installed-app OAuth2 flow, token storage, and credential
management for:
- Gmail API
- Google Calendar API
- Google Sheets API
- Google Docs API
- Google Drive API
- YouTube Data API

OAuth client credentials are global (one Google Cloud project for every
checkout). Tokens are per-project so that different working directories
can act as different Google accounts.
"""

import json
import logging
import os
import sys
import webbrowser
from pathlib import Path
from typing import Optional, List, Dict, Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from config import AuthConfig, PROJECT_TOKEN_DIR, get_config
from google_services.callback_server import wait_for_authorization_code

logger = logging.getLogger(__name__)

# All scopes for Google services
SCOPES = [
    # Gmail
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.modify",
    # Calendar
    "https://www.googleapis.com/auth/calendar.readonly",
    "https://www.googleapis.com/auth/calendar.events",
    # Sheets
    "https://www.googleapis.com/auth/spreadsheets",
    # Docs
    "https://www.googleapis.com/auth/documents",
    # YouTube
    "https://www.googleapis.com/auth/youtube.readonly",
    "https://www.googleapis.com/auth/youtube.upload",
    # Drive (for listing files across services)
    "https://www.googleapis.com/auth/drive.readonly",
]

# Service API versions
SERVICE_VERSIONS = {
    "gmail": ("gmail", "v1"),
    "calendar": ("calendar", "v3"),
    "sheets": ("sheets", "v4"),
    "docs": ("docs", "v1"),
    "drive": ("drive", "v3"),
    "youtube": ("youtube", "v3"),
}

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"

GITIGNORE_PATTERN = f"{PROJECT_TOKEN_DIR}/*.local.*"
GITIGNORE_COMMENT = "# Google skill tokens (per-project auth)"

SETUP_INSTRUCTIONS = """
===============================================================================
                       GOOGLE SKILL - FIRST TIME SETUP
===============================================================================

This tool needs Google OAuth credentials to access Google services.

CREDENTIALS (one-time setup, shared across all projects):
  {credentials_path}

TOKENS (per-project, stores which Google account to use):
  .claude/google-skill.local.json (in your project directory)

STEP 1: Create a Google Cloud Project
  https://console.cloud.google.com/ -> project dropdown -> "New Project"

STEP 2: Enable the APIs (https://console.cloud.google.com/apis/library)
  Gmail API, Google Calendar API, Google Sheets API, Google Docs API,
  YouTube Data API v3, Google Drive API

STEP 3: Configure the OAuth consent screen
  https://console.cloud.google.com/apis/credentials/consent
  Select "External", add the Gmail, Calendar, Sheets, Docs, YouTube and
  Drive scopes, and add your email as a test user.

STEP 4: Create OAuth credentials
  https://console.cloud.google.com/apis/credentials
  "Create Credentials" -> "OAuth client ID" -> Application type "Desktop app"
  Download the JSON and save it to:
    {credentials_path}

  Or create the file manually:
  {{
    "installed": {{
      "client_id": "YOUR_CLIENT_ID.apps.googleusercontent.com",
      "client_secret": "YOUR_CLIENT_SECRET"
    }}
  }}

STEP 5: Run auth
  {tool_name} auth

This opens a browser to authenticate with Google. The token is saved to
your project's .claude/ directory, so different projects can use
different Google accounts.

===============================================================================
"""

NO_REFRESH_TOKEN_MESSAGE = (
    "No refresh token received.\n"
    "This can happen if you've already authorized this app.\n"
    "Fix: Go to https://myaccount.google.com/permissions\n"
    "     Remove access for this app, then run auth again."
)


class GoogleAuth:
    """
    Google OAuth2 authentication handler.

    Manages client credentials, per-project tokens, and service
    instantiation for all supported Google APIs.

    Usage:
        auth = GoogleAuth()
        youtube = auth.get_service("youtube")
        sheets = auth.get_service("sheets")
    """

    def __init__(
        self,
        config: Optional[AuthConfig] = None,
        cwd: Optional[Path] = None,
        tool_name: str = "google-gmail",
    ):
        """
        Initialize Google authentication.

        Args:
            config: Auth configuration (global config by default)
            cwd: Project directory holding .claude/ (current directory by default)
            tool_name: Command shown in "run auth" hints
        """
        self.config = config or get_config().auth
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.tool_name = tool_name
        self._credentials: Optional[Credentials] = None
        self._services: dict = {}

    @property
    def project_token_path(self) -> Path:
        return self.config.project_token_path(self.cwd)

    # -------------------------------------------------------------------------
    # Credentials and tokens
    # -------------------------------------------------------------------------

    def load_client_secrets(self) -> Dict[str, str]:
        """
        Load the OAuth client ID and secret.

        Tries the configured path, then the legacy path. Accepts both the
        downloaded format ({"installed": {...}} or {"web": {...}}) and a
        flat {"client_id", "client_secret"} object.

        Raises:
            FileNotFoundError: If no usable credentials file exists
        """
        for cred_path in self.config.credentials_search_paths():
            try:
                with open(cred_path, "r") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.debug("Skipping credentials file %s: %s", cred_path, e)
                continue

            if not isinstance(data, dict):
                continue

            creds = data.get("installed") or data.get("web") or data
            if not isinstance(creds, dict):
                logger.debug("Credentials file %s has no client object", cred_path)
                continue
            if not creds.get("client_id") or not creds.get("client_secret"):
                logger.debug("Credentials file %s lacks client_id/client_secret", cred_path)
                continue

            logger.debug("Using OAuth client credentials from %s", cred_path)
            return {
                "client_id": creds["client_id"],
                "client_secret": creds["client_secret"],
            }

        print(
            SETUP_INSTRUCTIONS.format(
                credentials_path=self.config.credentials_path,
                tool_name=self.tool_name,
            ),
            file=sys.stderr,
        )
        raise FileNotFoundError(f"Credentials not found at {self.config.credentials_path}")

    def find_token_path(self) -> Optional[Path]:
        """Return the first existing token file, project-local before global."""
        for token_path in self.config.token_search_paths(self.cwd):
            if token_path.exists():
                return token_path
        return None

    @property
    def credentials(self) -> Credentials:
        """Get current credentials (lazy load)."""
        if self._credentials is None:
            self._credentials = self.load_credentials()
        return self._credentials

    def load_credentials(self) -> Credentials:
        """
        Build credentials from the client secrets and the stored refresh token.

        Raises:
            FileNotFoundError: If credentials or token are missing
            ValueError: If the token file is unusable
            google.auth.exceptions.RefreshError: If Google rejects the token
        """
        client = self.load_client_secrets()
        token_path = self.find_token_path()

        if token_path is None:
            raise FileNotFoundError(
                f"Token not found. Run: {self.tool_name} auth\n"
                f"Token will be saved to: {self.project_token_path}"
            )

        try:
            with open(token_path, "r") as f:
                token_data = json.load(f)
        except ValueError as e:
            raise ValueError(f"Token file {token_path} is not valid JSON: {e}") from e

        refresh_token = token_data.get("refresh_token") if isinstance(token_data, dict) else None
        if not refresh_token:
            raise ValueError(f"Token file {token_path} has no refresh_token. Run auth again.")

        logger.debug("Loaded refresh token from %s", token_path)
        creds = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=TOKEN_URI,
            client_id=client["client_id"],
            client_secret=client["client_secret"],
        )

        if not creds.valid and creds.refresh_token:
            creds.refresh(Request())

        return creds

    # -------------------------------------------------------------------------
    # Authorization flow
    # -------------------------------------------------------------------------

    def ensure_gitignore(self) -> None:
        """Make sure per-project token files are ignored by git."""
        gitignore_path = self.cwd / ".gitignore"

        try:
            content = gitignore_path.read_text()
        except FileNotFoundError:
            gitignore_path.write_text(f"{GITIGNORE_COMMENT}\n{GITIGNORE_PATTERN}\n")
            print(f"Created .gitignore with {GITIGNORE_PATTERN}", file=sys.stderr)
            return

        if GITIGNORE_PATTERN in content:
            return

        separator = "\n" if content.endswith("\n") else "\n\n"
        gitignore_path.write_text(
            f"{content}{separator}{GITIGNORE_COMMENT}\n{GITIGNORE_PATTERN}\n"
        )
        print(f"Added {GITIGNORE_PATTERN} to .gitignore", file=sys.stderr)

    def _build_flow(self, client: Dict[str, str]) -> Flow:
        client_config = {
            "installed": {
                "client_id": client["client_id"],
                "client_secret": client["client_secret"],
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
            }
        }
        return Flow.from_client_config(
            client_config,
            scopes=SCOPES,
            redirect_uri=self.config.redirect_uri,
        )

    def authorize(self, open_browser: bool = True) -> Path:
        """
        Run the interactive OAuth2 authorization flow.

        Opens the consent page in a browser, waits for the redirect on the
        local callback port, exchanges the code, and stores the refresh
        token in the project token file.

        Returns:
            Path of the saved token file

        Raises:
            RuntimeError: If Google returned an error or no refresh token
            TimeoutError: If the redirect did not arrive in time
        """
        client = self.load_client_secrets()
        token_path = self.project_token_path
        token_path.parent.mkdir(parents=True, exist_ok=True)

        self.ensure_gitignore()

        flow = self._build_flow(client)
        auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

        print("\nOpening browser for authentication...", file=sys.stderr)
        print(f"If browser doesn't open, visit:\n {auth_url}\n", file=sys.stderr)

        def _open_browser():
            if open_browser and not webbrowser.open(auth_url):
                print("Could not open browser automatically.", file=sys.stderr)

        code = wait_for_authorization_code(
            self.config.callback_port,
            self.config.timeout,
            on_ready=_open_browser,
        )

        # Google may grant a subset of the requested scopes
        os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")
        tokens = flow.fetch_token(code=code)

        if not tokens.get("refresh_token"):
            raise RuntimeError(NO_REFRESH_TOKEN_MESSAGE)

        scope = tokens.get("scope")
        if isinstance(scope, (list, tuple)):
            scope = " ".join(scope)

        self._save_token(
            token_path,
            {
                "refresh_token": tokens["refresh_token"],
                "scope": scope,
                "token_type": tokens.get("token_type"),
            },
        )
        print(f"\nToken saved to {token_path}", file=sys.stderr)

        self._credentials = None
        self._services = {}
        return token_path

    def _save_token(self, token_path: Path, token_data: Dict[str, Any]) -> None:
        """Persist token data with owner-only permissions."""
        fd = os.open(token_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as token:
            json.dump(token_data, token, indent=2)
        # O_CREAT mode only applies to new files
        os.chmod(token_path, 0o600)

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    def get_service(self, service_name: str) -> Any:
        """
        Get an authenticated Google API service.

        Args:
            service_name: One of 'gmail', 'calendar', 'sheets', 'docs',
                'drive', 'youtube'

        Returns:
            Google API service object

        Raises:
            ValueError: If service_name is not recognized
        """
        if service_name not in SERVICE_VERSIONS:
            raise ValueError(
                f"Unknown service: {service_name}. "
                f"Valid services: {list(SERVICE_VERSIONS.keys())}"
            )

        # Return cached service if available
        if service_name in self._services:
            return self._services[service_name]

        api_name, api_version = SERVICE_VERSIONS[service_name]
        service = build(
            api_name,
            api_version,
            credentials=self.credentials,
            cache_discovery=False,
        )
        self._services[service_name] = service

        return service

    @property
    def scopes(self) -> List[str]:
        return list(SCOPES)
