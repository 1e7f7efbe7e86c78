"""
Google API wrappers for Google Skill.

Provides shared authentication and services for:
- Gmail (read, search, send, labels)
- Calendar (events)
- Sheets (cell values)
- Docs (plain text)
- Drive (file listing)
- YouTube (channels, videos, playlists, search, comments)
"""

from google_services.auth import GoogleAuth, SCOPES
from google_services.gmail_service import GmailService
from google_services.calendar_service import CalendarService
from google_services.sheets_service import SheetsService
from google_services.docs_service import DocsService
from google_services.drive_service import DriveService
from google_services.youtube_service import YouTubeService

__all__ = [
    "GoogleAuth",
    "SCOPES",
    "GmailService",
    "CalendarService",
    "SheetsService",
    "DocsService",
    "DriveService",
    "YouTubeService",
]
