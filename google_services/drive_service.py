#!/usr/bin/env python3
"""
Google Drive Service - List Google Sheets and Docs files from Drive.

Sheets and Docs APIs cannot enumerate files; Drive can.
"""

import logging
from typing import Optional, List, Dict, Any

from google_services.auth import GoogleAuth
from google_services.mapping import compact

logger = logging.getLogger(__name__)

SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"


class DriveService:
    """
    Google Drive API service wrapper.
    """

    def __init__(self, auth: Optional[GoogleAuth] = None):
        """
        Initialize Drive service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
        """
        self._auth = auth or GoogleAuth()
        self._service = None

    @property
    def service(self):
        """Get the Drive API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("drive")
        return self._service

    def list_files(
        self,
        mime_type: str,
        max_results: int = 20,
    ) -> List[Dict[str, Any]]:
        """
        List the most recently modified files of one MIME type.

        Args:
            mime_type: Google Drive MIME type
            max_results: Page size (a single page is returned)

        Returns:
            List of file dicts with id, name, modifiedTime, url
        """
        query = f"mimeType='{mime_type}' and trashed=false"

        response = self.service.files().list(
            q=query,
            spaces="drive",
            fields="files(id, name, modifiedTime, webViewLink)",
            pageSize=max_results,
            orderBy="modifiedTime desc",
        ).execute()

        files = response.get("files", [])
        logger.debug("Drive returned %d file(s) of type %s", len(files), mime_type)
        return [
            compact({
                "id": f.get("id"),
                "name": f.get("name", ""),
                "modifiedTime": f.get("modifiedTime"),
                "url": f.get("webViewLink"),
            })
            for f in files
        ]
