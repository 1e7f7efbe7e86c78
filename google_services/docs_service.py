#!/usr/bin/env python3
"""
Google Docs Service - Read documents as plain text and insert text.

Only text runs are read; styling, images and other rich content are
ignored.
"""

import logging
from typing import Optional, List, Dict, Any

from google_services.auth import GoogleAuth
from google_services.drive_service import DriveService, DOCUMENT_MIME_TYPE
from google_services.mapping import compact

logger = logging.getLogger(__name__)


def document_url(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


def extract_text(content: List[Dict[str, Any]]) -> str:
    """
    Concatenate the text runs of a document body.

    Recurses into table cells so tabular text is not lost.
    """
    parts = []
    for element in content:
        if "paragraph" in element:
            for run in element["paragraph"].get("elements", []):
                text_run = run.get("textRun")
                if text_run:
                    parts.append(text_run.get("content", ""))
        elif "table" in element:
            for row in element["table"].get("tableRows", []):
                for cell in row.get("tableCells", []):
                    parts.append(extract_text(cell.get("content", [])))
    return "".join(parts)


def _end_index(document: Dict[str, Any]) -> int:
    """Index just before the body's final newline."""
    content = (document.get("body") or {}).get("content", [])
    if not content:
        return 1
    return max(content[-1].get("endIndex", 2) - 1, 1)


class DocsService:
    """
    Google Docs API service wrapper.
    """

    def __init__(self, auth: Optional[GoogleAuth] = None, drive: Optional[DriveService] = None):
        """
        Initialize Docs service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
            drive: DriveService used for listing (shares auth by default)
        """
        self._auth = auth or GoogleAuth()
        self._drive = drive or DriveService(self._auth)
        self._service = None

    @property
    def service(self):
        """Get the Docs API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("docs")
        return self._service

    def list_documents(self, max_results: int = 20) -> List[Dict[str, Any]]:
        """List recently modified documents."""
        return self._drive.list_files(DOCUMENT_MIME_TYPE, max_results)

    def get_document(self, document_id: str) -> Dict[str, Any]:
        """Get a document's title and plain text content."""
        document = self.service.documents().get(documentId=document_id).execute()
        doc_id = document.get("documentId", document_id)
        return compact({
            "id": doc_id,
            "title": document.get("title", ""),
            "revisionId": document.get("revisionId"),
            "url": document_url(doc_id),
            "content": extract_text((document.get("body") or {}).get("content", [])),
        })

    def create_document(self, title: str, content: Optional[str] = None) -> Dict[str, Any]:
        """Create a document, optionally with initial text."""
        document = self.service.documents().create(body={"title": title}).execute()
        doc_id = document.get("documentId")

        if content:
            self._insert_text(doc_id, 1, content)

        logger.info("Created document %s", doc_id)
        return {
            "id": doc_id,
            "title": document.get("title", title),
            "url": document_url(doc_id),
        }

    def append_text(self, document_id: str, content: str) -> Dict[str, Any]:
        """Insert text at the end of the document body."""
        document = self.service.documents().get(documentId=document_id).execute()
        index = _end_index(document)
        self._insert_text(document_id, index, content)
        return {
            "id": document_id,
            "title": document.get("title", ""),
            "insertedAt": index,
        }

    def replace_text(
        self,
        document_id: str,
        find: str,
        replace: str,
        match_case: bool = False,
    ) -> Dict[str, Any]:
        """Replace every occurrence of find with replace."""
        result = self.service.documents().batchUpdate(
            documentId=document_id,
            body={
                "requests": [{
                    "replaceAllText": {
                        "containsText": {"text": find, "matchCase": match_case},
                        "replaceText": replace,
                    }
                }]
            },
        ).execute()

        replies = result.get("replies") or [{}]
        changed = (replies[0].get("replaceAllText") or {}).get("occurrencesChanged", 0)
        return {"id": document_id, "occurrencesChanged": changed}

    def _insert_text(self, document_id: str, index: int, text: str) -> None:
        self.service.documents().batchUpdate(
            documentId=document_id,
            body={"requests": [{"insertText": {"location": {"index": index}, "text": text}}]},
        ).execute()
