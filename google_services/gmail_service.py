#!/usr/bin/env python3
"""
Gmail Service - Read, search, send and label email via Gmail API.

List operations return one page of messages, each fetched in metadata
format for its headers. Message bodies are decoded from base64url,
preferring the text/plain part.
"""

import base64
import logging
from email.mime.text import MIMEText
from typing import Optional, List, Dict, Any, Union

from google_services.auth import GoogleAuth
from google_services.mapping import compact

logger = logging.getLogger(__name__)

METADATA_HEADERS = ["From", "To", "Cc", "Subject", "Date"]


def _headers(message: Dict[str, Any]) -> Dict[str, str]:
    """Header name -> value for a message payload (names lowercased)."""
    headers = (message.get("payload") or {}).get("headers", [])
    return {h["name"].lower(): h.get("value", "") for h in headers if "name" in h}


def _decode(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def _find_part(part: Dict[str, Any], mime_type: str) -> Optional[str]:
    """Depth-first search for the first part of mime_type with body data."""
    if part.get("mimeType") == mime_type and (part.get("body") or {}).get("data"):
        return _decode(part["body"]["data"])
    for child in part.get("parts", []) or []:
        found = _find_part(child, mime_type)
        if found is not None:
            return found
    return None


def extract_body(payload: Dict[str, Any]) -> str:
    """Plain text body of a message, falling back to HTML, then to ''."""
    for mime_type in ("text/plain", "text/html"):
        body = _find_part(payload, mime_type)
        if body is not None:
            return body

    data = (payload.get("body") or {}).get("data")
    return _decode(data) if data else ""


def message_summary(message: Dict[str, Any]) -> Dict[str, Any]:
    headers = _headers(message)
    return {
        "id": message.get("id"),
        "threadId": message.get("threadId"),
        "snippet": message.get("snippet", ""),
        "from": headers.get("from", ""),
        "to": headers.get("to", ""),
        "subject": headers.get("subject", ""),
        "date": headers.get("date", ""),
        "labels": message.get("labelIds", []),
    }


def _join(addresses: Optional[Union[str, List[str]]]) -> Optional[str]:
    if isinstance(addresses, list):
        return ", ".join(addresses)
    return addresses


class GmailService:
    """
    Gmail API service wrapper.

    Provides methods for listing, reading, sending, drafting and
    labelling messages of the authenticated user.
    """

    def __init__(self, auth: Optional[GoogleAuth] = None):
        """
        Initialize Gmail service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
        """
        self._auth = auth or GoogleAuth()
        self._service = None

    @property
    def service(self):
        """Get the Gmail API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("gmail")
        return self._service

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def list_messages(
        self,
        max_results: int = 20,
        label_id: Optional[str] = "INBOX",
        query: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List message summaries.

        Args:
            max_results: Maximum number of messages
            label_id: Restrict to a label (None for all mail)
            query: Gmail search query (e.g. "from:alice is:unread")

        Returns:
            List of message summary dicts
        """
        params: Dict[str, Any] = {"userId": "me", "maxResults": max_results}
        if label_id:
            params["labelIds"] = [label_id]
        if query:
            params["q"] = query

        response = self.service.users().messages().list(**params).execute()
        messages = response.get("messages", [])
        logger.debug("Listed %d message id(s)", len(messages))

        summaries = []
        for msg in messages:
            metadata = self.service.users().messages().get(
                userId="me",
                id=msg["id"],
                format="metadata",
                metadataHeaders=METADATA_HEADERS,
            ).execute()
            summaries.append(message_summary(metadata))
        return summaries

    def search_messages(self, query: str, max_results: int = 20) -> List[Dict[str, Any]]:
        """Search all mail with Gmail query syntax."""
        return self.list_messages(max_results=max_results, label_id=None, query=query)

    def get_message(self, message_id: str) -> Dict[str, Any]:
        """Get a full message including its decoded body."""
        message = self.service.users().messages().get(
            userId="me",
            id=message_id,
            format="full",
        ).execute()

        record = message_summary(message)
        record["cc"] = _headers(message).get("cc")
        record["body"] = extract_body(message.get("payload") or {})
        return compact(record)

    def list_labels(self) -> List[Dict[str, Any]]:
        """List all labels (system and user)."""
        response = self.service.users().labels().list(userId="me").execute()
        return [
            compact({"id": label.get("id"), "name": label.get("name"), "type": label.get("type")})
            for label in response.get("labels", [])
        ]

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    @staticmethod
    def build_raw_message(
        to: Union[str, List[str]],
        subject: str,
        body: str,
        cc: Optional[Union[str, List[str]]] = None,
        bcc: Optional[Union[str, List[str]]] = None,
    ) -> str:
        """Build a plain text MIME message encoded for the Gmail API."""
        message = MIMEText(body, "plain")
        message["To"] = _join(to)
        message["Subject"] = subject

        cc = _join(cc)
        bcc = _join(bcc)
        if cc:
            message["Cc"] = cc
        if bcc:
            message["Bcc"] = bcc

        return base64.urlsafe_b64encode(message.as_bytes()).decode("utf-8")

    def send_message(
        self,
        to: Union[str, List[str]],
        subject: str,
        body: str,
        cc: Optional[Union[str, List[str]]] = None,
        bcc: Optional[Union[str, List[str]]] = None,
    ) -> Dict[str, Any]:
        """
        Send a plain text email.

        Returns:
            Dict with the sent message id, threadId and labels
        """
        raw = self.build_raw_message(to, subject, body, cc, bcc)
        result = self.service.users().messages().send(
            userId="me",
            body={"raw": raw},
        ).execute()
        logger.info("Sent message %s", result.get("id"))
        return {
            "id": result.get("id"),
            "threadId": result.get("threadId"),
            "labels": result.get("labelIds", []),
        }

    def create_draft(
        self,
        to: Union[str, List[str]],
        subject: str,
        body: str,
        cc: Optional[Union[str, List[str]]] = None,
        bcc: Optional[Union[str, List[str]]] = None,
    ) -> Dict[str, Any]:
        """Save a draft without sending it."""
        raw = self.build_raw_message(to, subject, body, cc, bcc)
        draft = self.service.users().drafts().create(
            userId="me",
            body={"message": {"raw": raw}},
        ).execute()
        return {
            "draftId": draft.get("id"),
            "messageId": (draft.get("message") or {}).get("id"),
        }

    def modify_labels(
        self,
        message_id: str,
        add: Optional[List[str]] = None,
        remove: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Add and/or remove labels on a message.

        Marking as read is ``remove=["UNREAD"]``.
        """
        body = {}
        if add:
            body["addLabelIds"] = add
        if remove:
            body["removeLabelIds"] = remove

        result = self.service.users().messages().modify(
            userId="me",
            id=message_id,
            body=body,
        ).execute()
        return {"id": result.get("id", message_id), "labels": result.get("labelIds", [])}
