#!/usr/bin/env python3
"""
Google Calendar Service - List, read, create and delete events.

Times are passed through as ISO 8601 strings. A bare YYYY-MM-DD date
creates an all-day event.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any

from google_services.auth import GoogleAuth
from google_services.mapping import compact

logger = logging.getLogger(__name__)

DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _rfc3339(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def event_record(event: Dict[str, Any]) -> Dict[str, Any]:
    start = event.get("start") or {}
    end = event.get("end") or {}
    return compact({
        "id": event.get("id"),
        "summary": event.get("summary") or "(No title)",
        "description": event.get("description"),
        "location": event.get("location"),
        "start": start.get("dateTime", start.get("date")),
        "end": end.get("dateTime", end.get("date")),
        "allDay": "date" in start and "dateTime" not in start,
        "status": event.get("status"),
        "htmlLink": event.get("htmlLink"),
        "attendees": [a.get("email") for a in event.get("attendees", []) if a.get("email")],
    })


class CalendarService:
    """
    Google Calendar API service wrapper.
    """

    def __init__(self, auth: Optional[GoogleAuth] = None):
        """
        Initialize Calendar service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
        """
        self._auth = auth or GoogleAuth()
        self._service = None

    @property
    def service(self):
        """Get the Calendar API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("calendar")
        return self._service

    def list_calendars(self) -> List[Dict[str, Any]]:
        """
        List calendars on the user's calendar list (first page).

        Returns:
            List of calendar dicts with id, summary, etc.
        """
        result = self.service.calendarList().list().execute()
        return [
            compact({
                "id": cal.get("id"),
                "summary": cal.get("summary", ""),
                "description": cal.get("description"),
                "primary": bool(cal.get("primary", False)),
                "accessRole": cal.get("accessRole", ""),
                "timeZone": cal.get("timeZone"),
            })
            for cal in result.get("items", [])
        ]

    def list_events(
        self,
        calendar_id: str = "primary",
        days: int = 7,
        max_results: int = 50,
        query: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        List upcoming events.

        Args:
            calendar_id: Calendar to read
            days: Window length from now
            max_results: Maximum number of events
            query: Free text filter
            now: Window start (current UTC time by default)

        Returns:
            List of event records ordered by start time
        """
        start = now or datetime.now(timezone.utc)
        params: Dict[str, Any] = {
            "calendarId": calendar_id,
            "timeMin": _rfc3339(start),
            "timeMax": _rfc3339(start + timedelta(days=days)),
            "maxResults": max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }
        if query:
            params["q"] = query

        result = self.service.events().list(**params).execute()
        return [event_record(e) for e in result.get("items", [])]

    def get_event(self, event_id: str, calendar_id: str = "primary") -> Dict[str, Any]:
        event = self.service.events().get(calendarId=calendar_id, eventId=event_id).execute()
        return event_record(event)

    def create_event(
        self,
        summary: str,
        start: str,
        end: str,
        description: Optional[str] = None,
        location: Optional[str] = None,
        attendees: Optional[List[str]] = None,
        time_zone: Optional[str] = None,
        calendar_id: str = "primary",
    ) -> Dict[str, Any]:
        """
        Create an event.

        Args:
            summary: Event title
            start: ISO datetime, or YYYY-MM-DD for an all-day event
            end: ISO datetime, or YYYY-MM-DD (exclusive) for an all-day event
            description: Optional event description
            location: Optional location
            attendees: Optional attendee email addresses
            time_zone: IANA time zone (calendar's own time zone by default)
            calendar_id: Calendar to create the event in

        Returns:
            Created event record
        """
        event_body: Dict[str, Any] = {"summary": summary}

        if DATE_ONLY.match(start) and DATE_ONLY.match(end):
            event_body["start"] = {"date": start}
            event_body["end"] = {"date": end}
        else:
            tz = time_zone or self._get_timezone(calendar_id)
            event_body["start"] = {"dateTime": start, "timeZone": tz}
            event_body["end"] = {"dateTime": end, "timeZone": tz}

        if description:
            event_body["description"] = description
        if location:
            event_body["location"] = location
        if attendees:
            event_body["attendees"] = [{"email": email} for email in attendees]

        created = self.service.events().insert(
            calendarId=calendar_id,
            body=event_body,
        ).execute()
        logger.info("Created event %s", created.get("id"))
        return event_record(created)

    def delete_event(self, event_id: str, calendar_id: str = "primary") -> Dict[str, Any]:
        self.service.events().delete(calendarId=calendar_id, eventId=event_id).execute()
        return {"id": event_id, "deleted": True}

    def _get_timezone(self, calendar_id: str = "primary") -> str:
        """Get the time zone configured on a calendar."""
        calendar = self.service.calendars().get(calendarId=calendar_id).execute()
        return calendar.get("timeZone", "UTC")
