#!/usr/bin/env python3
"""
Calendar CLI - List, read, create and delete Google Calendar events

Usage:
    google-calendar <command> [id] [--flag=value]

Commands:
    auth                    Authenticate with Google (per-project token)

    calendars               List your calendars

    events                  List upcoming events
      --calendar=ID         Calendar ID (default: primary)
      --days=N              Days ahead to include (default: 7)
      --max=N               Max results (default: 50)
      --query=TEXT          Free text filter

    event <eventId>         Get event details
      --calendar=ID         Calendar ID (default: primary)

    create                  Create an event
      --summary=TEXT        Title (required)
      --start=TIME          ISO datetime, or YYYY-MM-DD for all-day (required)
      --end=TIME            ISO datetime, or YYYY-MM-DD (required)
      --description=TEXT    Description
      --location=TEXT       Location
      --attendees=A,B       Attendee emails
      --timezone=TZ         IANA time zone (default: calendar's)
      --calendar=ID         Calendar ID (default: primary)

    delete <eventId>        Delete an event
      --calendar=ID         Calendar ID (default: primary)

Examples:
    google-calendar events --days=1
    google-calendar create --summary="Standup" --start=2026-01-12T09:00:00 --end=2026-01-12T09:15:00
    google-calendar create --summary="Offsite" --start=2026-02-02 --end=2026-02-04
    google-calendar delete abc123

Credentials: ~/.config/google-skill/credentials.json
Token:       .claude/google-skill.local.json (per-project)
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.common import build_parser, require, run, split_list
from google_services.calendar_service import CalendarService

TOOL = "google-calendar"


def create_parser():
    parser, subparsers = build_parser(TOOL, "List, read, create and delete calendar events")

    subparsers.add_parser("calendars", help="List your calendars")

    events = subparsers.add_parser("events", help="List upcoming events")
    events.add_argument("--calendar", type=str, default="primary")
    events.add_argument("--days", type=int, default=7)
    events.add_argument("--max", type=int, default=50)
    events.add_argument("--query", type=str)

    event = subparsers.add_parser("event", help="Get event details")
    event.add_argument("id", nargs="?")
    event.add_argument("--calendar", type=str, default="primary")

    create = subparsers.add_parser("create", help="Create an event")
    create.add_argument("--summary", type=str)
    create.add_argument("--start", type=str)
    create.add_argument("--end", type=str)
    create.add_argument("--description", type=str)
    create.add_argument("--location", type=str)
    create.add_argument("--attendees", type=str)
    create.add_argument("--timezone", type=str)
    create.add_argument("--calendar", type=str, default="primary")

    delete = subparsers.add_parser("delete", help="Delete an event")
    delete.add_argument("id", nargs="?")
    delete.add_argument("--calendar", type=str, default="primary")

    return parser


def handle_calendars(calendar: CalendarService, args):
    calendars = calendar.list_calendars()
    return {"calendars": calendars, "count": len(calendars)}


def handle_events(calendar: CalendarService, args):
    events = calendar.list_events(
        calendar_id=args.calendar,
        days=args.days,
        max_results=args.max,
        query=args.query,
    )
    return {"events": events, "count": len(events)}


def handle_event(calendar: CalendarService, args):
    event_id = require(args.id, f"Event ID required. Usage: {TOOL} event <eventId>")
    return calendar.get_event(event_id, calendar_id=args.calendar)


def handle_create(calendar: CalendarService, args):
    usage = f"Usage: {TOOL} create --summary=TEXT --start=TIME --end=TIME"
    return calendar.create_event(
        summary=require(args.summary, f"Summary required. {usage}"),
        start=require(args.start, f"Start time required. {usage}"),
        end=require(args.end, f"End time required. {usage}"),
        description=args.description,
        location=args.location,
        attendees=split_list(args.attendees),
        time_zone=args.timezone,
        calendar_id=args.calendar,
    )


def handle_delete(calendar: CalendarService, args):
    event_id = require(args.id, f"Event ID required. Usage: {TOOL} delete <eventId>")
    return calendar.delete_event(event_id, calendar_id=args.calendar)


HANDLERS = {
    "calendars": handle_calendars,
    "events": handle_events,
    "event": handle_event,
    "create": handle_create,
    "delete": handle_delete,
}


def main(argv=None):
    """Main entry point."""
    run(TOOL, __doc__, create_parser(), HANDLERS, CalendarService, argv)


if __name__ == "__main__":
    main()
