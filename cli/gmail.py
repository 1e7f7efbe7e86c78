#!/usr/bin/env python3
"""
Gmail CLI - List, search, read, send and label email

Usage:
    google-gmail <command> [id] [--flag=value]

Commands:
    auth                    Authenticate with Google (per-project token)

    list                    List recent messages
      --max=N               Max results (default: 20)
      --label=ID            Label to list (default: INBOX)

    search                  Search all mail
      --query=QUERY         Gmail search query (required)
      --max=N               Max results (default: 20)

    get <messageId>         Get a message with its body

    send                    Send a plain text email
      --to=ADDR             Recipient(s), comma separated (required)
      --subject=TEXT        Subject (required)
      --body=TEXT           Body (required)
      --cc=ADDR             CC recipient(s)
      --bcc=ADDR            BCC recipient(s)

    draft                   Save a draft (same flags as send)

    labels                  List labels

    modify <messageId>      Add or remove labels
      --add=L1,L2           Label IDs to add
      --remove=L3           Label IDs to remove (e.g. UNREAD to mark read)

Examples:
    google-gmail list --max=5
    google-gmail search --query="from:alice is:unread"
    google-gmail get 18c2f...
    google-gmail send --to=bob@example.com --subject="Hi" --body="Hello"
    google-gmail modify 18c2f... --remove=UNREAD

Credentials: ~/.config/google-skill/credentials.json
Token:       .claude/google-skill.local.json (per-project)
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.common import UsageError, build_parser, require, run, split_list
from google_services.gmail_service import GmailService

TOOL = "google-gmail"


def _add_compose_arguments(parser):
    parser.add_argument("--to", type=str)
    parser.add_argument("--subject", type=str)
    parser.add_argument("--body", type=str)
    parser.add_argument("--cc", type=str)
    parser.add_argument("--bcc", type=str)


def create_parser():
    parser, subparsers = build_parser(TOOL, "List, search, read, send and label email")

    list_cmd = subparsers.add_parser("list", help="List recent messages")
    list_cmd.add_argument("--max", type=int, default=20)
    list_cmd.add_argument("--label", type=str, default="INBOX")

    search = subparsers.add_parser("search", help="Search all mail")
    search.add_argument("--query", type=str)
    search.add_argument("--max", type=int, default=20)

    get = subparsers.add_parser("get", help="Get a message")
    get.add_argument("id", nargs="?")

    _add_compose_arguments(subparsers.add_parser("send", help="Send an email"))
    _add_compose_arguments(subparsers.add_parser("draft", help="Save a draft"))

    subparsers.add_parser("labels", help="List labels")

    modify = subparsers.add_parser("modify", help="Add or remove labels")
    modify.add_argument("id", nargs="?")
    modify.add_argument("--add", type=str)
    modify.add_argument("--remove", type=str)

    return parser


def _compose_fields(args, command):
    usage = f"Usage: {TOOL} {command} --to=ADDR --subject=TEXT --body=TEXT"
    return {
        "to": split_list(require(args.to, f"Recipient required. {usage}")),
        "subject": require(args.subject, f"Subject required. {usage}"),
        "body": require(args.body, f"Body required. {usage}"),
        "cc": split_list(args.cc) or None,
        "bcc": split_list(args.bcc) or None,
    }


def handle_list(gmail: GmailService, args):
    messages = gmail.list_messages(max_results=args.max, label_id=args.label)
    return {"messages": messages, "count": len(messages)}


def handle_search(gmail: GmailService, args):
    query = require(args.query, f"Query required. Usage: {TOOL} search --query=QUERY")
    messages = gmail.search_messages(query, max_results=args.max)
    return {"messages": messages, "count": len(messages)}


def handle_get(gmail: GmailService, args):
    message_id = require(args.id, f"Message ID required. Usage: {TOOL} get <messageId>")
    return gmail.get_message(message_id)


def handle_send(gmail: GmailService, args):
    return gmail.send_message(**_compose_fields(args, "send"))


def handle_draft(gmail: GmailService, args):
    return gmail.create_draft(**_compose_fields(args, "draft"))


def handle_labels(gmail: GmailService, args):
    labels = gmail.list_labels()
    return {"labels": labels, "count": len(labels)}


def handle_modify(gmail: GmailService, args):
    usage = f"Usage: {TOOL} modify <messageId> --add=LABELS --remove=LABELS"
    message_id = require(args.id, f"Message ID required. {usage}")
    add = split_list(args.add)
    remove = split_list(args.remove)
    if not add and not remove:
        raise UsageError(f"Labels to add or remove required. {usage}")
    return gmail.modify_labels(message_id, add=add, remove=remove)


HANDLERS = {
    "list": handle_list,
    "search": handle_search,
    "get": handle_get,
    "send": handle_send,
    "draft": handle_draft,
    "labels": handle_labels,
    "modify": handle_modify,
}


def main(argv=None):
    """Main entry point."""
    run(TOOL, __doc__, create_parser(), HANDLERS, GmailService, argv)


if __name__ == "__main__":
    main()
