#!/usr/bin/env python3
"""
Docs CLI - Read Google Docs as plain text and add text to them

Usage:
    google-docs <command> [id] [--flag=value]

Commands:
    auth                        Authenticate with Google (per-project token)

    list                        List recent documents
      --max=N                   Max results (default: 20)

    get <documentId>            Get title and plain text content

    create                      Create a document
      --title=TEXT              Title (required)
      --content=TEXT            Initial text

    append <documentId>         Append text at the end
      --content=TEXT            Text to append (required)

    replace <documentId>        Replace all occurrences of a string
      --find=TEXT               Text to find (required)
      --replace=TEXT            Replacement (required, may be empty via --replace=)
      --match-case              Case sensitive match

Examples:
    google-docs get 1xYz...
    google-docs create --title="Notes" --content="First line"
    google-docs append 1xYz... --content="$(date): done"

Credentials: ~/.config/google-skill/credentials.json
Token:       .claude/google-skill.local.json (per-project)
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.common import UsageError, build_parser, require, run
from google_services.docs_service import DocsService

TOOL = "google-docs"


def create_parser():
    parser, subparsers = build_parser(TOOL, "Read Google Docs as plain text and add text to them")

    list_cmd = subparsers.add_parser("list", help="List recent documents")
    list_cmd.add_argument("--max", type=int, default=20)

    get = subparsers.add_parser("get", help="Get document content")
    get.add_argument("id", nargs="?")

    create = subparsers.add_parser("create", help="Create a document")
    create.add_argument("--title", type=str)
    create.add_argument("--content", type=str)

    append = subparsers.add_parser("append", help="Append text")
    append.add_argument("id", nargs="?")
    append.add_argument("--content", type=str)

    replace = subparsers.add_parser("replace", help="Replace text")
    replace.add_argument("id", nargs="?")
    replace.add_argument("--find", type=str)
    replace.add_argument("--replace", type=str)
    replace.add_argument("--match-case", action="store_true")

    return parser


def handle_list(docs: DocsService, args):
    documents = docs.list_documents(max_results=args.max)
    return {"documents": documents, "count": len(documents)}


def handle_get(docs: DocsService, args):
    document_id = require(args.id, f"Document ID required. Usage: {TOOL} get <documentId>")
    return docs.get_document(document_id)


def handle_create(docs: DocsService, args):
    title = require(args.title, f"Title required. Usage: {TOOL} create --title=TEXT")
    return docs.create_document(title, content=args.content)


def handle_append(docs: DocsService, args):
    usage = f"Usage: {TOOL} append <documentId> --content=TEXT"
    document_id = require(args.id, f"Document ID required. {usage}")
    content = require(args.content, f"Content required. {usage}")
    return docs.append_text(document_id, content)


def handle_replace(docs: DocsService, args):
    usage = f"Usage: {TOOL} replace <documentId> --find=TEXT --replace=TEXT"
    document_id = require(args.id, f"Document ID required. {usage}")
    find = require(args.find, f"Find text required. {usage}")
    if args.replace is None:
        raise UsageError(f"Replacement text required. {usage}")
    return docs.replace_text(document_id, find, args.replace, match_case=args.match_case)


HANDLERS = {
    "list": handle_list,
    "get": handle_get,
    "create": handle_create,
    "append": handle_append,
    "replace": handle_replace,
}


def main(argv=None):
    """Main entry point."""
    run(TOOL, __doc__, create_parser(), HANDLERS, DocsService, argv)


if __name__ == "__main__":
    main()
