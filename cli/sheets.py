#!/usr/bin/env python3
"""
Sheets CLI - Read and write Google Sheets cell values

Usage:
    google-sheets <command> [id] [--flag=value]

Commands:
    auth                        Authenticate with Google (per-project token)

    list                        List recent spreadsheets
      --max=N                   Max results (default: 20)

    get <spreadsheetId>         Get title and sheet (tab) list

    read <spreadsheetId>        Read values
      --range=A1                Range, e.g. "Sheet1!A1:C10" (required)

    write <spreadsheetId>       Overwrite values
      --range=A1                Start range (required)
      --values=JSON             Rows, e.g. '[["a", 1], ["b", 2]]' (required)
      --raw                     Store input as-is instead of parsing it

    append <spreadsheetId>      Append rows after the table in range
      --range=A1                Table range (required)
      --values=JSON             Rows (required)
      --raw                     Store input as-is instead of parsing it

    clear <spreadsheetId>       Clear values in a range
      --range=A1                Range (required)

    create                      Create a spreadsheet
      --title=TEXT              Title (required)

Examples:
    google-sheets read 1AbC... --range="Sheet1!A1:D20"
    google-sheets append 1AbC... --range=Sheet1 --values='[["2026-01-12", 42]]'

Credentials: ~/.config/google-skill/credentials.json
Token:       .claude/google-skill.local.json (per-project)
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.common import build_parser, require, run
from google_services.sheets_service import SheetsService, parse_values

TOOL = "google-sheets"


def create_parser():
    parser, subparsers = build_parser(TOOL, "Read and write Google Sheets cell values")

    list_cmd = subparsers.add_parser("list", help="List recent spreadsheets")
    list_cmd.add_argument("--max", type=int, default=20)

    get = subparsers.add_parser("get", help="Get spreadsheet metadata")
    get.add_argument("id", nargs="?")

    read = subparsers.add_parser("read", help="Read values")
    read.add_argument("id", nargs="?")
    read.add_argument("--range", type=str)

    for name, help_text in (("write", "Overwrite values"), ("append", "Append rows")):
        cmd = subparsers.add_parser(name, help=help_text)
        cmd.add_argument("id", nargs="?")
        cmd.add_argument("--range", type=str)
        cmd.add_argument("--values", type=str)
        cmd.add_argument("--raw", action="store_true")

    clear = subparsers.add_parser("clear", help="Clear values")
    clear.add_argument("id", nargs="?")
    clear.add_argument("--range", type=str)

    create = subparsers.add_parser("create", help="Create a spreadsheet")
    create.add_argument("--title", type=str)

    return parser


def _spreadsheet_and_range(args, command, extra=""):
    usage = f"Usage: {TOOL} {command} <spreadsheetId> --range=A1{extra}"
    spreadsheet_id = require(args.id, f"Spreadsheet ID required. {usage}")
    range_name = require(args.range, f"Range required. {usage}")
    return spreadsheet_id, range_name, usage


def handle_list(sheets: SheetsService, args):
    spreadsheets = sheets.list_spreadsheets(max_results=args.max)
    return {"spreadsheets": spreadsheets, "count": len(spreadsheets)}


def handle_get(sheets: SheetsService, args):
    spreadsheet_id = require(args.id, f"Spreadsheet ID required. Usage: {TOOL} get <spreadsheetId>")
    return sheets.get_spreadsheet(spreadsheet_id)


def handle_read(sheets: SheetsService, args):
    spreadsheet_id, range_name, _ = _spreadsheet_and_range(args, "read")
    return sheets.read_range(spreadsheet_id, range_name)


def handle_write(sheets: SheetsService, args):
    spreadsheet_id, range_name, usage = _spreadsheet_and_range(args, "write", " --values=JSON")
    values = parse_values(require(args.values, f"Values required. {usage}"))
    return sheets.write_range(spreadsheet_id, range_name, values, raw=args.raw)


def handle_append(sheets: SheetsService, args):
    spreadsheet_id, range_name, usage = _spreadsheet_and_range(args, "append", " --values=JSON")
    values = parse_values(require(args.values, f"Values required. {usage}"))
    return sheets.append_rows(spreadsheet_id, range_name, values, raw=args.raw)


def handle_clear(sheets: SheetsService, args):
    spreadsheet_id, range_name, _ = _spreadsheet_and_range(args, "clear")
    return sheets.clear_range(spreadsheet_id, range_name)


def handle_create(sheets: SheetsService, args):
    title = require(args.title, f"Title required. Usage: {TOOL} create --title=TEXT")
    return sheets.create_spreadsheet(title)


HANDLERS = {
    "list": handle_list,
    "get": handle_get,
    "read": handle_read,
    "write": handle_write,
    "append": handle_append,
    "clear": handle_clear,
    "create": handle_create,
}


def main(argv=None):
    """Main entry point."""
    run(TOOL, __doc__, create_parser(), HANDLERS, SheetsService, argv)


if __name__ == "__main__":
    main()
