#!/usr/bin/env python3
"""
Shared CLI plumbing - JSON envelope, argument parsing and error handling.

Every tool prints exactly one JSON object on stdout:

    {"success": true, "data": {...}}
    {"success": false, "error": "message"}

and exits 1 on failure. Logs and interactive auth messages go to stderr.
"""

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from config import get_config
from google_services.auth import GoogleAuth

logger = logging.getLogger(__name__)

HELP_COMMANDS = ("help", "--help", "-h")
HELP_FLAGS = ("--help", "-h")

Handler = Callable[[Any, argparse.Namespace], Dict[str, Any]]


class UsageError(Exception):
    """Bad or missing command line arguments."""


class JsonArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting 2."""

    def error(self, message):
        raise UsageError(message)


def output(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def fail(message: str) -> None:
    """Print a failure envelope and exit 1."""
    output({"success": False, "error": message})
    sys.exit(1)


def require(value: Optional[str], message: str) -> str:
    if not value:
        raise UsageError(message)
    return value


def split_list(value: Optional[str]) -> List[str]:
    """'a, b,c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _is_dash_id(arg: str) -> bool:
    return arg.startswith("-") and not arg.startswith("--") and arg != "-"


def separate_dash_ids(argv: Sequence[str]) -> List[str]:
    """
    Move positional IDs that begin with '-' behind a '--' separator.

    YouTube IDs may start with '-' (e.g. '-FlxM_0S2lA'); argparse would
    otherwise read them as unknown short options. Flags use --name=value.
    """
    argv = list(argv)
    if "--" in argv:
        return argv
    dash_ids = [arg for arg in argv if _is_dash_id(arg)]
    if not dash_ids:
        return argv
    return [arg for arg in argv if not _is_dash_id(arg)] + ["--"] + dash_ids


def describe_error(
error: BaseException) -> str:
    """
    One-line message for an exception.

    For API errors the message Google put in the response body is used.
    """
    if isinstance(error, HttpError):
        try:
            content = json.loads(error.content.decode("utf-8"))
            return content["error"]["message"]
        except (ValueError, KeyError, TypeError, AttributeError):
            return getattr(error, "reason", None) or str(error)

    if isinstance(error, RefreshError):
        return f"{error}. The token may be expired or revoked; run the auth command again."

    return str(error) or error.__class__.__name__


def configure_logging() -> None:
    level_name = get_config().logging.level
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser(tool: str, description: str) -> Tuple[JsonArgumentParser, Any]:
    """
    Create a tool parser with an ``auth`` command already registered.

    Returns:
        (parser, subparsers) so the tool can add its own commands
    """
    parser = JsonArgumentParser(prog=tool, description=description)
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("auth", help="Authenticate with Google and save a project token")
    return parser, subparsers


def run(
    tool: str,
    usage: str,
    parser: JsonArgumentParser,
    handlers: Dict[str, Handler],
    service_factory: Callable[[GoogleAuth], Any],
    argv: Optional[Sequence[str]] = None,
) -> None:
    """
    Parse argv, dispatch to a command handler, print the envelope.

    Args:
        tool: Program name used in messages (e.g. 'google-youtube')
        usage: Text printed for help
        parser: Parser built with build_parser()
        handlers: Command name -> handler(service, args) returning data
        service_factory: Builds the API service wrapper from a GoogleAuth
        argv: Arguments (sys.argv[1:] by default)
    """
    argv = sys.argv[1:] if argv is None else list(argv)

    if not argv or argv[0] in HELP_COMMANDS or any(arg in HELP_FLAGS for arg in argv[1:]):
        print(usage)
        sys.exit(0)

    command = argv[0]
    if command != "auth" and command not in handlers:
        fail(f"Unknown command: {command}. Run with --help for usage.")

    try:
        configure_logging()
        args = parser.parse_args(separate_dash_ids(argv))
        auth = GoogleAuth(tool_name=tool)

        if command == "auth":
            token_path = auth.authorize()
            data = {"tokenPath": str(token_path), "scopes": auth.scopes}
        else:
            data = handlers[command](service_factory(auth), args)
    except Exception as e:
        logger.debug("%s %s failed", tool, command, exc_info=True)
        fail(describe_error(e))

    output({"success": True, "data": data})
