#!/usr/bin/env python3
"""
OAuth Callback Server - Receives the authorization redirect on localhost.

Google redirects the browser to http://localhost:<port>/callback?code=...
after consent. This module serves that one redirect and hands the
authorization code back to the caller.
"""

import html
import logging
import time
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Callable, Optional
from urllib.parse import urlparse, parse_qs

logger = logging.getLogger(__name__)

SUCCESS_PAGE = """
<html>
  <body style="font-family: system-ui; display: flex; justify-content: center; align-items: center; height: 100vh; margin: 0;">
    <div style="text-align: center;">
      <h1 style="color: #22c55e;">&#10003; Authentication Successful!</h1>
      <p>You can close this window and return to the terminal.</p>
    </div>
  </body>
</html>
"""

ERROR_PAGE = "<h1>Error: {error}</h1><p>You can close this window.</p>"


class CallbackHandler(BaseHTTPRequestHandler):
    """Captures ?code= or ?error= from the OAuth redirect."""

    def do_GET(self):
        query = parse_qs(urlparse(self.path).query)
        code = query.get("code", [None])[0]
        error = query.get("error", [None])[0]

        if error:
            self._respond(400, ERROR_PAGE.format(error=html.escape(error)))
            self.server.oauth_error = error
            return

        if code:
            self._respond(200, SUCCESS_PAGE)
            self.server.oauth_code = code
            return

        self.send_response(404)
        self.end_headers()

    def _respond(self, status: int, body: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "text/html")
        self.end_headers()
        self.wfile.write(body.encode("utf-8"))

    def log_message(self, format, *args):
        logger.debug("callback: " + format, *args)


def describe_timeout(seconds: int) -> str:
    """Human readable timeout, e.g. '5 minutes'."""
    if seconds >= 60 and seconds % 60 == 0:
        value, unit = seconds // 60, "minute"
    else:
        value, unit = seconds, "second"
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def wait_for_authorization_code(
    port: int,
    timeout: int,
    on_ready: Optional[Callable[[], None]] = None,
    host: str = "localhost",
) -> str:
    """
    Listen on host:port until the OAuth redirect arrives.

    Requests carrying neither ``code`` nor ``error`` get a 404 and the
    server keeps waiting.

    Args:
        port: Port registered in the redirect URI
        timeout: Seconds to wait in total
        on_ready: Called once the socket is bound (e.g. to open the browser)
        host: Interface to bind

    Returns:
        The authorization code

    Raises:
        RuntimeError: If Google redirected with an error
        TimeoutError: If nothing usable arrived in time
    """
    server = HTTPServer((host, port), CallbackHandler)
    server.oauth_code = None
    server.oauth_error = None
    deadline = time.monotonic() + timeout

    try:
        if on_ready is not None:
            on_ready()

        while server.oauth_code is None and server.oauth_error is None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"Authentication timeout ({describe_timeout(timeout)})")
            server.timeout = remaining
            server.handle_request()
    finally:
        server.server_close()

    if server.oauth_error:
        raise RuntimeError(server.oauth_error)

    logger.info("Received authorization code on port %d", port)
    return server.oauth_code
