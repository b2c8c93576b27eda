"""Local preview server for a built site."""

import functools
import logging
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from vgcsite.core.models import SiteBuildError

logger = logging.getLogger(__name__)

# Response headers the production static host is configured with
STATIC_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Cache-Control": "public, max-age=31536000, immutable",
}


class StaticHeadersHandler(SimpleHTTPRequestHandler):
    """File handler that adds :data:`STATIC_HEADERS` to every response."""

    def end_headers(self) -> None:
        for name, value in STATIC_HEADERS.items():
            self.send_header(name, value)
        super().end_headers()

    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(directory: Path, port: int, host: str = "") -> ThreadingHTTPServer:
    """Bind a preview server for ``directory`` without starting it.

    Raises:
        SiteBuildError: The directory has not been built yet.
    """
    if not directory.is_dir():
        raise SiteBuildError(f"{directory} does not exist, run a build first")
    handler = functools.partial(StaticHeadersHandler, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


def serve(directory: Path, port: int) -> None:
    """Serve ``directory`` until interrupted."""
    with create_server(directory, port) as httpd:
        logger.info("Serving %s at http://localhost:%d", directory, httpd.server_address[1])
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped")
