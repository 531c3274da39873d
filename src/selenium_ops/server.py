"""Serve a built output directory on localhost for browser and HTTP checks."""

from __future__ import annotations

import functools
import threading
from contextlib import contextmanager
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        pass


@contextmanager
def serve_directory(directory: Path, port: int = 0):
    """Yield the base URL of a static server rooted at `directory`.

    Port 0 picks a free port. The server thread stops when the block exits.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Nothing to serve, {directory} does not exist. Run generate.py first.")

    handler = functools.partial(_QuietHandler, directory=str(directory))
    server = ThreadingHTTPServer(("127.0.0.1", port), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, bound_port = server.server_address[:2]
        yield f"http://{host}:{bound_port}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
