"""Command-line launcher for the deployment simulator API.

    python -m webb_deploy.web.serve [--port 8000] [--no-open]

Picks the first free port at or after ``--port``, runs uvicorn on
``webb_deploy.web.main:app`` and opens the interactive docs page.
"""
from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
import webbrowser

from webb_deploy.logging_config import setup_logging

logger = logging.getLogger(__name__)


_WILDCARD_HOSTS = frozenset({"", "0.0.0.0", "::"})


def _browser_host(host: str) -> str:
    """Loopback address for the docs URL when the server binds every interface."""
    return "127.0.0.1" if host in _WILDCARD_HOSTS else host


def _port_is_free(host: str, port: int) -> bool:
    try:
        with socket.create_server((host, port), reuse_port=False):
            return True
    except OSError as exc:
        logger.debug("Port %d on %s unavailable: %s", port, host, exc)
        return False


def find_available_port(host: str, start_port: int, *, max_tries: int = 50) -> tuple[int, bool]:
    """First bindable port in ``[start_port, start_port + max_tries)`` and whether it moved."""
    if max_tries < 1:
        raise ValueError(f"max_tries must be >= 1, got {max_tries}")
    for port in range(start_port, start_port + max_tries):
        if _port_is_free(host, port):
            return port, port != start_port
    raise RuntimeError(f"No available port on {host} in {start_port}..{start_port + max_tries - 1}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m webb_deploy.web.serve",
        description="Serve the deployment simulator API.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to listen on (default: %(default)s).")
    parser.add_argument("--port", type=int, default=8000, help="Starting port (default: %(default)s).")
    parser.add_argument("--reload", action="store_true", help="Enable uvicorn --reload.")
    parser.add_argument("--no-open", action="store_true", help="Skip opening the browser automatically.")
    parser.add_argument("--debug", action="store_true", help="Log playback transitions.")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    try:
        chosen_port, did_fallback = find_available_port(args.host, args.port, max_tries=50)
    except (RuntimeError, ValueError) as exc:
        print(f"Failed to select a free port: {exc}", file=sys.stderr)
        return 2

    url = f"http://{_browser_host(args.host)}:{chosen_port}"
    if did_fallback:
        logger.info("Serving on %s (selected because %s was in use).", url, args.port)
    else:
        logger.info("Serving on %s.", url)

    if not args.no_open:
        threading.Timer(1.0, webbrowser.open, args=(f"{url}/docs",)).start()

    import uvicorn

    try:
        uvicorn.run(
            "webb_deploy.web.main:app",
            host=args.host,
            port=chosen_port,
            reload=args.reload,
        )
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
