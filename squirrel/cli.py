"""Command line entry point that serves a static directory."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence

from squirrel.server import Server


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the server until interrupted."""
    parser = argparse.ArgumentParser(prog="squirrel", description="Serve files over HTTP.")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    parser.add_argument(
        "--static-dir", default="public", help="directory to serve files from"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)

    server = Server(args.port)
    server.set_static_dir(args.static_dir)
    server.start()
    print(f"server running at http://localhost:{server.port}/")
    print("press ctrl+c to end")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("stopping server...")
    finally:
        server.stop()
    print("server stopped.. bai")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())