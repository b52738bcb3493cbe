"""Command line entry point."""

from __future__ import annotations

import logging
import sys

from .config import ConfigError, load_config
from .server import Server

DEFAULT_CONFIG = "default.conf"


def main(argv: list[str] | None = None) -> int:
    """Load the configuration and run the server; return the exit status."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else DEFAULT_CONFIG
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        config = load_config(config_path)
        print(config.describe(), end="", flush=True)
        with Server(config) as server:
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except (ConfigError, OSError, RuntimeError) as exc:
        print(f"Fatal error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())