"""Reading the server configuration file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_ROOT = "./www"

# Directives that open or close a block and so carry no semicolon.
_BLOCK_TOKENS = frozenset({"location", "server", "}"})
_LEADING_INT = re.compile(r"[+-]?\d+")


class ConfigError(Exception):
    """Raised when the configuration cannot be read."""


@dataclass
class Route:
    """A location block and the methods it allows."""

    methods: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Settings of one server block."""

    port: int = DEFAULT_PORT
    root: str = DEFAULT_ROOT
    routes: dict[str, Route] = field(default_factory=dict)

    def describe(self) -> str:
        """Return a human-readable summary of the parsed settings."""
        lines = [
            "[Config] Parsed settings:",
            f"  Port: {self.port}",
            f"  Root: {self.root}",
        ]
        for prefix in sorted(self.routes):
            methods = "".join(f"{method} " for method in self.routes[prefix].methods)
            lines.append(f"  Route: {prefix} Methods: {methods}")
        return "\n".join(lines) + "\n"


def _strip_semicolon(word: str) -> str:
    return word[:-1] if word.endswith(";") else word


def parse_config(lines: Iterable[str]) -> Config:
    """Build a Config from the lines of a configuration file."""
    config = Config()
    current_route = ""
    in_location = False

    for raw_line in lines:
        line = raw_line.rstrip("\n")
        if not line.strip(" \t\n\r"):
            continue
        tokens = line.split()
        directive = tokens[0] if tokens else ""
        args = tokens[1:]

        if ";" not in line and directive not in _BLOCK_TOKENS:
            logger.warning("Config warning: missing ';' at end of line: %s", line)

        if directive == "listen":
            if args:
                match = _LEADING_INT.match(args[0])
                if match:
                    config.port = int(match.group())
        elif directive == "root":
            if args:
                config.root = _strip_semicolon(args[0])
        elif directive == "location":
            if args:
                current_route = args[0]
            in_location = True
            config.routes[current_route] = Route()
        elif directive == "}":
            in_location = False
        elif directive == "methods" and in_location:
            config.routes[current_route].methods.extend(
                _strip_semicolon(method) for method in args
            )

    return config


def load_config(path: str | Path) -> Config:
    """Read and parse the configuration file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return parse_config(handle)
    except OSError as exc:
        raise ConfigError("Cannot open config file") from exc