"""A small HTTP/1.1 static file server with configurable routes and uploads."""

__version__ = "0.1.0"
__all__ = ["__version__"]