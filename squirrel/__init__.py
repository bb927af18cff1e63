"""A small threaded HTTP server with GET routes and static file serving."""

__version__ = "0.1.0"
__all__ = ["cli", "http", "server"]