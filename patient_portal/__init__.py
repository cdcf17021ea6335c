"""Patient portal: a Redis-backed patient service and the front controller that proxies to it."""

from .app import create_app

__all__ = ["create_app"]
