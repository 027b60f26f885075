"""Infrastructure layer for the Rackspace SDK.

Holds the HTTP, serialization and observability adapters that the
configuration gates drive.
"""

from . import http, observability, serialization

__all__ = ["http", "observability", "serialization"]
