"""
Application package.

``core`` holds configuration, storage, errors and the authorization
gate; ``schemas`` the request documents; ``services`` the per-collection
logic and the event and identity clients; ``api`` the routers.
"""

from .main import app  # noqa: F401
