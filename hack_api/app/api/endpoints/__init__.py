"""
Endpoint modules.

Each module exposes a ``router`` for one collection.  Handlers resolve
the authorization dependency first, then hand the raw body to the
service, which validates it; they never touch SQL themselves.
"""
