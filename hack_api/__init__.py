"""
Top-level package for the Hack24 API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``hack_api.app.main:app``.
"""

__all__ = []
