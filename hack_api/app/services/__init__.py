"""
Service layer.

Each collection has a service class whose async classmethods validate a
request document, read or write SQLite through the ``Database`` handle
and return a ready-to-send JSON:API document.  Successful writes are
announced through the ``EventBroadcaster``.  Endpoints stay thin and only
translate HTTP into service calls.
"""
