"""ASGI application object; serve it with any ASGI server, e.g. ``uvicorn distdeploy.main:app``."""

from __future__ import annotations

from .factory import create_app

app = create_app()
