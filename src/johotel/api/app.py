"""ASGI entry point: ``uvicorn johotel.api.app:app``."""

from .factory import create_app

app = create_app()
