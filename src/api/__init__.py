"""
Filter List Editor - API Layer

HTTP presentation over the application runtime. Every mutating endpoint
becomes one event; every response renders a snapshot.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
